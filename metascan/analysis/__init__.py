from metascan.analysis.aggregate import aggregate_weights, merge_weights, process_file, rank_cards
from metascan.analysis.dates import date_key, days_since_epoch, extract_date_from_path, today_days
from metascan.analysis.decay import decay_weight, file_age, is_too_old, record_weight
from metascan.analysis.search import deck_matches_criteria, search_decks, search_file

__all__ = [
    "aggregate_weights",
    "date_key",
    "days_since_epoch",
    "decay_weight",
    "deck_matches_criteria",
    "extract_date_from_path",
    "file_age",
    "is_too_old",
    "merge_weights",
    "process_file",
    "rank_cards",
    "record_weight",
    "search_decks",
    "search_file",
    "today_days",
]
