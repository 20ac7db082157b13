from metascan.models.record import CardEntry, Deck, Record, Tournament
from metascan.models.scan import ScanOptions, SearchOptions
from metascan.models.search import CardCriterion, CriterionMatch, DeckMatch, RankedCard

__all__ = [
    "CardCriterion",
    "CardEntry",
    "CriterionMatch",
    "Deck",
    "DeckMatch",
    "RankedCard",
    "Record",
    "ScanOptions",
    "SearchOptions",
    "Tournament",
]
