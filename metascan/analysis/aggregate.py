"""
Weighted card-play aggregation.

Ranks the most played cards across a corpus of tournament records. Every
copy of a card in a deck (mainboard and sideboard) counts once, scaled by the
record's recency weight.

Data flow:
1. Per file (in parallel): date from path -> age/weight -> record -> local totals
2. Merge local totals by summing per card name
3. Sort by weight descending and keep the top N
4. Optionally append linked back faces after their front faces
"""

import logging
from collections.abc import Mapping, Sequence
from functools import partial, reduce

from metascan.analysis.dates import extract_date_from_path
from metascan.analysis.decay import file_age, is_too_old, record_weight
from metascan.analysis.pool import scan_files
from metascan.models.scan import ScanOptions
from metascan.models.search import RankedCard
from metascan.parsers.record import load_record
from metascan.services.face_resolver import expand_back_faces

logger = logging.getLogger(__name__)


def process_file(path: str, options: ScanOptions) -> dict[str, float]:
    """
    Compute one record's weighted card totals.

    Returns:
        Card name -> count * weight. Empty if the record is undated, too old,
        unreadable, malformed or in another format.
    """
    cards: dict[str, float] = {}

    date = extract_date_from_path(path)
    if date is None:
        return cards

    age = file_age(date, options.today)
    if is_too_old(age, options.max_age):
        return cards

    weight = record_weight(age, options.half_life, options.use_weight)

    record = load_record(path, options.formats)
    if record is None:
        return cards

    for deck in record.decks:
        for entry in (*deck.mainboard, *deck.sideboard):
            cards[entry.name] = cards.get(entry.name, 0.0) + entry.count * weight

    return cards


def merge_weights(acc: dict[str, float], part: Mapping[str, float]) -> dict[str, float]:
    """
    Add `part` into `acc` (sum by key, union of keys).

    Keys are exact card-name strings; names that differ only in case are not
    merged. Mutates and returns `acc`.
    """
    for name, weight in part.items():
        acc[name] = acc.get(name, 0.0) + weight
    return acc


def aggregate_weights(
    paths: Sequence[str],
    options: ScanOptions,
    workers: int = 0,
) -> dict[str, float]:
    """Scan every file and merge the per-file totals into one map."""
    parts = scan_files(partial(process_file, options=options), [str(p) for p in paths], workers)
    return reduce(merge_weights, parts, {})


def rank_cards(
    paths: Sequence[str],
    options: ScanOptions,
    top_n: int,
    back_faces: Mapping[str, str] | None = None,
    workers: int = 0,
) -> list[RankedCard]:
    """
    Rank the most played cards across a corpus.

    Args:
        paths: Record files to scan
        options: Format filter, aging and weighting settings
        top_n: Number of cards to keep (before back-face expansion)
        back_faces: Front-face -> back-face index; None skips expansion
        workers: Worker processes (0 = one per CPU)

    Returns:
        RankedCard list, heaviest first. Equal weights come out in no
        particular order.
    """
    totals = aggregate_weights(paths, options, workers)
    logger.info("Aggregated %d distinct cards from %d files", len(totals), len(paths))

    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    ranked = [RankedCard(name=name, weight=weight) for name, weight in ordered[:top_n]]

    if back_faces:
        ranked = expand_back_faces(ranked, back_faces)

    return ranked
