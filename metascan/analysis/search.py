"""
Deck search over tournament records.

Finds every recorded deck that contains all of a set of cards, optionally in
specific quantities.

Matching rules per criterion:
- No count given: the card must appear at least once
- Count given, exact=False: at least that many copies
- Count given, exact=True: exactly that many copies

Sideboard copies count toward a criterion only when include_sideboard is
set, but main and side counts are always reported on a match.
"""

import logging
from collections.abc import Iterable, Sequence
from functools import partial
from itertools import chain

from metascan.analysis.dates import date_key, extract_date_from_path
from metascan.analysis.decay import file_age, is_too_old
from metascan.analysis.pool import scan_files
from metascan.models.record import CardEntry, Deck
from metascan.models.scan import SearchOptions
from metascan.models.search import CardCriterion, CriterionMatch, DeckMatch
from metascan.parsers.record import load_record

logger = logging.getLogger(__name__)


def board_counts(entries: Iterable[CardEntry]) -> dict[str, int]:
    """Lower-cased card name -> total copies; repeated lines are summed."""
    counts: dict[str, int] = {}
    for entry in entries:
        key = entry.name.lower()
        counts[key] = counts.get(key, 0) + entry.count
    return counts


def _criterion_satisfied(criterion: CardCriterion, found: int, exact: bool) -> bool:
    if criterion.count is None:
        return found > 0
    if exact:
        return found == criterion.count
    return found >= criterion.count


def deck_matches_criteria(
    deck: Deck,
    criteria: Sequence[CardCriterion],
    exact: bool = False,
    include_sideboard: bool = False,
) -> list[CriterionMatch] | None:
    """
    Check a deck against every criterion (AND semantics).

    Args:
        deck: Deck to test
        criteria: Cards the deck must contain
        exact: Require exactly the requested count instead of at least
        include_sideboard: Count sideboard copies toward the requirement

    Returns:
        Per-criterion found counts if all criteria pass, otherwise None
    """
    main = board_counts(deck.mainboard)
    side = board_counts(deck.sideboard)

    matches: list[CriterionMatch] = []
    for criterion in criteria:
        key = criterion.name.lower()
        found_main = main.get(key, 0)
        found_side = side.get(key, 0)

        found = found_main + found_side if include_sideboard else found_main
        if not _criterion_satisfied(criterion, found, exact):
            return None

        matches.append(
            CriterionMatch(
                name=criterion.name,
                requested=criterion.count,
                found_main=found_main,
                found_side=found_side,
            )
        )

    return matches


def search_file(path: str, options: SearchOptions) -> list[DeckMatch]:
    """
    Find matching decks in one record file.

    Returns:
        Matching decks in record order. Empty if the record is undated, too
        old, unreadable, malformed or in another format.
    """
    date = extract_date_from_path(path)
    if date is None:
        return []

    if is_too_old(file_age(date, options.today), options.max_age):
        return []

    record = load_record(path, options.formats)
    if record is None:
        return []

    key = date_key(*date)
    results: list[DeckMatch] = []

    for deck in record.decks:
        matches = deck_matches_criteria(
            deck, options.criteria, options.exact, options.include_sideboard
        )
        if matches is None:
            continue

        results.append(
            DeckMatch(
                date=key,
                path=path,
                format=record.tournament.format or "",
                tournament=record.tournament.name,
                player=deck.player,
                result=deck.result,
                url=deck.url,
                mainboard=list(deck.mainboard),
                sideboard=list(deck.sideboard),
                matches=matches,
            )
        )

    return results


def search_decks(
    paths: Sequence[str],
    options: SearchOptions,
    max_results: int,
    workers: int = 0,
) -> list[DeckMatch]:
    """
    Search a corpus for decks matching every criterion.

    Args:
        paths: Record files to scan
        options: Format filter, age cutoff and match criteria
        max_results: Maximum number of decks to return
        workers: Worker processes (0 = one per CPU)

    Returns:
        Matching decks, most recent first
    """
    per_file = scan_files(partial(search_file, options=options), [str(p) for p in paths], workers)
    found = list(chain.from_iterable(per_file))
    logger.info("Found %d matching decks in %d files", len(found), len(paths))

    found.sort(key=lambda match: match.date, reverse=True)
    return found[:max_results]
