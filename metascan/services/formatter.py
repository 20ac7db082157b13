"""
Plain-text rendering of ranking and search results.

Ranking lines are machine-parseable: "<weight, 2 decimals> <card name>".
"""

from collections.abc import Iterable

from metascan.models.record import CardEntry
from metascan.models.search import CriterionMatch, DeckMatch, RankedCard


def format_ranked_card(card: RankedCard) -> str:
    return f"{card.weight:.2f} {card.name}"


def format_ranked_cards(cards: Iterable[RankedCard]) -> str:
    """One ranked card per line, in rank order."""
    return "\n".join(format_ranked_card(card) for card in cards)


def _format_criterion(match: CriterionMatch) -> str:
    requested = "any" if match.requested is None else str(match.requested)
    return (
        f"  {match.name}: requested {requested}, "
        f"main {match.found_main}, side {match.found_side}"
    )


def _format_board(title: str, entries: list[CardEntry]) -> list[str]:
    if not entries:
        return []
    lines = [title]
    lines.extend(f"{entry.count} {entry.name}" for entry in entries)
    return lines


def format_deck_match(match: DeckMatch) -> str:
    """
    Render one matching deck.

    Layout:
        <date> <format> - <tournament>
        Player: <player> (<result>)
        <url>
          <criterion>: requested N, main N, side N
        Deck
        4 Lightning Bolt
        ...
        Sideboard
        ...
    """
    header = f"{match.date} {match.format}"
    if match.tournament:
        header += f" - {match.tournament}"

    lines = [header]

    player = match.player or "unknown player"
    lines.append(f"Player: {player} ({match.result})" if match.result else f"Player: {player}")

    if match.url:
        lines.append(match.url)

    lines.extend(_format_criterion(c) for c in match.matches)
    lines.extend(_format_board("Deck", match.mainboard))

    sideboard = _format_board("Sideboard", match.sideboard)
    if sideboard:
        lines.append("")
        lines.extend(sideboard)

    return "\n".join(lines)


def format_deck_matches(matches: list[DeckMatch]) -> str:
    """Render every match, separated by blank lines."""
    if not matches:
        return "No decks found matching your criteria."
    return "\n\n".join(format_deck_match(m) for m in matches)
