from dataclasses import dataclass, field

from metascan.models.record import CardEntry


@dataclass(frozen=True, slots=True)
class CardCriterion:
    """
    A deck search predicate.

    Attributes:
        name: Card name, matched case-insensitively
        count: Required copies, or None for "at least one"
    """

    name: str
    count: int | None = None


@dataclass(frozen=True, slots=True)
class CriterionMatch:
    """How a matching deck satisfied one criterion."""

    name: str
    requested: int | None
    found_main: int
    found_side: int


@dataclass
class DeckMatch:
    """
    A deck that satisfied every search criterion.

    Attributes:
        date: Record date from its storage path, as YYYY-MM-DD
        path: Record file the deck came from
        format: Tournament format as declared in the record
        tournament: Tournament display name, if any
        player: Player name, if any
        result: Normalized finish/result string, if any
        url: Source URL, if any
        mainboard: Full mainboard of the deck
        sideboard: Full sideboard of the deck
        matches: Per-criterion found counts, in criterion order
    """

    date: str
    path: str
    format: str
    tournament: str | None = None
    player: str | None = None
    result: str | None = None
    url: str | None = None
    mainboard: list[CardEntry] = field(default_factory=list)
    sideboard: list[CardEntry] = field(default_factory=list)
    matches: list[CriterionMatch] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RankedCard:
    """A card and its accumulated recency-weighted play count."""

    name: str
    weight: float
