from dataclasses import dataclass, field

from metascan.models.search import CardCriterion


@dataclass(frozen=True)
class ScanOptions:
    """
    Per-file settings shared by every worker in a ranking scan.

    Attributes:
        formats: Format patterns; a record counts if its format contains any of them
        today: Day number that ages are measured against (see analysis.dates)
        max_age: Records older than this many days are skipped
        half_life: Days after which a record's weight halves
        use_weight: If False, every in-range record weighs 1.0
    """

    formats: tuple[str, ...]
    today: int
    max_age: int
    half_life: float = 45.0
    use_weight: bool = True

    def __post_init__(self) -> None:
        if self.use_weight and self.half_life <= 0:
            raise ValueError(f"half_life must be positive, got {self.half_life}")


@dataclass(frozen=True)
class SearchOptions:
    """Per-file settings for a deck search."""

    formats: tuple[str, ...]
    today: int
    max_age: int
    criteria: tuple[CardCriterion, ...] = field(default_factory=tuple)
    exact: bool = False
    include_sideboard: bool = False
