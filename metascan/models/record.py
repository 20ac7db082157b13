"""
Tournament record models.

One record file describes one tournament: its format, optional display name
and date, and the decks that were registered. Records are decoded with
pydantic so malformed files fail at the parse boundary instead of deep
inside the scan.

Example record:
    {
      "tournament": {"format": "Modern", "name": "Modern Challenge 32"},
      "decks": [
        {"player": "alice", "result": "5-1",
         "mainboard": [{"count": 4, "name": "Lightning Bolt"}],
         "sideboard": [{"count": 2, "name": "Blood Moon"}]}
      ]
    }
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, NonNegativeInt, field_validator


class CardEntry(BaseModel):
    """A card line on a board: name exactly as declared plus copy count."""

    name: str
    count: NonNegativeInt


class Deck(BaseModel):
    """
    One registered deck.

    Attributes:
        player: Player name if published
        result: Finish or record ("5-1", "1st", 3); numbers are normalized to strings
        url: Source page for the list (also accepted as "anchor_uri")
        mainboard: Main deck card lines
        sideboard: Sideboard card lines
    """

    model_config = ConfigDict(populate_by_name=True)

    player: str | None = None
    result: str | None = None
    url: str | None = Field(default=None, validation_alias=AliasChoices("url", "anchor_uri"))
    mainboard: list[CardEntry] = Field(default_factory=list)
    sideboard: list[CardEntry] = Field(default_factory=list)

    @field_validator("result", mode="before")
    @classmethod
    def _normalize_result(cls, value: object) -> object:
        # Sources publish either "5-1" or a bare placement number
        if isinstance(value, bool):
            return value
        if isinstance(value, int | float):
            return str(value)
        return value

    @field_validator("mainboard", "sideboard", mode="before")
    @classmethod
    def _null_board(cls, value: object) -> object:
        return [] if value is None else value


class Tournament(BaseModel):
    """Tournament metadata. The date field is informational only."""

    format: str | None = None
    name: str | None = None
    date: str | None = None


class Record(BaseModel):
    """A decoded tournament record."""

    tournament: Tournament
    decks: list[Deck] = Field(default_factory=list)

    @field_validator("decks", mode="before")
    @classmethod
    def _null_decks(cls, value: object) -> object:
        return [] if value is None else value
