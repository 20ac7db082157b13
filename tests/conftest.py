import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from metascan.analysis.dates import days_since_epoch


def _make_deck(
    mainboard: dict[str, int] | None = None,
    sideboard: dict[str, int] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    deck: dict[str, Any] = {
        "mainboard": [{"count": n, "name": name} for name, n in (mainboard or {}).items()],
        "sideboard": [{"count": n, "name": name} for name, n in (sideboard or {}).items()],
    }
    deck.update(extra)
    return deck


@pytest.fixture
def today() -> int:
    """Reference day number for scans: 2024-06-01 in the approximate day model."""
    return days_since_epoch(2024, 6, 1)


@pytest.fixture
def make_deck() -> Callable[..., dict[str, Any]]:
    """Build a deck dict in record-file shape from name -> count mappings."""
    return _make_deck


@pytest.fixture
def write_record(tmp_path: Path) -> Callable[..., str]:
    """Write a record under <tmp>/corpus/<source>/YYYY/MM/DD/<name>.json."""

    def _write(
        date: str,
        decks: list[dict[str, Any]],
        format: str | None = "Modern",
        name: str = "challenge",
        source: str = "mtgo.com",
        tournament: dict[str, Any] | None = None,
    ) -> str:
        year, month, day = date.split("-")
        directory = tmp_path / "corpus" / source / year / month / day
        directory.mkdir(parents=True, exist_ok=True)

        meta: dict[str, Any] = {"name": f"{format} {name}"} if tournament is None else tournament
        if format is not None:
            meta["format"] = format

        path = directory / f"{name}.json"
        path.write_text(json.dumps({"tournament": meta, "decks": decks}), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def burn_deck() -> dict[str, Any]:
    return _make_deck(
        mainboard={"Lightning Bolt": 4, "Ragavan, Nimble Pilferer": 4, "Mountain": 18},
        sideboard={"Blood Moon": 2, "Path to Exile": 1},
        player="alice",
        result="5-0",
        url="https://www.mtgo.com/decklist/1",
    )
