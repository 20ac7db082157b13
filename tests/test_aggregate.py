import random
from collections.abc import Callable
from typing import Any

import pytest

from metascan.analysis.aggregate import (
    aggregate_weights,
    merge_weights,
    process_file,
    rank_cards,
)
from metascan.models.scan import ScanOptions
from metascan.models.search import RankedCard

RecordWriter = Callable[..., str]
DeckFactory = Callable[..., dict[str, Any]]


@pytest.fixture
def options(today: int) -> Callable[..., ScanOptions]:
    """Scan options for Modern over the last year, with overrides."""

    def _options(**overrides: Any) -> ScanOptions:
        values: dict[str, Any] = {
            "formats": ("Modern",),
            "today": today,
            "max_age": 365,
            "half_life": 45.0,
            "use_weight": True,
        }
        values.update(overrides)
        return ScanOptions(**values)

    return _options


class TestProcessFile:
    def test_counts_mainboard_and_sideboard(
        self, write_record: RecordWriter, make_deck: DeckFactory, options
    ) -> None:
        path = write_record(
            "2024-06-01",
            [make_deck({"Lightning Bolt": 4}, {"Blood Moon": 2})],
        )

        assert process_file(path, options()) == {"Lightning Bolt": 4.0, "Blood Moon": 2.0}

    def test_sums_across_decks_and_repeated_lines(
        self, write_record: RecordWriter, make_deck: DeckFactory, options
    ) -> None:
        deck = make_deck({"Lightning Bolt": 3})
        deck["mainboard"].append({"count": 1, "name": "Lightning Bolt"})
        path = write_record("2024-06-01", [deck, make_deck({"Lightning Bolt": 4})])

        assert process_file(path, options()) == {"Lightning Bolt": 8.0}

    def test_applies_decay_weight(
        self, write_record: RecordWriter, make_deck: DeckFactory, options
    ) -> None:
        path = write_record("2024-04-16", [make_deck({"Lightning Bolt": 4})])

        # 2024-04-16 is 45 days before 2024-06-01 in the approximate model
        assert process_file(path, options())["Lightning Bolt"] == pytest.approx(2.0)

    def test_no_weight_counts_raw(
        self, write_record: RecordWriter, make_deck: DeckFactory, options
    ) -> None:
        path = write_record("2024-04-16", [make_deck({"Lightning Bolt": 4})])

        assert process_file(path, options(use_weight=False)) == {"Lightning Bolt": 4.0}

    def test_too_old_record_skipped(
        self, write_record: RecordWriter, make_deck: DeckFactory, options
    ) -> None:
        path = write_record("2022-01-01", [make_deck({"Lightning Bolt": 4})])

        assert process_file(path, options()) == {}
        assert process_file(path, options(use_weight=False)) == {}

    def test_format_mismatch_skipped(
        self, write_record: RecordWriter, make_deck: DeckFactory, options
    ) -> None:
        path = write_record("2024-06-01", [make_deck({"Lightning Bolt": 4})], format="Legacy")

        assert process_file(path, options(formats=("Pioneer",))) == {}

    def test_missing_format_skipped(
        self, write_record: RecordWriter, make_deck: DeckFactory, options
    ) -> None:
        path = write_record("2024-06-01", [make_deck({"Lightning Bolt": 4})], format=None)

        assert process_file(path, options()) == {}

    def test_undated_path_skipped(self, tmp_path, options) -> None:
        path = tmp_path / "event.json"
        path.write_text('{"tournament": {"format": "Modern"}, "decks": []}')

        assert process_file(str(path), options()) == {}

    def test_malformed_record_skipped(self, write_record: RecordWriter, options) -> None:
        path = write_record("2024-06-01", [])
        with open(path, "w") as f:
            f.write("{broken")

        assert process_file(path, options()) == {}


class TestMergeWeights:
    def test_sums_by_key_and_unions_keys(self) -> None:
        merged = merge_weights({"a": 1.0, "b": 2.0}, {"b": 0.5, "c": 3.0})

        assert merged == {"a": 1.0, "b": 2.5, "c": 3.0}

    def test_keys_are_case_sensitive(self) -> None:
        merged = merge_weights({"Lightning Bolt": 1.0}, {"lightning bolt": 1.0})

        assert merged == {"Lightning Bolt": 1.0, "lightning bolt": 1.0}

    def test_order_independent(self) -> None:
        rng = random.Random(7)
        names = [f"Card {i}" for i in range(20)]
        parts = [{rng.choice(names): rng.random() * 4 for _ in range(10)} for _ in range(50)]

        forward: dict[str, float] = {}
        for part in parts:
            merge_weights(forward, part)

        shuffled = parts[:]
        rng.shuffle(shuffled)
        backward: dict[str, float] = {}
        for part in shuffled:
            merge_weights(backward, part)

        assert forward.keys() == backward.keys()
        for name, weight in forward.items():
            assert backward[name] == pytest.approx(weight, rel=1e-9)


class TestAggregateWeights:
    def test_parallel_matches_serial(
        self, write_record: RecordWriter, make_deck: DeckFactory, options
    ) -> None:
        paths = [
            write_record(
                f"2024-05-{day:02d}",
                [make_deck({"Lightning Bolt": 4, f"Card {day % 3}": day % 4 + 1})],
                name=f"event-{day}",
            )
            for day in range(1, 13)
        ]

        serial = aggregate_weights(paths, options(), workers=1)
        parallel = aggregate_weights(paths, options(), workers=2)

        assert serial.keys() == parallel.keys()
        for name, weight in serial.items():
            assert parallel[name] == pytest.approx(weight, rel=1e-9)

    def test_empty_corpus(self, options) -> None:
        assert aggregate_weights([], options(), workers=1) == {}


class TestRankCards:
    def test_recency_weighted_total(
        self, write_record: RecordWriter, make_deck: DeckFactory, options
    ) -> None:
        # 2024-03-01 is 90 days (two half-lives) before 2024-06-01
        paths = [
            write_record("2024-06-01", [make_deck({"Lightning Bolt": 4})], name="today"),
            write_record("2024-03-01", [make_deck({"Lightning Bolt": 4})], name="older"),
        ]

        ranked = rank_cards(paths, options(), top_n=10, workers=1)

        assert len(ranked) == 1
        assert ranked[0].name == "Lightning Bolt"
        assert ranked[0].weight == pytest.approx(5.0)

    def test_sorted_descending_and_truncated(
        self, write_record: RecordWriter, make_deck: DeckFactory, options
    ) -> None:
        path = write_record(
            "2024-06-01",
            [make_deck({"Mountain": 18, "Lightning Bolt": 4, "Blood Moon": 1, "Skred": 2})],
        )

        ranked = rank_cards([path], options(), top_n=3, workers=1)

        assert [card.name for card in ranked] == ["Mountain", "Lightning Bolt", "Skred"]

    def test_expands_back_faces(
        self, write_record: RecordWriter, make_deck: DeckFactory, options
    ) -> None:
        path = write_record(
            "2024-06-01",
            [make_deck({"Fable of the Mirror-Breaker": 4, "Lightning Bolt": 2})],
        )

        ranked = rank_cards(
            [path],
            options(),
            top_n=10,
            back_faces={"Fable of the Mirror-Breaker": "Reflection of Kiki-Jiki"},
            workers=1,
        )

        assert ranked == [
            RankedCard("Fable of the Mirror-Breaker", 4.0),
            RankedCard("Reflection of Kiki-Jiki", 4.0),
            RankedCard("Lightning Bolt", 2.0),
        ]

    def test_excludes_old_records(
        self, write_record: RecordWriter, make_deck: DeckFactory, options
    ) -> None:
        paths = [
            write_record("2024-06-01", [make_deck({"Lightning Bolt": 1})], name="new"),
            write_record("2020-06-01", [make_deck({"Lightning Bolt": 4, "Skred": 4})], name="old"),
        ]

        ranked = rank_cards(paths, options(use_weight=False), top_n=10, workers=1)

        assert ranked == [RankedCard("Lightning Bolt", 1.0)]

    def test_zero_half_life_rejected(self, options) -> None:
        with pytest.raises(ValueError, match="half_life"):
            options(half_life=0)

    def test_zero_half_life_allowed_without_weighting(
        self, write_record: RecordWriter, make_deck: DeckFactory, options
    ) -> None:
        path = write_record("2024-06-01", [make_deck({"Lightning Bolt": 4})])

        ranked = rank_cards([path], options(half_life=0, use_weight=False), top_n=10, workers=1)

        assert ranked == [RankedCard("Lightning Bolt", 4.0)]
