import pytest

from metascan.analysis.dates import (
    date_key,
    days_since_epoch,
    extract_date_from_path,
    today_days,
)


class TestExtractDateFromPath:
    def test_extracts_date_segment(self) -> None:
        path = "/data/mtgo.com/2024/03/15/modern-challenge.json"

        assert extract_date_from_path(path) == (2024, 3, 15)

    def test_no_date_segment(self) -> None:
        assert extract_date_from_path("/data/mtgo.com/modern-challenge.json") is None

    def test_requires_trailing_separator(self) -> None:
        assert extract_date_from_path("/data/2024/03/15.json") is None

    def test_first_segment_wins(self) -> None:
        path = "/archive/2019/01/02/mirror/2024/03/15/event.json"

        assert extract_date_from_path(path) == (2019, 1, 2)

    def test_no_calendar_validation(self) -> None:
        assert extract_date_from_path("/x/2024/13/40/event.json") == (2024, 13, 40)

    def test_windows_separators(self) -> None:
        assert extract_date_from_path("C:\\data\\2023\\11\\05\\event.json") == (2023, 11, 5)

    @pytest.mark.parametrize(
        "date",
        [(1999, 1, 1), (2010, 12, 31), (2024, 2, 29), (2031, 7, 9)],
    )
    def test_returns_embedded_triple(self, date: tuple[int, int, int]) -> None:
        year, month, day = date
        path = f"/corpus/source/{year:04d}/{month:02d}/{day:02d}/file.json"

        assert extract_date_from_path(path) == date


class TestDaysSinceEpoch:
    def test_epoch_start(self) -> None:
        assert days_since_epoch(1970, 1, 1) == 1

    def test_uses_thirty_day_months(self) -> None:
        # Approximate model: every month is 30 days, so Feb 1 and Mar 1 are 30 apart
        assert days_since_epoch(2024, 3, 1) - days_since_epoch(2024, 2, 1) == 30

    def test_leap_correction_every_four_years(self) -> None:
        assert days_since_epoch(1972, 1, 1) - days_since_epoch(1971, 1, 1) == 365
        assert days_since_epoch(1973, 1, 1) - days_since_epoch(1972, 1, 1) == 366

    def test_known_value(self) -> None:
        assert days_since_epoch(2024, 6, 1) == 54 * 365 + 13 + 5 * 30 + 1


class TestTodayDays:
    def test_whole_days_from_timestamp(self) -> None:
        assert today_days(0) == 0
        assert today_days(86400 * 10 + 3600) == 10

    def test_defaults_to_current_time(self) -> None:
        assert today_days() > 19000


class TestDateKey:
    def test_zero_padded(self) -> None:
        assert date_key(2024, 3, 5) == "2024-03-05"

    def test_sorts_chronologically(self) -> None:
        keys = [date_key(2024, 10, 1), date_key(2023, 12, 31), date_key(2024, 2, 9)]

        assert sorted(keys) == ["2023-12-31", "2024-02-09", "2024-10-01"]
