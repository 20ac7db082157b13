"""Tests for scheduled jobs."""

from pathlib import Path
from unittest.mock import patch

import pytest

from metascan.jobs.refresh_faces import main, run_refresh
from metascan.services.face_resolver import FaceRefreshError


class TestRunRefresh:
    def test_refresh_success(self, tmp_path: Path) -> None:
        with (
            patch("metascan.jobs.refresh_faces.settings") as settings,
            patch(
                "metascan.jobs.refresh_faces.download_card_faces",
                side_effect=lambda dest: dest,
            ) as download,
        ):
            settings.cache_dir = tmp_path
            assert run_refresh() is True

        download.assert_called_once_with(tmp_path / "all-cards.json")

    def test_refresh_failure(self) -> None:
        with patch(
            "metascan.jobs.refresh_faces.download_card_faces",
            side_effect=FaceRefreshError("offline"),
        ):
            assert run_refresh() is False

    def test_main_exit_code(self) -> None:
        with (
            patch("metascan.jobs.refresh_faces.run_refresh", return_value=False),
            pytest.raises(SystemExit) as exc,
        ):
            main()

        assert exc.value.code == 1
