"""
Record corpus on disk.

The corpus is a git repository of tournament record files laid out as
<source>/<YYYY>/<MM>/<DD>/<tournament>.json. It is fetched with a shallow
clone and kept current with fast-forward pulls.
"""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class CorpusFetchError(Exception):
    """Raised when the record repository cannot be cloned or updated."""

    pass


def find_record_files(base_dir: str | Path) -> list[str]:
    """
    List every record file under `base_dir`.

    Returns:
        Sorted paths of all *.json files, searched recursively
    """
    return sorted(str(path) for path in Path(base_dir).rglob("*.json") if path.is_file())


def _run_git(args: list[str], cwd: Path | None = None) -> None:
    try:
        result = subprocess.run(["git", *args], cwd=cwd, check=False)
    except OSError as e:
        raise CorpusFetchError(f"Failed to run git {args[0]}: {e}") from e

    if result.returncode != 0:
        raise CorpusFetchError(f"git {args[0]} failed with exit code {result.returncode}")


def fetch_corpus(data_dir: str | Path, repo_url: str) -> Path:
    """
    Clone or update the record repository.

    Args:
        data_dir: Checkout location
        repo_url: Git URL to clone from when no checkout exists

    Returns:
        Path to the checkout

    Raises:
        CorpusFetchError: If git is unavailable or the clone/pull fails
    """
    data_path = Path(data_dir)

    if (data_path / ".git").exists():
        logger.info("Updating data repository in %s...", data_path)
        _run_git(["pull", "--ff-only"], cwd=data_path)
    else:
        logger.info("Cloning data repository to %s...", data_path)
        try:
            data_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CorpusFetchError(f"Failed to create directory: {e}") from e
        _run_git(["clone", "--depth=1", repo_url, str(data_path)])

    logger.info("Data repository ready.")
    return data_path
