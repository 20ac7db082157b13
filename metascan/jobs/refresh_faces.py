"""
Refresh the card face cache.

Run this job to download the latest Scryfall bulk export used to resolve
back faces, regardless of how old the current cache is.
"""

import logging
import sys

from metascan.config import FACE_CACHE_FILENAME, settings
from metascan.services.face_resolver import FaceRefreshError, download_card_faces

logger = logging.getLogger(__name__)


def run_refresh() -> bool:
    """Download the bulk export into the cache. Returns False on failure."""
    dest = settings.cache_dir / FACE_CACHE_FILENAME
    logger.info("Downloading Scryfall %s export...", settings.scryfall_bulk_type)

    try:
        path = download_card_faces(dest)
    except FaceRefreshError as e:
        logger.error("Failed to refresh card face cache: %s", e)
        return False

    logger.info("Downloaded card face cache to %s", path)
    return True


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(0 if run_refresh() else 1)


if __name__ == "__main__":
    main()
