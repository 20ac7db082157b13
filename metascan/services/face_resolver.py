"""
Back-face resolution for multi-faced cards.

Tournament records list double-faced, split and adventure cards by their
front face only. The resolver maps each front face to its linked back face
using a locally cached Scryfall bulk export, so ranked output can show both
names.

Cache lifecycle:
    check freshness -> (stale or missing) refresh wholesale -> serve

A failed refresh never aborts a run: a stale cache is served with a warning,
and with no cache at all the index is empty.

Bulk data: https://scryfall.com/docs/api/bulk-data
"""

import logging
import os
import tempfile
import time
from collections.abc import Callable, Iterable, Mapping
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any

import httpx
import ijson

from metascan.config import SCRYFALL_BULK_API, settings
from metascan.models.search import RankedCard

logger = logging.getLogger(__name__)

# Scryfall layouts whose first two card_faces are front and back of one card
MULTI_FACE_LAYOUTS = frozenset(
    {"split", "flip", "transform", "modal_dfc", "adventure", "reversible_card"}
)


class FaceRefreshError(Exception):
    """Raised when the bulk card export cannot be downloaded."""

    pass


class CacheState(str, Enum):
    """Freshness of the local bulk export."""

    FRESH = "fresh"
    STALE = "stale"
    MISSING = "missing"


def cache_state(
    path: Path, now: float, max_age_days: int = settings.face_cache_max_age_days
) -> CacheState:
    """
    Classify the cache file at `path` by age.

    Args:
        path: Cache file location
        now: Current time as a Unix timestamp
        max_age_days: Age beyond which the cache is stale

    Returns:
        MISSING if the file does not exist, STALE if it is older than the
        window, FRESH otherwise
    """
    try:
        modified = path.stat().st_mtime
    except FileNotFoundError:
        return CacheState.MISSING

    if now - modified > timedelta(days=max_age_days).total_seconds():
        return CacheState.STALE
    return CacheState.FRESH


def get_bulk_data_url(client: httpx.Client, bulk_type: str) -> str:
    """
    Find the download URL of a Scryfall bulk export.

    Raises:
        FaceRefreshError: If the index is malformed or has no entry of `bulk_type`
        httpx.HTTPError: If the index request fails
    """
    response = client.get(SCRYFALL_BULK_API)
    response.raise_for_status()

    payload = response.json()
    entries = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        raise FaceRefreshError("Unexpected bulk data index response")

    for entry in entries:
        if isinstance(entry, dict) and entry.get("type") == bulk_type:
            return str(entry["download_uri"])

    raise FaceRefreshError(f"Could not find {bulk_type} bulk data URL")


def download_card_faces(
    dest: Path,
    bulk_type: str | None = None,
    client: httpx.Client | None = None,
) -> Path:
    """
    Download the Scryfall bulk export to `dest`.

    The file is streamed into a temporary file next to `dest` and then moved
    into place, so readers never see a partial cache.

    Args:
        dest: Cache file to replace
        bulk_type: Bulk export type. Defaults to settings.scryfall_bulk_type
        client: Optional httpx client for connection reuse

    Returns:
        Path to the cache file

    Raises:
        FaceRefreshError: If any step of the download fails
    """
    bulk_type = bulk_type or settings.scryfall_bulk_type
    own_client = client is None
    if client is None:
        client = httpx.Client(
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True,
            timeout=30.0,
        )

    tmp_name: str | None = None
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        url = get_bulk_data_url(client, bulk_type)

        fd, tmp_name = tempfile.mkstemp(dir=dest.parent, prefix=f".{dest.name}.", suffix=".tmp")
        with (
            os.fdopen(fd, "wb") as f,
            client.stream("GET", url, timeout=300.0) as response,
        ):
            response.raise_for_status()
            for chunk in response.iter_bytes(chunk_size=65536):
                f.write(chunk)

        os.replace(tmp_name, dest)
        tmp_name = None
    except httpx.HTTPStatusError as e:
        raise FaceRefreshError(
            f"Failed to download {bulk_type}: HTTP {e.response.status_code}"
        ) from e
    except (httpx.HTTPError, OSError, KeyError, ValueError) as e:
        raise FaceRefreshError(f"Failed to download {bulk_type}: {e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        if own_client:
            client.close()

    return dest


def build_back_face_index(cards: Iterable[Any]) -> dict[str, str]:
    """
    Build front-face -> back-face mapping from Scryfall card objects.

    Only cards with a multi-face layout and at least two named faces are
    indexed; further faces are ignored. Entries that are not card objects are
    skipped.
    """
    index: dict[str, str] = {}

    for card in cards:
        if not isinstance(card, Mapping) or card.get("layout") not in MULTI_FACE_LAYOUTS:
            continue

        faces = card.get("card_faces")
        if not isinstance(faces, list) or len(faces) < 2:
            continue
        if not all(isinstance(face, Mapping) for face in faces[:2]):
            continue

        front = faces[0].get("name")
        back = faces[1].get("name")
        if isinstance(front, str) and isinstance(back, str) and front and back:
            index[front] = back

    return index


def load_back_face_index(path: Path) -> dict[str, str]:
    """
    Stream a cached bulk export and index its multi-faced cards.

    Raises:
        OSError: If the file cannot be read
        ijson.JSONError: If the file is not a JSON array of cards
    """
    with open(path, "rb") as f:
        return build_back_face_index(ijson.items(f, "item"))


def expand_back_faces(
    ranked: Iterable[RankedCard], index: Mapping[str, str]
) -> list[RankedCard]:
    """
    Insert each card's back face right after it, with the same weight.

    Back faces are never aggregated on their own; their weight is always the
    front face's.
    """
    expanded: list[RankedCard] = []
    for card in ranked:
        expanded.append(card)
        back = index.get(card.name)
        if back:
            expanded.append(RankedCard(name=back, weight=card.weight))
    return expanded


class FaceResolver:
    """
    Freshness-gated front -> back face lookup.

    Attributes:
        cache_path: Local copy of the bulk export
        fetch: Called with cache_path to replace it; raises FaceRefreshError on failure
        clock: Returns the current Unix timestamp
        max_age_days: Freshness window for the cache
    """

    def __init__(
        self,
        cache_path: Path,
        fetch: Callable[[Path], Any] = download_card_faces,
        clock: Callable[[], float] = time.time,
        max_age_days: int = settings.face_cache_max_age_days,
    ) -> None:
        self.cache_path = cache_path
        self.fetch = fetch
        self.clock = clock
        self.max_age_days = max_age_days

    def state(self) -> CacheState:
        return cache_state(self.cache_path, self.clock(), self.max_age_days)

    def refresh(self) -> None:
        """Replace the cache with a fresh download."""
        logger.info("Refreshing card face cache at %s", self.cache_path)
        self.fetch(self.cache_path)

    def get_index(self) -> dict[str, str]:
        """
        Return the back-face index, refreshing the cache first if needed.

        Returns:
            Front-face -> back-face mapping; empty if no usable cache exists
        """
        state = self.state()

        if state is not CacheState.FRESH:
            try:
                self.refresh()
            except FaceRefreshError as e:
                if state is CacheState.STALE:
                    logger.warning("Card face refresh failed, using stale cache: %s", e)
                else:
                    logger.warning("Card face refresh failed, back faces disabled: %s", e)
                    return {}

        try:
            index = load_back_face_index(self.cache_path)
        except (OSError, ijson.JSONError) as e:
            logger.warning(
                "Card face cache %s is unreadable, back faces disabled: %s", self.cache_path, e
            )
            return {}

        logger.info("Loaded %d back faces", len(index))
        return index
