"""
metascan services.

Collaborators of the scan engine: corpus on disk, card face metadata and
result rendering.
"""

from metascan.services.corpus import CorpusFetchError, fetch_corpus, find_record_files
from metascan.services.face_resolver import (
    CacheState,
    FaceRefreshError,
    FaceResolver,
    build_back_face_index,
    cache_state,
    download_card_faces,
    expand_back_faces,
)
from metascan.services.formatter import (
    format_deck_match,
    format_deck_matches,
    format_ranked_card,
    format_ranked_cards,
)

__all__ = [
    "CacheState",
    "CorpusFetchError",
    "FaceRefreshError",
    "FaceResolver",
    "build_back_face_index",
    "cache_state",
    "download_card_faces",
    "expand_back_faces",
    "fetch_corpus",
    "find_record_files",
    "format_deck_match",
    "format_deck_matches",
    "format_ranked_card",
    "format_ranked_cards",
]
