"""
Parser for tournament record files.

Decoding failures are not errors: a malformed or unreadable record simply
contributes nothing to a scan.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from metascan.models.record import Record

logger = logging.getLogger(__name__)


def parse_record(raw: bytes | str) -> Record | None:
    """
    Decode one record.

    Args:
        raw: JSON document bytes or text

    Returns:
        Decoded Record, or None if the document is not a valid record
    """
    try:
        return Record.model_validate_json(raw)
    except ValidationError as e:
        logger.debug("Skipping malformed record: %d validation errors", e.error_count())
        return None


def format_matches(record: Record, patterns: Iterable[str]) -> bool:
    """
    Check a record's format against requested patterns.

    This is a case-insensitive "contains" match, not equality: the pattern
    "modern" matches "Modern" and also "Modern League".

    Returns:
        False if the record declares no format
    """
    if record.tournament.format is None:
        return False
    fmt = record.tournament.format.lower()
    return any(pattern.lower() in fmt for pattern in patterns)


def load_record(path: str | Path, patterns: Iterable[str]) -> Record | None:
    """
    Read, decode and format-filter one record file.

    Returns:
        The Record if it is readable, valid and in one of the requested formats
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        logger.debug("Skipping unreadable record %s: %s", path, e)
        return None

    record = parse_record(raw)
    if record is None or not format_matches(record, patterns):
        return None
    return record
