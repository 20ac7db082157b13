from metascan.parsers.criteria import parse_criteria, parse_criterion
from metascan.parsers.record import format_matches, load_record, parse_record

__all__ = [
    "format_matches",
    "load_record",
    "parse_criteria",
    "parse_criterion",
    "parse_record",
]
