"""
Command line entry point.

Usage:
    metascan top --formats Modern,Pioneer --num 200
    metascan search "4 Lightning Bolt" "Ragavan, Nimble Pilferer" --formats Modern

Results go to stdout (or --output); progress and warnings go to stderr.
"""

import argparse
import logging
import sys
from pathlib import Path

from metascan.analysis.aggregate import rank_cards
from metascan.analysis.dates import today_days
from metascan.analysis.search import search_decks
from metascan.config import FACE_CACHE_FILENAME, settings
from metascan.models.scan import ScanOptions, SearchOptions
from metascan.parsers.criteria import parse_criteria
from metascan.services.corpus import CorpusFetchError, fetch_corpus, find_record_files
from metascan.services.face_resolver import FaceResolver
from metascan.services.formatter import format_deck_matches, format_ranked_cards

logger = logging.getLogger(__name__)


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def parse_formats(value: str) -> tuple[str, ...]:
    """Split a comma-separated format list, dropping blanks."""
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f",
        "--formats",
        default=settings.formats,
        help=f"Comma-separated list of formats (default: {settings.formats})",
    )
    parser.add_argument(
        "-d",
        "--dir",
        type=Path,
        help="Base directory to search (defaults to --data-dir when --fetch is used)",
    )
    parser.add_argument(
        "-m",
        "--max-age",
        type=int,
        default=settings.max_age,
        help=f"Maximum age in days to include (default: {settings.max_age})",
    )
    parser.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    parser.add_argument(
        "-F",
        "--fetch",
        action="store_true",
        help="Fetch/update the data repository before processing",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=settings.data_dir,
        help=f"Directory for the data repository (default: {settings.data_dir})",
    )
    parser.add_argument(
        "--data-repo",
        default=settings.data_repo,
        help="Git URL for the data repository",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=settings.workers,
        help="Worker processes (default: one per CPU)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metascan",
        description="Card play rankings and deck search over tournament decklists",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    top = commands.add_parser("top", help="Most played cards, weighted by recency")
    _add_common_arguments(top)
    top.add_argument(
        "-n",
        "--num",
        type=int,
        default=settings.top_n,
        help=f"Number of top cards to output (default: {settings.top_n})",
    )
    top.add_argument(
        "-l",
        "--half-life",
        type=_positive_float,
        default=settings.half_life,
        help=f"Half-life in days for time decay (default: {settings.half_life:g})",
    )
    top.add_argument(
        "-w",
        "--no-weight",
        action="store_true",
        help="Disable time-based weighting",
    )
    top.add_argument(
        "--no-faces",
        action="store_true",
        help="Do not append back faces of multi-faced cards",
    )

    search = commands.add_parser("search", help="Decks containing all given cards")
    _add_common_arguments(search)
    search.add_argument(
        "criteria",
        nargs="+",
        help='Cards to look for, optionally with a count (e.g. "4 Lightning Bolt")',
    )
    search.add_argument(
        "-e",
        "--exact",
        action="store_true",
        help="Require exactly the given count instead of at least",
    )
    search.add_argument(
        "-s",
        "--sideboard",
        action="store_true",
        help="Count sideboard copies toward the criteria",
    )
    search.add_argument(
        "--limit",
        type=int,
        default=settings.search_limit,
        help=f"Maximum number of decks to show (default: {settings.search_limit})",
    )

    return parser


def resolve_corpus(args: argparse.Namespace) -> list[str]:
    """
    Fetch the corpus if asked to, then list its record files.

    Raises:
        CorpusFetchError: If --fetch was given and the fetch failed
    """
    if args.fetch:
        fetch_corpus(args.data_dir, args.data_repo)

    search_dir = args.dir or (args.data_dir if args.fetch else Path("."))
    files = find_record_files(search_dir)
    logger.info("Processing %d files...", len(files))
    return files


def run_top(args: argparse.Namespace, paths: list[str], today: int) -> str:
    back_faces: dict[str, str] | None = None
    if not args.no_faces:
        resolver = FaceResolver(
            settings.cache_dir / FACE_CACHE_FILENAME,
            max_age_days=settings.face_cache_max_age_days,
        )
        back_faces = resolver.get_index()

    options = ScanOptions(
        formats=parse_formats(args.formats),
        today=today,
        max_age=args.max_age,
        half_life=args.half_life,
        use_weight=not args.no_weight,
    )
    ranked = rank_cards(paths, options, args.num, back_faces=back_faces, workers=args.workers)
    return format_ranked_cards(ranked)


def run_search(args: argparse.Namespace, paths: list[str], today: int) -> str:
    options = SearchOptions(
        formats=parse_formats(args.formats),
        today=today,
        max_age=args.max_age,
        criteria=tuple(parse_criteria(args.criteria)),
        exact=args.exact,
        include_sideboard=args.sideboard,
    )
    matches = search_decks(paths, options, args.limit, workers=args.workers)
    return format_deck_matches(matches)


def write_output(text: str, output: Path | None) -> None:
    """
    Write results to `output`, or stdout when no file is given.

    Raises:
        OSError: If the output file cannot be created
    """
    if output is None:
        if text:
            print(text)
        return

    with open(output, "w", encoding="utf-8") as f:
        if text:
            f.write(text + "\n")
    logger.info("Output written to %s", output)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose or settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        paths = resolve_corpus(args)
    except CorpusFetchError as e:
        logger.error("Error fetching data: %s", e)
        return 1

    today = today_days()
    if args.command == "top":
        text = run_top(args, paths, today)
    else:
        text = run_search(args, paths, today)

    try:
        write_output(text, args.output)
    except OSError as e:
        logger.error("Failed to create output file %s: %s", args.output, e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
