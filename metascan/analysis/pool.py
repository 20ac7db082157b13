"""
Parallel fan-out over record files.

Each file is processed independently in a worker process and returns its own
partial result; callers combine results afterwards, so no worker ever touches
shared state.
"""

import os
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import ProcessPoolExecutor
from typing import TypeVar

T = TypeVar("T")

# Files per task sent to a worker; keeps IPC overhead low on large corpora
DEFAULT_CHUNK_SIZE = 64


def resolve_workers(workers: int) -> int:
    """Map a configured worker count to a concrete one (0 means one per CPU)."""
    if workers > 0:
        return workers
    return os.cpu_count() or 1


def scan_files(
    fn: Callable[[str], T],
    paths: Sequence[str],
    workers: int = 0,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Iterator[T]:
    """
    Apply `fn` to every path, in parallel when it is worth it.

    Args:
        fn: Picklable per-file function (module-level function or functools.partial)
        paths: Files to process
        workers: Worker processes; 0 picks one per CPU, 1 runs in-process
        chunk_size: Paths handed to a worker at a time

    Yields:
        One result per path, in path order
    """
    workers = resolve_workers(workers)

    if workers > 1 and len(paths) > 1:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            yield from executor.map(fn, paths, chunksize=chunk_size)
    else:
        for path in paths:
            yield fn(path)
