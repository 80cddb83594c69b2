"""Parallel deletion of discovered node_modules directories."""

import logging
import shutil
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Iterable

from nodesweep.models import DeletionSummary, StatsSnapshot
from nodesweep.scanner import get_directory_size
from nodesweep.stats import DeletionStats

logger = logging.getLogger(__name__)


class DeletionError(Exception):
    """A directory could not be measured or removed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to delete {self.path}: {cause}")


def delete_directory(path: Path) -> int:
    """
    Measure and recursively remove a single directory.

    Args:
        path: Directory to remove

    Returns:
        Bytes freed

    Raises:
        DeletionError: If the size cannot be read or removal fails
    """
    try:
        size = get_directory_size(path, strict=True)
        shutil.rmtree(path)
    except OSError as e:
        raise DeletionError(path, e) from e
    return size


def delete_directories(
    paths: Iterable[Path],
    stats: DeletionStats,
    max_workers: int | None = None,
    progress_callback: Callable[[Path, StatsSnapshot], None] | None = None,
) -> DeletionSummary:
    """
    Delete directories in parallel, recording each completion in ``stats``.

    The batch fails fast: the first error is raised and queued directories
    that have not started are cancelled. Directories already being deleted
    run to completion.

    Args:
        paths: Directories to delete; none may contain another
        stats: Shared aggregator for this batch
        max_workers: Worker pool size (executor default if None)
        progress_callback: Optional callback(path, snapshot) per deleted directory

    Returns:
        DeletionSummary with the final counters

    Raises:
        DeletionError: For the first directory that failed
    """
    paths = tuple(paths)
    start = time.perf_counter()

    def _delete_one(path: Path) -> StatsSnapshot:
        folder_start = time.perf_counter()
        logger.info("Processing: %s", path)
        size = delete_directory(path)
        return stats.record(size, time.perf_counter() - folder_start)

    executor = ThreadPoolExecutor(max_workers=max_workers)
    try:
        future_to_path = {executor.submit(_delete_one, path): path for path in paths}

        for future in as_completed(future_to_path):
            snapshot = future.result()

            if progress_callback:
                progress_callback(future_to_path[future], snapshot)
    finally:
        executor.shutdown(wait=True, cancel_futures=True)

    final = stats.snapshot()
    return DeletionSummary(
        processed=final.processed,
        bytes_freed=final.bytes_freed,
        elapsed_seconds=time.perf_counter() - start,
    )
