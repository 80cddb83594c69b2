"""Directory size calculation for nodesweep."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Iterable

from nodesweep.models import NodeModulesDir

logger = logging.getLogger(__name__)


def get_directory_size(path: Path, strict: bool = False) -> int:
    """
    Calculate the total size of regular files under a directory.

    Uses os.scandir and never follows symlinks, so neither links nor
    their targets are counted.

    Args:
        path: Directory to measure
        strict: If True, the first OSError propagates; otherwise unreadable
            entries contribute zero

    Returns:
        Total size in bytes
    """
    total_size = 0
    pending = [os.fspath(path)]

    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total_size += entry.stat(follow_symlinks=False).st_size
                        elif entry.is_dir(follow_symlinks=False):
                            pending.append(entry.path)
                    except OSError as e:
                        if strict:
                            raise
                        logger.debug("Ignoring unreadable entry %s: %s", entry.path, e)
        except OSError as e:
            if strict:
                raise
            logger.debug("Ignoring unreadable directory %s: %s", current, e)

    return total_size


def measure_directories(
    paths: Iterable[Path],
    max_workers: int | None = None,
    progress_callback: Callable[[Path, int], None] | None = None,
) -> list[NodeModulesDir]:
    """
    Measure several directories in parallel.

    Sizes are computed leniently; a directory that cannot be read
    reports zero bytes.

    Args:
        paths: Directories to measure
        max_workers: Worker pool size (executor default if None)
        progress_callback: Optional callback(path, size_bytes) per finished directory

    Returns:
        NodeModulesDir per input path, in input order
    """
    paths = list(paths)
    sizes: dict[int, int] = {}

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_index = {
            executor.submit(get_directory_size, path): i for i, path in enumerate(paths)
        }

        for future in as_completed(future_to_index):
            index = future_to_index[future]
            sizes[index] = future.result()

            if progress_callback:
                progress_callback(paths[index], sizes[index])

    return [NodeModulesDir(path=path, size_bytes=sizes[i]) for i, path in enumerate(paths)]
