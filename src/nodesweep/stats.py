"""Thread-safe aggregation of deletion progress."""

import threading

from nodesweep.models import StatsSnapshot


class DeletionStats:
    """
    Shared counters for a deletion batch.

    Workers report each finished directory through ``record``; the counters
    themselves are never exposed for direct mutation. The lock covers only
    counter updates and ETA arithmetic.
    """

    def __init__(self, total: int) -> None:
        if total < 0:
            raise ValueError(f"total must be non-negative, got {total}")
        self._total = total
        self._processed = 0
        self._bytes_freed = 0
        self._avg_duration = 0.0
        self._lock = threading.Lock()

    @property
    def total(self) -> int:
        return self._total

    def record(self, size_bytes: int, duration: float) -> StatsSnapshot:
        """
        Record one successfully deleted directory.

        Args:
            size_bytes: Bytes freed by the directory
            duration: Seconds spent measuring and deleting it

        Returns:
            Snapshot taken right after the update
        """
        if size_bytes < 0:
            raise ValueError(f"size_bytes must be non-negative, got {size_bytes}")

        with self._lock:
            if self._processed >= self._total:
                raise RuntimeError("more completions recorded than directories queued")
            self._processed += 1
            self._bytes_freed += size_bytes
            # Running mean over completed directories
            self._avg_duration += (duration - self._avg_duration) / self._processed
            return self._snapshot_locked()

    def snapshot(self) -> StatsSnapshot:
        """Current counters."""
        with self._lock:
            return self._snapshot_locked()

    def _snapshot_locked(self) -> StatsSnapshot:
        eta = None
        if self._processed:
            eta = self._avg_duration * (self._total - self._processed)
        return StatsSnapshot(
            total=self._total,
            processed=self._processed,
            bytes_freed=self._bytes_freed,
            eta_seconds=eta,
        )
