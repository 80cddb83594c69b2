"""Data models for nodesweep."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (binary units)."""
    for unit, factor in (("TB", 1024**4), ("GB", 1024**3), ("MB", 1024**2), ("KB", 1024)):
        if size_bytes >= factor:
            return f"{size_bytes / factor:.2f} {unit}"
    return f"{size_bytes} B"


class SkippedEntry(BaseModel):
    """An entry the scanner could not read."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Entry that was skipped")
    reason: str = Field(..., description="Underlying error")


class ScanReport(BaseModel):
    """Result of walking a directory tree for node_modules."""

    root: Path = Field(..., description="Directory the scan started from")
    directories: tuple[Path, ...] = Field(
        default_factory=tuple, description="Discovered node_modules directories"
    )
    excluded: tuple[Path, ...] = Field(
        default_factory=tuple, description="Directories skipped by the exclusion set"
    )
    skipped: tuple[SkippedEntry, ...] = Field(
        default_factory=tuple, description="Entries that could not be read"
    )
    elapsed_seconds: float = Field(0.0, description="Wall-clock scan time")

    @property
    def found(self) -> int:
        """Number of discovered directories."""
        return len(self.directories)

    @property
    def is_empty(self) -> bool:
        """Whether nothing was found."""
        return not self.directories


class NodeModulesDir(BaseModel):
    """A discovered directory together with its measured size."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Directory path")
    size_bytes: int = Field(0, ge=0, description="Total size of regular files in bytes")

    @property
    def size_human(self) -> str:
        """Human-readable size string."""
        return format_size(self.size_bytes)


class StatsSnapshot(BaseModel):
    """Point-in-time view of deletion progress."""

    model_config = ConfigDict(frozen=True)

    total: int = Field(..., ge=0, description="Directories queued for deletion")
    processed: int = Field(0, ge=0, description="Directories deleted so far")
    bytes_freed: int = Field(0, ge=0, description="Bytes freed so far")
    eta_seconds: Optional[float] = Field(
        None, description="Estimated time to finish, None before the first completion"
    )

    @property
    def remaining(self) -> int:
        """Directories not yet deleted."""
        return max(self.total - self.processed, 0)


class DeletionSummary(BaseModel):
    """Result of a deletion batch."""

    processed: int = Field(0, description="Directories deleted")
    bytes_freed: int = Field(0, description="Bytes freed")
    elapsed_seconds: float = Field(0.0, description="Wall-clock deletion time")

    @property
    def size_human(self) -> str:
        """Human-readable freed size."""
        return format_size(self.bytes_freed)
