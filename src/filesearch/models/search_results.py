"""
Search results data models for filesearch.

This module defines the data structures produced by a search: one
MatchResult per matching file, in discovery order, and a SearchSummary with
the match count and the measured elapsed time.
"""

from typing import Annotated, Dict, Optional, Any
from datetime import timedelta
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, PlainValidator


MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE


def validate_fs_text(value: Any) -> str:
    """
    Validate a non-empty file name or path string without re-encoding it.

    Names that are not valid UTF-8 come back from the filesystem with
    surrogate escapes; they are kept exactly as given so the path still
    refers to the same file.
    """
    if not isinstance(value, str):
        raise ValueError(f"Input should be a string, got {type(value).__name__}")
    if not value:
        raise ValueError("Value cannot be empty")
    return value


# str field that accepts surrogate-escaped file system text
FsText = Annotated[str, PlainValidator(validate_fs_text)]


def format_duration(elapsed_ms: int) -> str:
    """
    Render an elapsed time for the search summary.

    Durations under one second are shown as "<n> ms". Longer durations are
    split into hours, minutes, seconds and milliseconds; the hours segment is
    left out when it is zero, and the minutes segment is left out when both
    hours and minutes are zero.

    Args:
        elapsed_ms: Elapsed time in whole milliseconds

    Returns:
        Formatted duration, e.g. "500 ms", "45s 0ms" or "1h 1m 1s 0ms"
    """
    if elapsed_ms < 0:
        raise ValueError(f"Elapsed time cannot be negative: {elapsed_ms}")

    if elapsed_ms < MS_PER_SECOND:
        return f"{elapsed_ms} ms"

    hours = elapsed_ms // MS_PER_HOUR
    minutes = (elapsed_ms % MS_PER_HOUR) // MS_PER_MINUTE
    seconds = (elapsed_ms % MS_PER_MINUTE) // MS_PER_SECOND
    millis = elapsed_ms % MS_PER_SECOND

    parts = []
    if hours:
        parts.append(f"{hours}h")
    if hours or minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{seconds}s")
    parts.append(f"{millis}ms")

    return " ".join(parts)


class MatchResult(BaseModel):
    """
    A single file whose name contains the search pattern.

    Attributes:
        index: Zero-based ordinal among the matches of one search
        path: Path of the file exactly as it was discovered during the walk
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Zero-based ordinal among matches")
    path: FsText = Field(..., description="Path of the file as discovered")

    def get_filename(self) -> str:
        """Get just the filename without directory path."""
        return Path(self.path).name

    def get_directory(self) -> str:
        """Get the directory containing this file."""
        return str(Path(self.path).parent)

    def to_line(self) -> str:
        """Render the match the way the command line prints it."""
        return f"[{self.index}]{self.path}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert the match to dictionary representation."""
        data = self.model_dump()
        data['filename'] = self.get_filename()
        return data

    def __str__(self) -> str:
        return self.to_line()


class SearchSummary(BaseModel):
    """
    Summary of a completed (or cut short) search.

    Attributes:
        match_count: Number of matching files found
        elapsed_ms: Wall-clock time spent walking, in whole milliseconds
        stats: Walk counters (directories traversed, entries scanned, ...)
    """

    match_count: int = Field(0, ge=0, description="Number of matching files found")
    elapsed_ms: int = Field(0, ge=0, description="Elapsed walk time in milliseconds")
    stats: Dict[str, int] = Field(default_factory=dict, description="Walk counters")

    @property
    def elapsed(self) -> timedelta:
        """Elapsed walk time as a timedelta."""
        return timedelta(milliseconds=self.elapsed_ms)

    def format_elapsed(self) -> str:
        """Get the elapsed time in the summary display format."""
        return format_duration(self.elapsed_ms)

    def get_stat(self, name: str) -> Optional[int]:
        """Get a single walk counter, or None if it was not recorded."""
        return self.stats.get(name)

    def to_text(self) -> str:
        """Render the summary block printed after the match lines."""
        return (
            "Search summary:\n"
            f"  Files found: {self.match_count}\n"
            f"  Time elapsed: {self.format_elapsed()}\n"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the summary to dictionary representation."""
        data = self.model_dump()
        data['elapsed_human'] = self.format_elapsed()
        return data

    def __str__(self) -> str:
        """String representation of the summary."""
        return f"Found {self.match_count} files | Took {self.format_elapsed()}"
