"""
Search request data model for filesearch.

This module defines the validated, immutable request consumed by the
directory searcher: the name pattern, the root directory and the optional
depth and result limits.
"""

from typing import Dict, Optional, Any
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .search_results import FsText


class SearchRequest(BaseModel):
    """
    Represents a single file name search.

    The pattern and root directory are kept exactly as given: the pattern is
    matched after ASCII case folding, and the root is walked as-is so emitted
    paths keep the form they were discovered in.

    Attributes:
        pattern: Substring to look for in file names
        root_directory: Directory the walk starts from
        max_depth: Deepest subdirectory level to enter (None means unlimited)
        max_results: Number of matches after which the walk stops (None means unlimited)
    """

    model_config = ConfigDict(frozen=True)

    pattern: FsText = Field(..., description="Substring to look for in file names")
    root_directory: FsText = Field(..., description="Directory the walk starts from")
    max_depth: Optional[int] = Field(None, gt=0, description="Deepest subdirectory level to enter")
    max_results: Optional[int] = Field(None, gt=0, description="Maximum number of matches to collect")

    @field_validator('max_depth', 'max_results', mode='before')
    @classmethod
    def validate_limit(cls, v):
        """Reject booleans, which pydantic would otherwise accept as 0/1."""
        if isinstance(v, bool):
            raise ValueError("Limit must be an integer, not a boolean")
        return v

    def has_depth_limit(self) -> bool:
        """Check if the walk is limited in depth."""
        return self.max_depth is not None

    def has_result_limit(self) -> bool:
        """Check if the walk stops after a number of matches."""
        return self.max_results is not None

    def with_limits(self, max_depth: Optional[int] = None, max_results: Optional[int] = None) -> 'SearchRequest':
        """
        Return a copy with unset limits filled in.

        Limits already present on this request take precedence over the
        values given here.

        Args:
            max_depth: Fallback depth limit
            max_results: Fallback result limit

        Returns:
            A new SearchRequest, or this one if nothing changes
        """
        depth = self.max_depth if self.max_depth is not None else max_depth
        results = self.max_results if self.max_results is not None else max_results

        if depth == self.max_depth and results == self.max_results:
            return self

        return SearchRequest(
            pattern=self.pattern,
            root_directory=self.root_directory,
            max_depth=depth,
            max_results=results
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the search request to a dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchRequest':
        """Create a SearchRequest instance from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the search request."""
        parts = [f"Pattern: '{self.pattern}'"]
        parts.append(f"Root: {Path(self.root_directory)}")

        if self.has_depth_limit():
            parts.append(f"Max depth: {self.max_depth}")

        if self.has_result_limit():
            parts.append(f"Max results: {self.max_results}")

        return " | ".join(parts)
