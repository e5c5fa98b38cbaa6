"""
Directory searcher for filesearch.

This module walks a directory tree depth-first and collects the regular files
whose name contains the search pattern, compared after ASCII case folding. The
walk honours the request's depth cutoff and result budget and skips entries
it cannot access.
"""

import os
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Iterator, Tuple
import logging

from ..models.search_request import SearchRequest
from ..models.search_results import MatchResult, SearchSummary


logger = logging.getLogger(__name__)


_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz"
)


def ascii_fold(text: str) -> str:
    """
    Lowercase the ASCII letters A-Z of a string.

    Every other character, including non-ASCII letters and the surrogate
    escapes used for undecodable file name bytes, is left unchanged.
    """
    return text.translate(_ASCII_LOWER)


def _new_stats() -> Dict[str, int]:
    return {
        'directories_traversed': 0,
        'entries_scanned': 0,
        'directories_pruned': 0,
        'errors': 0
    }


@dataclass
class _TraversalCursor:
    """Match count, result budget and counters of a single search call."""
    max_results: Optional[int]
    match_count: int = 0
    stats: Dict[str, int] = field(default_factory=_new_stats)

    def budget_exhausted(self) -> bool:
        return self.max_results is not None and self.match_count >= self.max_results


class DirectorySearcher:
    """
    Searcher that walks a directory tree and matches file names.

    Each call to search() or iter_matches() owns its own traversal state, so
    one searcher can be reused for any number of searches. Counters from the
    most recent walk are available through get_stats().
    """

    def __init__(self):
        self._stats = _new_stats()

    def search(self, request: SearchRequest) -> Tuple[List[MatchResult], SearchSummary]:
        """
        Run a search and collect all matches.

        A root that does not exist or is not a directory yields no matches
        and a zero summary rather than an error.

        Args:
            request: Validated search request

        Returns:
            Tuple of (matches in discovery order, summary)
        """
        if not self._check_root(request.root_directory):
            self._stats = _new_stats()
            return [], SearchSummary(match_count=0, elapsed_ms=0, stats=self.get_stats())

        matches: List[MatchResult] = []

        start = time.perf_counter()
        try:
            for match in self._iter_walk(request):
                matches.append(match)
        except Exception as e:
            logger.error(f"Error searching {request.root_directory}: {e}")
            self._stats['errors'] += 1
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        summary = SearchSummary(
            match_count=len(matches),
            elapsed_ms=elapsed_ms,
            stats=self.get_stats()
        )
        logger.info(f"Search for '{request.pattern}' in {request.root_directory}: {summary}")

        return matches, summary

    def iter_matches(self, request: SearchRequest) -> Iterator[MatchResult]:
        """
        Walk the request's root directory and yield matches as they are found.

        Args:
            request: Validated search request

        Yields:
            MatchResult objects with sequential indices starting at 0
        """
        if not self._check_root(request.root_directory):
            self._stats = _new_stats()
            return

        yield from self._iter_walk(request)

    def _iter_walk(self, request: SearchRequest) -> Iterator[MatchResult]:
        """Walk a root already known to be a directory, with a fresh cursor."""
        cursor = _TraversalCursor(max_results=request.max_results)
        self._stats = cursor.stats

        folded_pattern = ascii_fold(request.pattern)
        logger.debug(f"Walking directory tree: {request.root_directory}")

        yield from self._walk_directory(
            request.root_directory, 0, folded_pattern, request.max_depth, cursor
        )

        if cursor.budget_exhausted():
            logger.info(f"Reached maximum result limit: {request.max_results}")

    def _walk_directory(self, directory: str, depth: int, folded_pattern: str,
                        max_depth: Optional[int], cursor: _TraversalCursor) -> Iterator[MatchResult]:
        """
        Recursively walk one directory.

        Args:
            directory: Directory to list, as discovered
            depth: Nesting level of this directory (0 for the root)
            folded_pattern: Pattern after ASCII folding
            max_depth: Deepest level that may be entered, or None
            cursor: Traversal state of the current search

        Yields:
            MatchResult objects for matching files
        """
        try:
            with os.scandir(directory) as it:
                cursor.stats['directories_traversed'] += 1

                for entry in it:
                    if cursor.budget_exhausted():
                        return

                    cursor.stats['entries_scanned'] += 1

                    try:
                        is_dir = entry.is_dir(follow_symlinks=False)
                        is_file = not is_dir and entry.is_file()
                    except OSError as e:
                        logger.debug(f"Skipping inaccessible entry {entry.path}: {e}")
                        cursor.stats['errors'] += 1
                        continue

                    if is_dir:
                        if max_depth is not None and depth + 1 > max_depth:
                            cursor.stats['directories_pruned'] += 1
                            continue

                        yield from self._walk_directory(
                            entry.path, depth + 1, folded_pattern, max_depth, cursor
                        )
                        continue

                    if not is_file:
                        continue

                    try:
                        if folded_pattern not in ascii_fold(entry.name):
                            continue
                        match = MatchResult(index=cursor.match_count, path=entry.path)
                    except Exception as e:
                        logger.warning(f"Error processing file {entry.path!r}: {e}")
                        cursor.stats['errors'] += 1
                        continue

                    cursor.match_count += 1
                    yield match

        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            cursor.stats['errors'] += 1

    def _check_root(self, root_directory: str) -> bool:
        """Check that the root exists and is a directory."""
        if not os.path.exists(root_directory):
            logger.warning(f"Root directory does not exist: {root_directory}")
            return False

        if not os.path.isdir(root_directory):
            logger.warning(f"Root path is not a directory: {root_directory}")
            return False

        return True

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the most recent walk.

        Returns:
            Dictionary containing walk counters
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = _new_stats()


def search_files(request: SearchRequest) -> Tuple[List[MatchResult], SearchSummary]:
    """
    Convenience function to run a single search.

    Args:
        request: Validated search request

    Returns:
        Tuple of (matches in discovery order, summary)
    """
    return DirectorySearcher().search(request)
