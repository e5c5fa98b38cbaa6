"""
Data models for filesearch.

This module contains all the core data structures used throughout the system.
"""

from .search_request import SearchRequest
from .search_results import MatchResult, SearchSummary, format_duration

__all__ = ['SearchRequest', 'MatchResult', 'SearchSummary', 'format_duration']
