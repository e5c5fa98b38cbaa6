"""
Unit tests for the search request and search result models.
"""

import pytest
from datetime import timedelta
from pydantic import ValidationError

from filesearch.models.search_request import SearchRequest
from filesearch.models.search_results import MatchResult, SearchSummary, format_duration


class TestSearchRequest:
    """Test cases for the SearchRequest model."""

    def test_basic_request_creation(self):
        request = SearchRequest(pattern="notes", root_directory="/home/user")

        assert request.pattern == "notes"
        assert request.root_directory == "/home/user"
        assert not request.has_depth_limit()
        assert not request.has_result_limit()

    def test_values_are_not_normalized(self):
        """Test that pattern and root are kept exactly as given."""
        request = SearchRequest(pattern=" Mixed Case ", root_directory="./rel/../dir")

        assert request.pattern == " Mixed Case "
        assert request.root_directory == "./rel/../dir"

    def test_empty_fields_rejected(self):
        with pytest.raises(ValidationError):
            SearchRequest(pattern="", root_directory="/tmp")

        with pytest.raises(ValidationError):
            SearchRequest(pattern="x", root_directory="")

    def test_limits_must_be_positive(self):
        with pytest.raises(ValidationError):
            SearchRequest(pattern="x", root_directory="/tmp", max_depth=0)

        with pytest.raises(ValidationError):
            SearchRequest(pattern="x", root_directory="/tmp", max_results=-1)

    def test_boolean_limit_rejected(self):
        with pytest.raises(ValidationError):
            SearchRequest(pattern="x", root_directory="/tmp", max_results=True)

    def test_request_is_immutable(self):
        request = SearchRequest(pattern="x", root_directory="/tmp")

        with pytest.raises(ValidationError):
            request.pattern = "y"

    def test_with_limits_keeps_explicit_values(self):
        request = SearchRequest(pattern="x", root_directory="/tmp", max_depth=2)

        updated = request.with_limits(max_depth=9, max_results=5)

        assert updated.max_depth == 2
        assert updated.max_results == 5
        assert request.max_results is None

    def test_with_limits_unchanged_returns_same(self):
        request = SearchRequest(pattern="x", root_directory="/tmp")

        assert request.with_limits() is request

    def test_dict_roundtrip(self):
        request = SearchRequest(pattern="x", root_directory="/tmp", max_results=3)

        assert SearchRequest.from_dict(request.to_dict()) == request

    def test_string_representation(self):
        request = SearchRequest(pattern="x", root_directory="/tmp", max_depth=2)
        text = str(request)

        assert "Pattern: 'x'" in text
        assert "Max depth: 2" in text
        assert "Max results" not in text


class TestFormatDuration:
    """Test cases for elapsed time formatting."""

    def test_below_one_second(self):
        assert format_duration(0) == "0 ms"
        assert format_duration(500) == "500 ms"
        assert format_duration(999) == "999 ms"

    def test_seconds_only(self):
        assert format_duration(1000) == "1s 0ms"
        assert format_duration(45000) == "45s 0ms"

    def test_minutes(self):
        assert format_duration(61500) == "1m 1s 500ms"
        assert format_duration(3599999) == "59m 59s 999ms"

    def test_hours(self):
        assert format_duration(3661000) == "1h 1m 1s 0ms"
        assert format_duration(3600000) == "1h 0m 0s 0ms"
        assert format_duration(90000000) == "25h 0m 0s 0ms"

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            format_duration(-1)


class TestMatchResult:
    """Test cases for the MatchResult model."""

    def test_line_format(self):
        match = MatchResult(index=3, path="/data/report.txt")

        assert match.to_line() == "[3]/data/report.txt"
        assert str(match) == "[3]/data/report.txt"

    def test_path_helpers(self):
        match = MatchResult(index=0, path="/data/sub/report.txt")

        assert match.get_filename() == "report.txt"
        assert match.get_directory() == "/data/sub"
        assert match.to_dict()['filename'] == "report.txt"

    def test_negative_index_rejected(self):
        with pytest.raises(ValidationError):
            MatchResult(index=-1, path="/data/x")


class TestSearchSummary:
    """Test cases for the SearchSummary model."""

    def test_defaults(self):
        summary = SearchSummary()

        assert summary.match_count == 0
        assert summary.elapsed_ms == 0
        assert summary.elapsed == timedelta(0)

    def test_summary_text(self):
        summary = SearchSummary(match_count=2, elapsed_ms=45000)

        assert summary.to_text() == (
            "Search summary:\n"
            "  Files found: 2\n"
            "  Time elapsed: 45s 0ms\n"
        )

    def test_elapsed_view(self):
        summary = SearchSummary(match_count=0, elapsed_ms=1500)

        assert summary.elapsed == timedelta(seconds=1, milliseconds=500)
        assert summary.to_dict()['elapsed_human'] == "1s 500ms"

    def test_stats_lookup(self):
        summary = SearchSummary(stats={'errors': 2})

        assert summary.get_stat('errors') == 2
        assert summary.get_stat('missing') is None


class TestFileSystemText:
    """Test cases for paths holding undecodable file name bytes."""

    def setup_method(self):
        self.raw_path = b"/data/a_report_\xff.txt".decode("utf-8", "surrogateescape")

    def test_match_keeps_surrogate_escapes(self):
        match = MatchResult(index=0, path=self.raw_path)

        assert match.path == self.raw_path
        assert match.get_filename() == "a_report_\udcff.txt"
        assert match.to_dict()['path'] == self.raw_path

    def test_request_keeps_surrogate_escapes(self):
        root = b"/data/\xfe".decode("utf-8", "surrogateescape")

        request = SearchRequest(pattern="report", root_directory=root)

        assert request.root_directory == root

    def test_non_string_path_rejected(self):
        with pytest.raises(ValidationError):
            MatchResult(index=0, path=b"/data/x")

    def test_empty_path_rejected(self):
        with pytest.raises(ValidationError):
            MatchResult(index=0, path="")
