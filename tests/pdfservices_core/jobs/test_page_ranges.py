"""Unit tests for PageRange and PageRanges."""

import pytest

from pdfservices_core.jobs.params import PageRange, PageRanges, require_ranges
from pdfservices_core.runtime.errors import ValidationError


class TestPageRange:
    """Tests for a single range."""

    def test_single_page(self):
        """Should render start == end as one page."""
        page_range = PageRange(start=3, end=3)

        assert str(page_range) == "3"
        assert page_range.to_payload() == {"start": 3, "end": 3}

    def test_open_range(self):
        """Should omit end for an open range."""
        page_range = PageRange(start=7)

        assert str(page_range) == "7-"
        assert page_range.to_payload() == {"start": 7}

    def test_end_before_start_rejected(self):
        """Should reject end < start."""
        with pytest.raises(ValidationError) as exc_info:
            PageRange(start=5, end=2)

        assert exc_info.value.field == "end"

    def test_zero_page_rejected(self):
        """Pages are 1-based."""
        with pytest.raises(ValidationError) as exc_info:
            PageRange(start=0)

        assert exc_info.value.field == "start"


class TestPageRanges:
    """Tests for the range collection."""

    def test_builders_return_new_instances(self):
        """Should not mutate the receiver."""
        empty = PageRanges()
        ranges = empty.add_single_page(1).add_range(3, 4).add_all_from(7)

        assert empty.is_empty()
        assert len(ranges) == 3
        assert str(ranges) == "1,3-4,7-"

    def test_to_payload(self):
        """Should render a list of start/end objects."""
        ranges = PageRanges().add_single_page(2).add_all_from(5)

        assert ranges.to_payload() == [{"start": 2, "end": 2}, {"start": 5}]

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1", "1"),
            ("1,3-4,7-", "1,3-4,7-"),
            (" 2 , 4-6 ", "2,4-6"),
        ],
    )
    def test_parse(self, text, expected):
        """Should parse pages, closed ranges and open ranges."""
        assert str(PageRanges.parse(text)) == expected

    @pytest.mark.parametrize("text", ["", "a", "3-1", "1,,2", "-4"])
    def test_parse_rejects_malformed(self, text):
        """Should raise ValidationError for malformed input."""
        with pytest.raises(ValidationError):
            PageRanges.parse(text)


class TestRequireRanges:
    """Tests for the required-ranges helper."""

    def test_missing(self):
        """Should report a missing field."""
        with pytest.raises(ValidationError) as exc_info:
            require_ranges(None, "page_ranges", "DeletePagesJob")

        assert exc_info.value.code == "MISSING_FIELD"

    def test_empty(self):
        """Should reject an empty collection."""
        with pytest.raises(ValidationError) as exc_info:
            require_ranges(PageRanges(), "page_ranges", "DeletePagesJob")

        assert exc_info.value.field == "page_ranges"

    def test_present(self):
        """Should accept a non-empty collection."""
        require_ranges(PageRanges().add_single_page(1), "page_ranges", "DeletePagesJob")
