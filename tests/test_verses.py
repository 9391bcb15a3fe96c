"""Tests for verse token parsing."""

import pytest

from scriptx.errors import InvalidRangeFormat, VerseFromTitle
from scriptx.verses import (
    VerseKind,
    VerseToken,
    classify,
    parse_token,
    split_range,
    verse_from_title,
)


class TestClassify:
    """Tests for classify."""

    def test_single(self):
        assert classify("1") == VerseKind.SINGLE
        assert classify("5") == VerseKind.SINGLE

    def test_range(self):
        assert classify("5-7") == VerseKind.RANGE

    def test_malformed_range_is_still_range(self):
        """Test classification only looks for the separator."""
        assert classify("5-") == VerseKind.RANGE
        assert classify("1-2-3") == VerseKind.RANGE


class TestSplitRange:
    """Tests for split_range."""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("5-7", ("5", "7")),
            ("5-17", ("5", "17")),
            ("15-17", ("15", "17")),
            (" 2 - 5 ", ("2", "5")),
        ],
    )
    def test_split(self, token, expected):
        assert split_range(token) == expected

    @pytest.mark.parametrize("token", ["5", "1-2-3", "-5", "5-", "-", ""])
    def test_invalid(self, token):
        """Test tokens without exactly two non-empty parts."""
        with pytest.raises(InvalidRangeFormat) as exc_info:
            split_range(token)
        assert exc_info.value.token == token


class TestParseToken:
    """Tests for parse_token."""

    def test_single(self):
        token = parse_token("16")

        assert token == VerseToken.single("16")
        assert token.is_range is False
        assert token.start == token.end == "16"

    def test_range(self):
        token = parse_token("16-18")

        assert token.kind == VerseKind.RANGE
        assert token.is_range is True
        assert (token.start, token.end) == ("16", "18")

    def test_invalid_range(self):
        with pytest.raises(InvalidRangeFormat):
            parse_token("16-17-18")


class TestVerseFromTitle:
    """Tests for verse_from_title."""

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Joel 5:1", 1),
            ("John 3:16", 16),
            ("Ps. 18:32", 32),
            ("Note: John 3:2", 2),
            ("Acts 2:3:4", 4),
        ],
    )
    def test_verse_number(self, title, expected):
        assert verse_from_title(title) == expected

    def test_not_a_number(self):
        with pytest.raises(VerseFromTitle) as exc_info:
            verse_from_title("John 3:sixteen")
        assert exc_info.value.item == "sixteen"

    def test_no_separator(self):
        with pytest.raises(VerseFromTitle):
            verse_from_title("Introduction")
