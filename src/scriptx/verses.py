"""Verse token parsing for scriptx.

A user asks for verses with a bare label (``16``) or a range of labels
(``16-18``). This module classifies those tokens and reads verse numbers
back out of chapter titles.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from scriptx.errors import InvalidRangeFormat, VerseFromTitle

RANGE_SEPARATOR = "-"
TITLE_SEPARATOR = ":"


class VerseKind(str, Enum):
    """Whether a token names one verse or a range of verses."""

    SINGLE = "single"
    RANGE = "range"


@dataclass(frozen=True)
class VerseToken:
    """A parsed verse request.

    Attributes:
        kind: Single verse or range
        start: Label of the (first) verse
        end: Label of the last verse; equals ``start`` for a single verse
    """

    kind: VerseKind
    start: str
    end: str

    @classmethod
    def single(cls, label: str) -> "VerseToken":
        return cls(VerseKind.SINGLE, label, label)

    @classmethod
    def verse_range(cls, start: str, end: str) -> "VerseToken":
        return cls(VerseKind.RANGE, start, end)

    @property
    def is_range(self) -> bool:
        return self.kind == VerseKind.RANGE


def classify(token: str) -> VerseKind:
    """Determine whether the token is a single verse or part of a range."""
    if RANGE_SEPARATOR in token:
        return VerseKind.RANGE
    return VerseKind.SINGLE


def split_range(token: str) -> tuple[str, str]:
    """Split a verse range into ``(starting_verse, ending_verse)``.

    Example:
        >>> split_range("5-17")
        ('5', '17')

    Raises:
        InvalidRangeFormat: If the token does not have exactly two
            non-empty parts around a single ``-``.
    """
    parts = token.split(RANGE_SEPARATOR)
    if len(parts) != 2:
        raise InvalidRangeFormat(token)

    start, end = (part.strip() for part in parts)
    if not start or not end:
        raise InvalidRangeFormat(token)

    return start, end


def parse_token(token: str) -> VerseToken:
    """Parse a raw ``--verse`` argument into a VerseToken."""
    if classify(token) == VerseKind.RANGE:
        return VerseToken.verse_range(*split_range(token))
    return VerseToken.single(token.strip())


def verse_from_title(title: str) -> int:
    """Return the verse number from a full title.

    Example:
        >>> verse_from_title("John 3:16")
        16

    Raises:
        VerseFromTitle: If the title has no ``:`` or the text after the
            last one is not an integer.
    """
    parts = title.rsplit(TITLE_SEPARATOR, 1)
    if len(parts) < 2:
        raise VerseFromTitle(title)

    item = parts[1].strip()
    try:
        return int(item)
    except ValueError as e:
        raise VerseFromTitle(item) from e
