"""Chapter catalog for scriptx.

Holds the chapters of one source video, in file order, and resolves verse
labels to ``(start, end)`` times by matching chapter titles. Users type a
bare verse label such as ``16``; the book and chapter prefix (``John 3:``)
is inferred from the titles so the full title ``John 3:16`` can be found.
"""

from __future__ import annotations

import re
from typing import Iterator, Sequence

from pydantic import ValidationError

from scriptx.errors import FileError, PrefixNotMatch, VerseNotFound
from scriptx.logging import get_logger
from scriptx.models.chapter import Chapter, ProbeOutput
from scriptx.verses import VerseToken, parse_token, verse_from_title

logger = get_logger(__name__)

# Everything up to and including the last ':' ("Joel 1:2" -> "Joel 1:").
PREFIX_PATTERN = re.compile(r"^(.*:)", re.DOTALL)


def parse_time(value: str) -> float:
    """Parse a decimal-seconds string from ffprobe."""
    try:
        return float(value)
    except ValueError as e:
        raise FileError(f"Malformed chapter time in probe output: {value!r}") from e


class ChapterCatalog:
    """Ordered, read-only collection of the chapters in one video.

    Example:
        catalog = ChapterCatalog.from_json(probe_stdout)
        start, end = catalog.verse("16-18")
    """

    def __init__(self, chapters: Sequence[Chapter]) -> None:
        self._chapters: tuple[Chapter, ...] = tuple(chapters)

    @classmethod
    def from_probe_output(cls, output: ProbeOutput) -> "ChapterCatalog":
        return cls(output.chapters)

    @classmethod
    def from_json(cls, data: str | bytes, source: str | None = None) -> "ChapterCatalog":
        """Build a catalog from ffprobe's JSON chapter listing.

        Args:
            data: Raw ffprobe stdout
            source: Video path, for error messages

        Raises:
            FileError: If the output is not valid chapter JSON.
        """
        try:
            output = ProbeOutput.model_validate_json(data)
        except ValidationError as e:
            raise FileError(f"Error during JSON parsing of probe output: {e}", path=source) from e

        return cls.from_probe_output(output)

    @property
    def chapters(self) -> tuple[Chapter, ...]:
        return self._chapters

    def __len__(self) -> int:
        return len(self._chapters)

    def __iter__(self) -> Iterator[Chapter]:
        return iter(self._chapters)

    def last_chapter(self) -> Chapter:
        """Return the last chapter in the file.

        Raises:
            VerseNotFound: If the catalog is empty.
        """
        if not self._chapters:
            raise VerseNotFound("<no chapters>")
        return self._chapters[-1]

    def lookup_title(self, title: str) -> Chapter:
        """Return the first chapter whose title equals ``title`` exactly."""
        for chapter in self._chapters:
            if chapter.title == title:
                return chapter

        raise VerseNotFound(title)

    def find_verse_id(self, title: str) -> int:
        """Return the id of the chapter with the given title."""
        return self.lookup_title(title).id

    def get_times(self, chapter_id: int) -> tuple[float, float]:
        """Return the parsed start and end time of the chapter with ``chapter_id``."""
        for chapter in self._chapters:
            if chapter.id == chapter_id:
                return parse_time(chapter.start_time), parse_time(chapter.end_time)

        raise VerseNotFound(f"id {chapter_id}")

    def prefix(self) -> str:
        """Return the title prefix shared by all verses, e.g. ``John 3:``.

        Taken from the last chapter's title: everything before the final
        verse number, separator included.

        Raises:
            PrefixNotMatch: If the last title contains no ``:``.
        """
        title = self.last_chapter().title
        match = PREFIX_PATTERN.match(title)
        if match is None:
            raise PrefixNotMatch(title)
        return match.group(1)

    def full_title(self, label: str) -> str:
        return f"{self.prefix()}{label.strip()}"

    def resolve(self, label: str) -> tuple[float, float]:
        """Return ``(start, end)`` for a single verse label such as ``16``."""
        chapter = self.lookup_title(self.full_title(label))
        return parse_time(chapter.start_time), parse_time(chapter.end_time)

    def resolve_token(self, token: VerseToken) -> tuple[float, float]:
        """Resolve a parsed token.

        A range spans from the start of its first verse to the end of its
        last verse. The order of the two verses is not checked.
        """
        if not token.is_range:
            return self.resolve(token.start)

        start_time = self.resolve(token.start)[0]
        end_time = self.resolve(token.end)[1]

        if start_time > end_time:
            logger.warning(
                f"Verse range {token.start}-{token.end} ends before it starts",
                extra={"start_time": start_time, "end_time": end_time},
            )

        return start_time, end_time

    def verse(self, token: str) -> tuple[float, float]:
        """Return ``(start, end)`` for a raw verse argument (``16`` or ``16-18``)."""
        return self.resolve_token(parse_token(token))

    def resolve_all(self) -> list[tuple[float, float]]:
        """Return the times of every verse label from 1 up to the last verse.

        The upper bound is exclusive: the verse number of the last chapter
        itself is not included. Labels with no matching chapter are skipped.

        Raises:
            VerseFromTitle: If the last title's verse number is not an integer.
            PrefixNotMatch: If the last title contains no ``:``.
        """
        last_verse = verse_from_title(self.last_chapter().title)
        prefix = self.prefix()

        # First chapter wins on duplicate titles, as in lookup_title
        by_title: dict[str, Chapter] = {}
        for chapter in self._chapters:
            by_title.setdefault(chapter.title, chapter)

        all_verses: list[tuple[float, float]] = []
        for number in range(1, last_verse):
            chapter = by_title.get(f"{prefix}{number}")
            if chapter is None:
                logger.debug(f"Skipping verse {number}: no matching chapter")
                continue
            all_verses.append((parse_time(chapter.start_time), parse_time(chapter.end_time)))

        return all_verses
