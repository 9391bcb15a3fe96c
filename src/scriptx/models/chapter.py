"""Chapter models for scriptx.

Mirror the JSON that ``ffprobe -show_chapters -print_format json`` emits.
In a verse-tagged Bible video every chapter is one verse, titled like
``John 3:16``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ChapterTags(BaseModel):
    """Tags attached to a chapter.

    Only the title is used: it identifies the verse the chapter holds.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""


class Chapter(BaseModel):
    """A named, timestamped segment of a source video."""

    model_config = ConfigDict(frozen=True)

    id: int
    time_base: str = ""
    start: int = 0  # Start in time_base ticks
    start_time: str  # Decimal seconds, e.g. "197.597000"
    end: int = 0
    end_time: str
    tags: ChapterTags = Field(default_factory=ChapterTags)

    @property
    def title(self) -> str:
        """Chapter title, e.g. ``John 3:16``."""
        return self.tags.title


class ProbeOutput(BaseModel):
    """Top level of ffprobe's chapter listing."""

    model_config = ConfigDict(frozen=True)

    chapters: list[Chapter] = Field(default_factory=list)
