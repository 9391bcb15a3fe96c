"""Data models for scriptx."""

from scriptx.models.chapter import Chapter, ChapterTags, ProbeOutput

__all__ = ["Chapter", "ChapterTags", "ProbeOutput"]
