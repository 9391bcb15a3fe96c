"""ScriptX - Sign Language Bible verse slicer.

Cuts individual verses out of chapter-tagged Bible videos:
1. Reads chapter metadata (one chapter per verse) with ffprobe
2. Resolves a verse or verse range to start/end timestamps
3. Extracts the segment with an ffmpeg stream copy
"""

__version__ = "0.1.0"
