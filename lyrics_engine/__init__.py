"""Lyrics Engine — lyric parsing, translation merging, and timing hub.

WHY: Lyric files come in competing, loosely specified timestamp formats
(LRC, enhanced LRC, word-synced catalog lyrics with JSON credit lines)
and translations arrive either inline or as a separate blob. A media
player needs one canonical, time-ordered list of display lines.

HOW: Three-stage pipeline — parse (format detection and grammar
dispatch), merge (translations, interludes, durations), format
(pluggable formatters for JSON, LRC, plain text). Each stage is
independently testable.

RULES:
- parse_lyrics() is the single entry point into the core
- All formatters consume the same list of LyricLine
- Adding a new output format = one new formatter module, no core changes
"""

from lyrics_engine.core import LyricLine, LyricWord, parse_lyrics

__version__ = "0.1.0"

__all__ = ["LyricLine", "LyricWord", "parse_lyrics", "__version__"]
