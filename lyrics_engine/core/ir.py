"""Intermediate and output dataclasses for parsed lyrics.

WHY: Lyric files arrive in several loosely specified timestamp formats.
The media player only wants one thing: an ordered list of display lines,
optionally with word timing and a translation. These dataclasses are the
contract between the parsers, the translation merger, the timeline pass,
and every formatter.

HOW: Three dataclasses:
  LyricWord      — one highlighted word with start/end time
  LyricLine      — one display line, the final output unit
  ParsedLineData — a parser-local candidate line, discarded after grouping

RULES:
- All times are in float seconds
- LyricWord.end_time > start_time once a parse call returns
- LyricLine.translation is None or non-empty, trimmed, and never equal
  (case-insensitive) to the line's text
- ParsedLineData never escapes a parse call
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class LyricWord:
    """A single highlighted word (or word plus merged punctuation).

    RULES:
    - start_time / end_time: float seconds
    - end_time may be <= start_time right after construction; the
      sanitization passes fix that before output
    """

    start_time: float
    end_time: float
    text: str


@dataclass
class LyricLine:
    """One display line of the final, time-ordered lyric sequence.

    WHY: This is what the renderer consumes. Line-timed sources only know
    when a line starts; word-synced sources also know when each word is
    sung. ``is_precise_timing`` tells the renderer which one it has.

    RULES:
    - time: when the line becomes active, float seconds
    - words: empty when the source had no word timing
    - translation: None, or non-empty text (may contain newlines when
      several translation candidates were attached)
    - duration: filled in by the timeline pass (gap to the next line)
    - is_interlude: True only for synthesized idle placeholders
    """

    time: float
    text: str
    words: list[LyricWord] = field(default_factory=list)
    translation: str | None = None
    is_precise_timing: bool = False
    duration: float | None = None
    is_interlude: bool = False


@dataclass
class ParsedLineData:
    """A candidate line produced by one grammar, before grouping.

    WHY: Several raw lines can compete for the same timestamp (original
    text, translation, credit line). Grouping needs a priority score and
    a stable tie-break to pick the main line deterministically.

    RULES:
    - tag_count: 0 for plain lines, number of word tags for enhanced LRC,
      1000 + word count for word-synced lines
    - original_index: zero-based raw line number, used only to break ties
      between equal (or near-equal) times
    - is_metadata: credit / non-lyric line
    """

    time: float
    text: str
    words: list[LyricWord] = field(default_factory=list)
    tag_count: int = 0
    original_index: int = 0
    is_metadata: bool = False
