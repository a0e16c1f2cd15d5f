"""Time-tag parsing, word construction, punctuation merging, and the
word-timing sanitization passes shared by both parsers.

WHY: Both grammars need the same small toolbox: turn "mm:ss.xx" into
seconds, build words, fold stray punctuation into the preceding word,
decide whether a candidate line actually says anything, and repair word
end times that third-party sources get wrong.

HOW: Plain functions over the IR dataclasses. The two repair passes
mutate word end times in place; they only ever run on records created
inside the current parse call.

RULES:
- Time tags: mm:ss.xx (hundredths) or mm:ss.xxx (milliseconds)
- Time keys: integer milliseconds
- Punctuation-only words merge into the previous word; a leading
  punctuation word stays standalone
- After either repair pass every word has end_time > start_time
"""

from __future__ import annotations

import re
import unicodedata
from typing import List, Optional, Sequence, Union

from lyrics_engine.core.ir import LyricLine, LyricWord, ParsedLineData

# Longest believable single-word duration in word-synced sources.
MAX_WORD_DURATION_S = 2.0

# Duration forced onto a word whose end collapsed onto its start.
MIN_WORD_DURATION_S = 0.1

_TIME_TAG_RE = re.compile(r"^(\d+):(\d+)\.(\d{2,3})$")


def parse_time_tag(text: str) -> float:
    """Parse "mm:ss.xx" or "mm:ss.xxx" into float seconds.

    RULES:
    - Two fractional digits are hundredths, three are milliseconds
    - Raises ValueError on anything else; callers only pass text that
      already matched a time-tag pattern

    Args:
        text: The tag without brackets, e.g. "01:02.345".

    Returns:
        Seconds as a float (62.345 for the example).
    """
    match = _TIME_TAG_RE.match(text.strip())
    if not match:
        raise ValueError("Malformed time tag: {!r}".format(text))
    minutes, seconds, fraction = match.groups()
    return int(minutes) * 60 + int(seconds) + int(fraction) / (10 ** len(fraction))


def normalize_time_key(time: float) -> int:
    """Quantize a time in seconds to an integer millisecond key."""
    return int(round(time * 1000))


def create_word(text: str, start: float, end: float) -> LyricWord:
    """Build a LyricWord. end is not checked against start here."""
    return LyricWord(start_time=start, end_time=end, text=text)


def is_punctuation_only(text: str) -> bool:
    """True if every character is punctuation or whitespace.

    Empty text counts as punctuation-only so empty word fragments fold
    into their predecessor instead of rendering as blank tokens.
    """
    return all(
        ch.isspace() or unicodedata.category(ch).startswith("P")
        for ch in text
    )


def merge_punctuation_words(words: Sequence[LyricWord]) -> List[LyricWord]:
    """Fold punctuation-only words into the preceding word.

    WHY: A trailing "!" or "，" timed as its own word renders as a lone
    highlighted token. Readers expect "Hello!" to light up as one unit.

    HOW: Walk left to right. A punctuation-only word appends its text to
    the last kept word and extends that word's end time to its own end.
    A punctuation word with nothing before it is kept as is.

    RULES:
    - Input words are not modified; merged words are copies
    - Order is preserved
    """
    merged: List[LyricWord] = []
    for word in words:
        if merged and is_punctuation_only(word.text):
            prev = merged[-1]
            prev.text += word.text
            prev.end_time = word.end_time
        else:
            merged.append(create_word(word.text, word.start_time, word.end_time))
    return merged


def _words_text(words: Sequence[LyricWord]) -> str:
    return "".join(word.text for word in words).strip()


def get_entry_display_text(entry: Union[ParsedLineData, LyricLine]) -> str:
    """Text to show for a candidate: the word text if any, else the raw text."""
    if entry.words:
        text = _words_text(entry.words)
        if text:
            return text
    return entry.text


def has_meaningful_content(entry: Union[ParsedLineData, LyricLine]) -> bool:
    """True if the display text has something besides punctuation/whitespace."""
    text = get_entry_display_text(entry).strip()
    return bool(text) and not is_punctuation_only(text)


def _ensure_positive(word: LyricWord) -> None:
    if word.end_time <= word.start_time:
        word.end_time = word.start_time + MIN_WORD_DURATION_S


def fix_word_end_times(lines: Sequence[LyricLine]) -> None:
    """Clamp word end times so no word outlasts the start of the next line.

    WHY: Enhanced LRC gives the last word of a line a guessed +1s end,
    which often runs into the following line.

    RULES:
    - Only the next line's time bounds a word; the last line is untouched
      apart from the positive-duration guarantee
    - A word clamped onto (or before) its own start gets MIN_WORD_DURATION_S
    """
    for index, line in enumerate(lines):
        next_line: Optional[LyricLine] = lines[index + 1] if index + 1 < len(lines) else None
        for word in line.words:
            if next_line is not None and word.end_time > next_line.time:
                word.end_time = next_line.time
            _ensure_positive(word)


def sanitize_word_durations(entries: Sequence[ParsedLineData]) -> None:
    """Cap runaway word durations in word-synced entries.

    WHY: Word-synced catalog data occasionally carries word durations of
    tens of seconds. Left alone, a single word stays highlighted through
    the next several lines.

    HOW: For each word, the ceiling is the earlier of start + 2.0s and a
    hard bound: the next word's start in the same line, else the next
    entry's time, else (last word overall) start + 2.0s.

    RULES:
    - entries must already be sorted by time
    - end_time = min(end_time, start + MAX_WORD_DURATION_S, bound)
    - If end_time <= start_time afterwards, end_time = start + 0.1s
    """
    for index, entry in enumerate(entries):
        if not entry.words:
            continue
        next_entry = entries[index + 1] if index + 1 < len(entries) else None

        for position, word in enumerate(entry.words):
            if position + 1 < len(entry.words):
                bound = entry.words[position + 1].start_time
            elif next_entry is not None:
                bound = next_entry.time
            else:
                bound = word.start_time + MAX_WORD_DURATION_S

            word.end_time = min(word.end_time, word.start_time + MAX_WORD_DURATION_S, bound)
            _ensure_positive(word)


def sort_entries(entries: List[ParsedLineData], resolution_s: float = 0.01) -> List[ParsedLineData]:
    """Sort candidates by time, treating times in the same bucket as ties.

    Ties are broken by original_index. The quantized key keeps the sort
    transitive; raw input order never outranks a real time difference
    larger than ``resolution_s``.
    """
    return sorted(
        entries,
        key=lambda e: (int(round(e.time / resolution_s)), e.original_index),
    )
