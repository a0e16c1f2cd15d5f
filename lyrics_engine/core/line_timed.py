"""Line-timed (LRC-style) lyric parser with optional inline word tags.

WHY: LRC is the most common lyric format, and also the messiest: one line
may carry several timestamps, a translation is often written as a second
line with the same (or almost the same) timestamp, and credit lines are
timed like lyrics. This module turns all of that into one display line per
moment.

HOW: Three passes:
  1. Parse every raw line into zero or more ParsedLineData candidates
     (one per leading timestamp)
  2. Sort by time and group candidates less than 0.1s apart
  3. Pick a main line per group; the other meaningful members become
     its translation

Grammar:
  [mm:ss.xx][mm:ss.xx]...text
  text may contain <mm:ss.xx>word tags; a word ends where the next word
  tag starts, the last word ends 1.0s after its own start

RULES:
- Main line priority: most word tags among non-metadata lines with
  content, else any line with content, else the first; ties by
  original_index
- A group whose main line is metadata is dropped entirely
- Translation members equal (case-insensitive) to the main text are dropped
- Output lines have is_precise_timing=False
- Word end times are clamped to the next line's time, then durations are
  computed
"""

from __future__ import annotations

import logging
import re
from typing import List, Tuple

from lyrics_engine.core.grammar import TIME_TAG_RE, WORD_TAG_RE, tag_to_seconds
from lyrics_engine.core.ir import LyricLine, LyricWord, ParsedLineData
from lyrics_engine.core.metadata import is_metadata_line
from lyrics_engine.core.timeline import process_lyrics_durations
from lyrics_engine.core.utils import (
    create_word,
    fix_word_end_times,
    get_entry_display_text,
    has_meaningful_content,
    merge_punctuation_words,
    sort_entries,
)

logger = logging.getLogger(__name__)

# Candidates closer than this belong to the same display line.
GROUP_THRESHOLD_S = 0.1

# Guessed duration of the last word-tagged word in a line.
LAST_WORD_DURATION_S = 1.0

_LEADING_TAGS_RE = re.compile(r"^((?:\[\d{2}:\d{2}\.\d{2,3}\]\s*)+)(.*)$")

_ANY_TAG_RE = re.compile(r"<[^>]+>")


def parse_word_tags(content: str) -> Tuple[str, List[LyricWord], int]:
    """Parse inline <mm:ss.xx>word tags out of line content.

    RULES:
    - Each tag's word ends at the next tag's time; the last ends +1.0s
    - Tags with empty word text still count towards tag_count
    - Returned text is the content with every <...> tag removed, trimmed

    Returns:
        (text, punctuation-merged words, number of word tags)
    """
    matches = list(WORD_TAG_RE.finditer(content))
    words: List[LyricWord] = []

    for index, match in enumerate(matches):
        start = tag_to_seconds(match.group(1), match.group(2), match.group(3))
        if index + 1 < len(matches):
            following = matches[index + 1]
            end = tag_to_seconds(following.group(1), following.group(2), following.group(3))
        else:
            end = start + LAST_WORD_DURATION_S
        if match.group(4):
            words.append(create_word(match.group(4), start, end))

    text = _ANY_TAG_RE.sub("", content).strip()
    return text, merge_punctuation_words(words), len(matches)


def parse_lrc_line(line: str, original_index: int) -> List[ParsedLineData]:
    """Parse one raw line into one candidate per leading timestamp."""
    trimmed = line.strip()
    if not trimmed:
        return []

    match = _LEADING_TAGS_RE.match(trimmed)
    if not match:
        return []

    text, words, tag_count = parse_word_tags(match.group(2).strip())
    is_metadata = is_metadata_line(text)

    return [
        ParsedLineData(
            time=tag_to_seconds(minutes, seconds, fraction),
            text=text,
            words=[create_word(w.text, w.start_time, w.end_time) for w in words],
            tag_count=tag_count,
            original_index=original_index,
            is_metadata=is_metadata,
        )
        for minutes, seconds, fraction in TIME_TAG_RE.findall(match.group(1))
    ]


def _pick_main(group: List[ParsedLineData]) -> ParsedLineData:
    ranked = sorted(group, key=lambda e: (-e.tag_count, e.original_index))
    for entry in ranked:
        if not entry.is_metadata and has_meaningful_content(entry):
            return entry
    for entry in ranked:
        if has_meaningful_content(entry):
            return entry
    return ranked[0]


def group_and_merge_lines(entries: List[ParsedLineData]) -> List[Tuple[int, LyricLine]]:
    """Collapse time-sorted candidates into display lines.

    WHY: A translation written as a second LRC line with the same timestamp
    must end up attached to the original line, not shown as its own line.

    HOW: Starting from the first ungrouped candidate, every following
    candidate less than GROUP_THRESHOLD_S after it joins the group. The
    main line is picked by priority; the rest become the translation.

    Args:
        entries: Candidates sorted by time, then original_index.

    Returns:
        (original_index of the main line, LyricLine) pairs in group order.
    """
    result: List[Tuple[int, LyricLine]] = []
    i = 0

    while i < len(entries):
        anchor = entries[i]
        j = i + 1
        while j < len(entries) and abs(entries[j].time - anchor.time) < GROUP_THRESHOLD_S:
            j += 1
        group = entries[i:j]
        i = j

        main = _pick_main(group)
        if main.is_metadata:
            continue

        main_text = (get_entry_display_text(main) or main.text).strip()
        normalized_main = main_text.lower()

        translation_parts = []
        for entry in group:
            if entry is main or entry.is_metadata or not has_meaningful_content(entry):
                continue
            text = get_entry_display_text(entry).strip()
            if text and text.lower() != normalized_main:
                translation_parts.append(text)

        result.append((main.original_index, LyricLine(
            time=main.time,
            text=main_text,
            words=list(main.words),
            translation="\n".join(translation_parts) if translation_parts else None,
            is_precise_timing=False,
        )))

    return result


def parse_lrc(content: str) -> List[LyricLine]:
    """Parse line-timed (LRC / enhanced LRC) lyrics.

    Args:
        content: Raw lyric text, newline-delimited.

    Returns:
        Display lines sorted by time, with translations attached and
        durations filled in.

    Raises:
        TypeError: If content is not a string.
    """
    if not isinstance(content, str):
        raise TypeError("Lyric content must be str, not {}".format(type(content).__name__))

    entries: List[ParsedLineData] = []
    for index, line in enumerate(content.split("\n")):
        entries.extend(parse_lrc_line(line, index))

    entries = sort_entries(entries)
    grouped = group_and_merge_lines(entries)
    grouped.sort(key=lambda pair: (pair[1].time, pair[0]))
    lines = [line for _, line in grouped]

    fix_word_end_times(lines)
    logger.debug("Parsed %d line-timed candidates into %d lines", len(entries), len(lines))
    return process_lyrics_durations(lines)
