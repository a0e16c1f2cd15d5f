"""Word-synced lyric parser (per-word timing with mixed-in secondary lines).

WHY: Word-synced catalog lyrics give every word its own start and
duration, which lets the player highlight word by word. The same file
usually also carries JSON credit objects and plain line-timed lines (a
translation or romanization track whose timing drifts by a second or two).
Those extra lines must attach to the right sung line or survive as lines
of their own.

HOW:
  1. Parse each raw line with the shared grammar list (object →
     word-synced → fallback)
  2. Sort by time; sanitize word durations on the word-synced lines
  3. Each word-synced line becomes a bucket; every non-metadata other line
     joins the single nearest bucket if it is less than 3.0s away,
     otherwise it becomes an orphan
  4. Emit buckets (precise timing, with translations) and orphans
     (line timing), sorted by time then original_index

RULES:
- Buckets whose main line is metadata are dropped
- Translations are trimmed, empties and case-insensitive duplicates of
  the main text dropped, remaining ones joined with newlines
- Ties between equally near buckets go to the earliest bucket
- A blank timed line (e.g. "[00:40.00]") is never a translation; it is
  kept as an empty line-timed orphan so the display clears there
- Display text of buckets and orphans is trimmed
- No word-synced lines at all → only non-metadata meaningful lines are
  returned, as plain line-timed lines
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from lyrics_engine.core.grammar import WORD_SYNCED_PRIORITY, parse_grammar_line
from lyrics_engine.core.ir import LyricLine, ParsedLineData
from lyrics_engine.core.utils import (
    get_entry_display_text,
    has_meaningful_content,
    sanitize_word_durations,
    sort_entries,
)

logger = logging.getLogger(__name__)

# Secondary tracks in word-synced files drift; accept matches this far away.
BUCKET_TOLERANCE_S = 3.0


@dataclass
class _Bucket:
    """One word-synced main line plus the secondary lines assigned to it."""

    main: ParsedLineData
    translations: List[str] = field(default_factory=list)


def parse_entries(content: str) -> List[ParsedLineData]:
    """Run the grammar list over every non-blank raw line."""
    entries: List[ParsedLineData] = []
    for index, raw_line in enumerate(content.split("\n")):
        line = raw_line.strip()
        if not line:
            continue
        parsed = parse_grammar_line(line, index)
        if parsed is not None:
            entries.append(parsed)
    return entries


def _nearest_bucket(buckets: List[_Bucket], time: float) -> Tuple[int, float]:
    closest = -1
    min_diff = float("inf")
    for index, bucket in enumerate(buckets):
        diff = abs(bucket.main.time - time)
        if diff < min_diff:
            min_diff = diff
            closest = index
    return closest, min_diff


def merge_with_translations(entries: List[ParsedLineData]) -> List[LyricLine]:
    """Assign secondary lines to word-synced buckets and emit display lines.

    Args:
        entries: All candidates, sorted by time, containing at least one
            word-synced line.

    Returns:
        Display lines sorted by time, then original_index.
    """
    buckets = [_Bucket(main=e) for e in entries if e.tag_count >= WORD_SYNCED_PRIORITY]
    others = [e for e in entries if e.tag_count < WORD_SYNCED_PRIORITY]

    orphans: List[ParsedLineData] = []
    for entry in others:
        if entry.is_metadata:
            continue
        closest, min_diff = _nearest_bucket(buckets, entry.time)
        if closest != -1 and min_diff < BUCKET_TOLERANCE_S:
            text = get_entry_display_text(entry)
            if text:
                buckets[closest].translations.append(text)
                continue
        orphans.append(entry)

    result: List[Tuple[int, LyricLine]] = []
    for bucket in buckets:
        main = bucket.main
        if main.is_metadata:
            continue
        main_text = (get_entry_display_text(main) or main.text).strip()
        normalized_main = main_text.lower()

        translations = []
        for text in bucket.translations:
            cleaned = text.strip()
            if cleaned and cleaned.lower() != normalized_main:
                translations.append(cleaned)

        result.append((main.original_index, LyricLine(
            time=main.time,
            text=main_text,
            words=list(main.words),
            translation="\n".join(translations) if translations else None,
            is_precise_timing=True,
        )))

    for orphan in orphans:
        result.append((orphan.original_index, LyricLine(
            time=orphan.time,
            text=(get_entry_display_text(orphan) or orphan.text).strip(),
            words=list(orphan.words),
            is_precise_timing=False,
        )))

    result.sort(key=lambda pair: (pair[1].time, pair[0]))
    logger.debug(
        "Word-synced merge: %d buckets, %d orphans", len(buckets), len(orphans),
    )
    return [line for _, line in result]


def parse_word_synced_lyrics(content: str) -> List[LyricLine]:
    """Parse word-synced lyrics, attaching inline secondary lines.

    Args:
        content: Raw lyric text, newline-delimited.

    Returns:
        Display lines sorted by time. Durations are not filled in here.

    Raises:
        TypeError: If content is not a string.
    """
    if not isinstance(content, str):
        raise TypeError("Lyric content must be str, not {}".format(type(content).__name__))

    entries = sort_entries(parse_entries(content))

    main_candidates = [e for e in entries if e.tag_count >= WORD_SYNCED_PRIORITY]
    if main_candidates:
        sanitize_word_durations(main_candidates)
        return merge_with_translations(entries)

    return [
        LyricLine(
            time=entry.time,
            text=(get_entry_display_text(entry) or entry.text).strip(),
            words=list(entry.words),
            is_precise_timing=False,
        )
        for entry in sorted(entries, key=lambda e: (e.time, e.original_index))
        if not entry.is_metadata and has_meaningful_content(entry)
    ]
