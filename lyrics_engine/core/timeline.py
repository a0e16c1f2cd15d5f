"""Line durations and interlude placeholders.

WHY: A renderer needs to know how long each line stays on screen, and it
should not keep a stale line lit through a 20-second guitar solo. This
module derives durations from line spacing and inserts idle placeholders
into long gaps.

HOW: insert_interludes() walks consecutive line pairs and adds an empty
``is_interlude`` line where the previous line is estimated to stop being
sung, if the remaining gap is long enough. process_lyrics_durations()
then sets each line's duration to the distance to its successor.

RULES:
- duration = next.time - this.time
- Last line: last word end - time when it has words, else the configured
  last-line duration
- A line's estimated end is its last word end, or time + plain-line hold
- No interlude next to another interlude or after a blank line, so both
  passes are idempotent
- Input lines are never modified; changed lines are copies
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from lyrics_engine import config
from lyrics_engine.core.ir import LyricLine

logger = logging.getLogger(__name__)


def _last_line_duration(line: LyricLine, default_s: float) -> float:
    if line.words:
        sung = max(word.end_time for word in line.words) - line.time
        if sung > 0:
            return sung
    return default_s


def process_lyrics_durations(
    lines: Sequence[LyricLine],
    last_line_duration_s: Optional[float] = None,
) -> List[LyricLine]:
    """Fill in each line's on-screen duration from its successor.

    Args:
        lines: Display lines in final order.
        last_line_duration_s: Fallback for a last line without words.
            Defaults to config.LAST_LINE_DURATION_S.

    Returns:
        New list of lines with ``duration`` set.
    """
    if last_line_duration_s is None:
        last_line_duration_s = config.LAST_LINE_DURATION_S

    result: List[LyricLine] = []
    for index, line in enumerate(lines):
        if index + 1 < len(lines):
            duration = lines[index + 1].time - line.time
        else:
            duration = _last_line_duration(line, last_line_duration_s)
        result.append(line if line.duration == duration else replace(line, duration=duration))
    return result


def estimated_line_end(line: LyricLine, plain_line_hold_s: float) -> float:
    """When a line is probably done being sung."""
    if line.words:
        return max(max(word.end_time for word in line.words), line.time)
    return line.time + plain_line_hold_s


def insert_interludes(
    lines: Sequence[LyricLine],
    min_gap_s: Optional[float] = None,
    plain_line_hold_s: Optional[float] = None,
) -> List[LyricLine]:
    """Insert idle placeholder lines into long gaps.

    WHY: Without a placeholder the previous lyric stays highlighted until
    the next one starts, however long the instrumental break is.

    HOW: For each consecutive pair, estimate where the first line ends.
    If the next line starts at least ``min_gap_s`` after that, insert an
    interlude line at the estimated end.

    RULES:
    - Skipped when either neighbour is already an interlude
    - Skipped after a blank line (it already clears the display)
    - Interlude: text "", no words, is_precise_timing=False,
      is_interlude=True

    Args:
        lines: Display lines in final order.
        min_gap_s: Minimum idle gap. Defaults to config.INTERLUDE_MIN_GAP_S.
        plain_line_hold_s: Assumed sung length of a line without words.
            Defaults to config.PLAIN_LINE_HOLD_S.

    Returns:
        New list including any inserted interludes.
    """
    if min_gap_s is None:
        min_gap_s = config.INTERLUDE_MIN_GAP_S
    if plain_line_hold_s is None:
        plain_line_hold_s = config.PLAIN_LINE_HOLD_S

    result: List[LyricLine] = []
    inserted = 0
    for index, line in enumerate(lines):
        result.append(line)
        if index + 1 >= len(lines):
            break
        following = lines[index + 1]
        if line.is_interlude or following.is_interlude or not line.text.strip():
            continue

        gap_start = estimated_line_end(line, plain_line_hold_s)
        if following.time - gap_start >= min_gap_s:
            result.append(LyricLine(time=gap_start, text="", is_interlude=True))
            inserted += 1

    if inserted:
        logger.debug("Inserted %d interlude(s)", inserted)
    return result
