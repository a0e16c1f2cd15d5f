"""Top-level lyric parsing: format detection, dispatch, translation,
interludes, and durations.

WHY: Callers hand over whatever lyric text a catalog or file gave them,
optionally with a separate translation blob, and want the final display
lines back. They should not need to know which format they have.

HOW: Blank content returns []. Otherwise the text is checked for any
word-synced line or fragment-array object; if found it goes to the
word-synced parser, else to the line-timed parser. A non-blank
translation blob is merged next, interludes are inserted, and durations
are computed last.

RULES:
- Pure function: text in, new list of LyricLine out
- Never raises for bad content; unparseable text yields []
- Raises TypeError for non-str content (None translation is allowed)
- Interlude insertion defaults to config.INSERT_INTERLUDES
"""

from __future__ import annotations

import logging
from typing import List, Optional

from lyrics_engine import config
from lyrics_engine.core.grammar import is_word_synced_format
from lyrics_engine.core.ir import LyricLine
from lyrics_engine.core.line_timed import parse_lrc
from lyrics_engine.core.timeline import insert_interludes, process_lyrics_durations
from lyrics_engine.core.translation import merge_translations
from lyrics_engine.core.word_synced import parse_word_synced_lyrics

logger = logging.getLogger(__name__)


def parse_lyrics(
    content: str,
    translation_content: Optional[str] = None,
    *,
    interludes: Optional[bool] = None,
    interlude_min_gap_s: Optional[float] = None,
    plain_line_hold_s: Optional[float] = None,
    last_line_duration_s: Optional[float] = None,
) -> List[LyricLine]:
    """Parse lyric text with automatic format detection.

    Args:
        content: Main lyric text (line-timed or word-synced).
        translation_content: Optional separate translation lyric text.
        interludes: Insert interlude placeholders into long gaps.
            Defaults to config.INSERT_INTERLUDES.
        interlude_min_gap_s: Override config.INTERLUDE_MIN_GAP_S.
        plain_line_hold_s: Override config.PLAIN_LINE_HOLD_S.
        last_line_duration_s: Override config.LAST_LINE_DURATION_S.

    Returns:
        Display lines sorted by time, with durations filled in.

    Raises:
        TypeError: If content is not a string, or translation_content is
            neither None nor a string.
    """
    if not isinstance(content, str):
        raise TypeError("Lyric content must be str, not {}".format(type(content).__name__))
    if not content.strip():
        return []

    if is_word_synced_format(content):
        logger.debug("Detected word-synced lyrics")
        lines = parse_word_synced_lyrics(content)
    else:
        logger.debug("Detected line-timed lyrics")
        lines = parse_lrc(content)

    if translation_content is not None:
        lines = merge_translations(lines, translation_content)

    if config.INSERT_INTERLUDES if interludes is None else interludes:
        lines = insert_interludes(
            lines,
            min_gap_s=interlude_min_gap_s,
            plain_line_hold_s=plain_line_hold_s,
        )

    return process_lyrics_durations(lines, last_line_duration_s=last_line_duration_s)
