"""External translation-track merging.

WHY: Catalog APIs often deliver the translation as a separate lyric blob
with its own timestamps. Those timestamps rarely line up exactly with the
original: line-timed tracks are off by a few hundredths, word-synced
tracks can drift by seconds. This module attaches each translation line
to at most one display line.

HOW: build_translation_map() parses the translation blob with the same
grammar list the word-synced parser uses and files each line's text into
a TranslationQueue: an ordered multimap from millisecond time key to a
FIFO of texts. merge_translations() then walks the display lines in order
and pops one text per line: exact key first, else the nearest non-empty
key within tolerance.

RULES:
- Tolerance: 3.0s for precise-timing lines, 0.25s otherwise
- Nearest-key ties go to the key inserted first
- A popped text is gone; no translation attaches to two lines
- Blank popped text, or text equal (case-insensitive) to the line's own
  text, is consumed but leaves the existing translation in place
- Credit lines in the translation track are skipped
- Input lines are never modified; changed lines are copies
"""

from __future__ import annotations

import logging
from collections import OrderedDict, deque
from dataclasses import replace
from typing import Deque, Dict, List, Optional, Sequence

from lyrics_engine.core.grammar import parse_grammar_line
from lyrics_engine.core.ir import LyricLine
from lyrics_engine.core.metadata import is_metadata_line
from lyrics_engine.core.utils import get_entry_display_text, normalize_time_key

logger = logging.getLogger(__name__)

PRECISE_TOLERANCE_S = 3.0
LINE_TOLERANCE_S = 0.25


class TranslationQueue:
    """Ordered multimap from time key (ms) to a FIFO of translation texts.

    RULES:
    - Keys keep first-insertion order
    - take() pops from the front of a key's queue and removes the key
      once its queue is empty
    """

    def __init__(self) -> None:
        self._queues: Dict[int, Deque[str]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._queues)

    def __contains__(self, key: int) -> bool:
        return key in self._queues

    def keys(self) -> List[int]:
        return list(self._queues)

    def add(self, key: int, text: str) -> None:
        self._queues.setdefault(key, deque()).append(text)

    def pop(self, key: int) -> Optional[str]:
        """Pop the oldest text filed under key, or None."""
        queue = self._queues.get(key)
        if not queue:
            return None
        value = queue.popleft()
        if not queue:
            del self._queues[key]
        return value

    def take(self, time: float, tolerance_s: float) -> Optional[str]:
        """Consume the best translation for a line starting at ``time``.

        HOW: Exact key match first. Otherwise the key with the smallest
        absolute difference, provided it is within ``tolerance_s``; the
        first-inserted key wins a tie.
        """
        key = normalize_time_key(time)
        if key in self._queues:
            return self.pop(key)

        tolerance_ms = tolerance_s * 1000
        best_key: Optional[int] = None
        min_diff = float("inf")
        for candidate in self._queues:
            diff = abs(candidate - key)
            if diff <= tolerance_ms and diff < min_diff:
                min_diff = diff
                best_key = candidate

        if best_key is None:
            return None
        return self.pop(best_key)


def build_translation_map(translation_content: Optional[str]) -> TranslationQueue:
    """Parse a translation blob into a TranslationQueue.

    RULES:
    - Same grammar precedence as the word-synced parser
    - Only display text is kept (trimmed); blank and credit lines skipped
    """
    queue = TranslationQueue()
    if not translation_content:
        return queue

    for index, raw_line in enumerate(translation_content.split("\n")):
        line = raw_line.strip()
        if not line:
            continue
        parsed = parse_grammar_line(line, index)
        if parsed is None:
            continue
        text = get_entry_display_text(parsed).strip()
        if not text or is_metadata_line(text):
            continue
        queue.add(normalize_time_key(parsed.time), text)

    return queue


def merge_translations(
    lines: Sequence[LyricLine],
    translation_content: Optional[str],
) -> List[LyricLine]:
    """Attach an external translation track to parsed display lines.

    Args:
        lines: Display lines in final order.
        translation_content: Raw translation lyric text, or None.

    Returns:
        New list of lines; lines that received a translation are copies.

    Raises:
        TypeError: If translation_content is neither None nor a string.
    """
    if translation_content is not None and not isinstance(translation_content, str):
        raise TypeError("Translation content must be str or None, not {}".format(
            type(translation_content).__name__,
        ))
    if not translation_content or not translation_content.strip():
        return list(lines)

    queue = build_translation_map(translation_content)
    if not len(queue):
        return list(lines)

    attached = 0
    result: List[LyricLine] = []
    for line in lines:
        if line.is_interlude:
            result.append(line)
            continue
        tolerance = PRECISE_TOLERANCE_S if line.is_precise_timing else LINE_TOLERANCE_S
        external = queue.take(line.time, tolerance)
        cleaned = external.strip() if external else ""
        if (
            cleaned
            and cleaned != line.translation
            and cleaned.lower() != line.text.strip().lower()
        ):
            result.append(replace(line, translation=cleaned))
            attached += 1
        else:
            result.append(line)

    logger.debug("Attached %d external translation(s) to %d lines", attached, len(lines))
    return result
