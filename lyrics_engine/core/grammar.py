"""Line grammars and the ordered grammar-dispatch list.

WHY: Word-synced lyric files mix three kinds of lines: JSON-ish credit
objects, word-synced lines, and plain line-timed lines. The main parser
and the translation-track parser must try them in exactly the same order,
or the same blob would parse differently depending on which role it plays.
Keeping the grammars and their order in one place prevents that drift.

HOW: Each grammar is a function ``(line, original_index) -> ParsedLineData
| None``. WORD_SYNCED_GRAMMARS lists them in precedence order and
parse_grammar_line() returns the first match. Format detection lives here
too since it keys off the same patterns.

Grammars (precedence order):
  1. Metadata object: {"t": <ms>, "c": [{"tx": "..."}, ...]}
  2. Word-synced: [startMs,durationMs](wordStartMs,wordDurMs,flag)word...
  3. Fallback line-timed: [mm:ss.xx]text

RULES:
- A brace-wrapped line that is not valid JSON, or does not have the
  metadata-object shape, falls through to grammar 2 and 3
- Metadata objects are always is_metadata=True with tag_count=0
- Word-synced lines get tag_count = 1000 + merged word count
- Fallback lines get tag_count=0 and no words
"""

from __future__ import annotations

import json
import re
from typing import Callable, Optional, Sequence

import jsonschema

from lyrics_engine.core.ir import ParsedLineData
from lyrics_engine.core.metadata import is_metadata_line
from lyrics_engine.core.utils import create_word, merge_punctuation_words, parse_time_tag

# Offset that makes every word-synced line outrank any line-timed candidate.
WORD_SYNCED_PRIORITY = 1000

# One [mm:ss.xx] / [mm:ss.xxx] tag.
TIME_TAG_RE = re.compile(r"\[(\d{2}):(\d{2})\.(\d{2,3})\]")

# A line-timed line: first tag, then the rest of the line.
LRC_LINE_RE = re.compile(r"^\[(\d{2}):(\d{2})\.(\d{2,3})\](.*)$")

# Inline word tag: <mm:ss.xx>word
WORD_TAG_RE = re.compile(r"<(\d{2}):(\d{2})\.(\d{2,3})>([^<]*)")

WORD_SYNCED_LINE_RE = re.compile(r"^\[(\d+),(\d+)\](.*)$")

WORD_SYNCED_WORD_RE = re.compile(r"\((\d+),(\d+),(\d+)\)([^(]*)")

_FRAGMENT_ARRAY_RE = re.compile(r'"c"\s*:\s*\[')

METADATA_OBJECT_SCHEMA = {
    "type": "object",
    "required": ["c"],
    "properties": {
        "t": {"type": "number"},
        "c": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {"tx": {"type": "string"}},
            },
        },
    },
}

_METADATA_OBJECT_VALIDATOR = jsonschema.Draft7Validator(METADATA_OBJECT_SCHEMA)

Grammar = Callable[[str, int], Optional[ParsedLineData]]


def tag_to_seconds(minutes: str, seconds: str, fraction: str) -> float:
    """Convert the three captured groups of a time tag to seconds."""
    return parse_time_tag("{}:{}.{}".format(minutes, seconds, fraction))


def parse_object_line(line: str, original_index: int) -> Optional[ParsedLineData]:
    """Grammar 1: a brace-delimited metadata object.

    HOW: json.loads, then a jsonschema shape check. Fragment texts are
    concatenated in order.

    RULES:
    - Must start with "{" and end with "}"
    - Invalid JSON or wrong shape → None (next grammar is tried)
    - Missing "t" → time 0; fragment without "tx" → empty text
    """
    if not (line.startswith("{") and line.endswith("}")):
        return None
    try:
        data = json.loads(line)
    except ValueError:
        return None
    if not _METADATA_OBJECT_VALIDATOR.is_valid(data):
        return None

    text = "".join(fragment.get("tx", "") for fragment in data["c"])
    return ParsedLineData(
        time=(data.get("t") or 0) / 1000.0,
        text=text,
        words=[],
        tag_count=0,
        original_index=original_index,
        is_metadata=True,
    )


def parse_word_synced_line(line: str, original_index: int) -> Optional[ParsedLineData]:
    """Grammar 2: [startMs,durationMs] followed by timed word groups.

    RULES:
    - Line time = startMs / 1000
    - Each "(startMs,durMs,flag)text" group is one word:
      start = startMs / 1000, end = start + durMs / 1000
    - No word groups → the bracket's trailing content, trimmed, is the text,
      no words
    - Words are punctuation-merged; tag_count = 1000 + merged word count
    """
    match = WORD_SYNCED_LINE_RE.match(line)
    if not match:
        return None

    start_ms = int(match.group(1))
    content = match.group(3)

    words = []
    word_matches = list(WORD_SYNCED_WORD_RE.finditer(content))
    if word_matches:
        for word_match in word_matches:
            word_start = int(word_match.group(1)) / 1000.0
            word_duration = int(word_match.group(2)) / 1000.0
            words.append(create_word(word_match.group(4), word_start, word_start + word_duration))
        text = "".join(word.text for word in words)
    else:
        text = content.strip()

    merged = merge_punctuation_words(words)
    return ParsedLineData(
        time=start_ms / 1000.0,
        text=text,
        words=merged,
        tag_count=len(merged) + WORD_SYNCED_PRIORITY,
        original_index=original_index,
        is_metadata=is_metadata_line(text),
    )


def parse_fallback_line(line: str, original_index: int) -> Optional[ParsedLineData]:
    """Grammar 3: a plain [mm:ss.xx]text line inside a word-synced file."""
    match = LRC_LINE_RE.match(line)
    if not match:
        return None
    text = match.group(4).strip()
    return ParsedLineData(
        time=tag_to_seconds(match.group(1), match.group(2), match.group(3)),
        text=text,
        words=[],
        tag_count=0,
        original_index=original_index,
        is_metadata=is_metadata_line(text),
    )


WORD_SYNCED_GRAMMARS: Sequence[Grammar] = (
    parse_object_line,
    parse_word_synced_line,
    parse_fallback_line,
)


def parse_grammar_line(
    line: str,
    original_index: int,
    grammars: Sequence[Grammar] = WORD_SYNCED_GRAMMARS,
) -> Optional[ParsedLineData]:
    """Try each grammar in order on a stripped line; first match wins."""
    for grammar in grammars:
        parsed = grammar(line, original_index)
        if parsed is not None:
            return parsed
    return None


def is_word_synced_format(content: str) -> bool:
    """True if any line is a word-synced line or a fragment-array object."""
    for raw_line in content.split("\n"):
        line = raw_line.strip()
        if WORD_SYNCED_LINE_RE.match(line):
            return True
        if line.startswith("{") and _FRAGMENT_ARRAY_RE.search(line):
            return True
    return False
