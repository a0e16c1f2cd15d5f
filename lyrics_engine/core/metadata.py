"""Credit / metadata line classification.

WHY: Lyric dumps from streaming catalogs open with credit lines
("作词 : 某人", "Composer: Someone", "[Chorus]") timed like any other
lyric. They must never surface as lyric text or be mistaken for a
translation. Both parsers and the translation merger ask this one module,
so "what counts as a credit line" cannot drift between pipelines.

HOW: Purely lexical. A line is metadata when it:
  1. starts with a credit role keyword followed by a colon (ASCII or
     fullwidth)
  2. starts with an everyday English word that doubles as a credit role
     ("Music:", "Vocals:") followed by a colon and only names
  3. starts with an English "<role> by" phrase
  4. is wrapped entirely in brackets and the inner text is a credit
     label or a section label

RULES:
- Chinese and English keywords are recognized
- Matching is case-insensitive
- "Words: don't come easy" is a lyric; "Music: Jay Chou" is a credit
- Empty or whitespace-only text is NOT metadata (it is just empty)
"""

from __future__ import annotations

import re
import unicodedata

# Role keywords that introduce a credit whenever followed by a colon.
_CREDIT_KEYWORDS = (
    # Chinese (simplified and traditional)
    "作词", "作詞", "作曲", "编曲", "編曲", "词曲", "詞曲", "制作人", "製作人",
    "制作", "製作", "监制", "監製", "出品", "发行", "發行", "混音", "母带",
    "母帶", "录音", "錄音", "和声", "和聲", "吉他", "贝斯", "貝斯", "鼓",
    "弦乐", "弦樂", "演唱", "原唱", "歌手", "词", "詞", "曲", "企划", "统筹",
    "OP", "SP",
    # English role nouns that do not open ordinary sung lines
    "lyrics", "lyricist", "composer", "composed", "arranger", "arrangement",
    "arranged", "producer", "produced", "production", "songwriter", "writer",
    "written", "mixing", "mixed", "mastering", "mastered", "recorded",
    "publisher",
)

# Everyday words that are credits only when the rest of the line is names.
_NAME_ONLY_KEYWORDS = (
    "words", "music", "vocals", "vocal", "guitar", "bass", "drums",
    "strings", "recording", "label", "singer", "artist",
)


def _alternation(keywords) -> str:
    return "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))


_KEYWORD_ALTERNATION = _alternation(_CREDIT_KEYWORDS + _NAME_ONLY_KEYWORDS)

# "作词 : xxx", "Composer: xxx", "Arranged by: xxx"
_CREDIT_COLON_RE = re.compile(
    r"^\s*(?:{})(?:\s+by)?\s*[:：]".format(_alternation(_CREDIT_KEYWORDS)),
    re.IGNORECASE,
)

# "Music: xxx", "Vocals: xxx"; group 1 is what follows the colon
_NAME_ONLY_COLON_RE = re.compile(
    r"^\s*(?:{})(?:\s+by)?\s*[:：](.*)$".format(_alternation(_NAME_ONLY_KEYWORDS)),
    re.IGNORECASE,
)

_NAME_SEPARATOR_RE = re.compile(r"[\s,/&、·]+")

_NAME_JOINERS = frozenset({"and", "feat", "feat.", "ft", "ft.", "x"})

# "Lyrics by xxx", "Written by xxx"
_CREDIT_BY_RE = re.compile(
    r"^\s*(?:lyrics|words|music|written|composed|arranged|produced|mixed|mastered|recorded)"
    r"(?:\s+and\s+\w+)?\s+by\b",
    re.IGNORECASE,
)

# Lines wrapped in one pair of brackets: [..], (..), 【..】, （..）, 「..」
_BRACKETED_RE = re.compile(r"^\s*[\[(（【「〔](.*)[\])）】」〕]\s*$")

_SECTION_LABELS = frozenset({
    "intro", "verse", "pre-chorus", "prechorus", "chorus", "post-chorus",
    "bridge", "hook", "outro", "interlude", "instrumental", "refrain",
    "前奏", "间奏", "間奏", "尾奏", "副歌", "主歌", "桥段", "橋段", "纯音乐", "純音樂",
})

# Trailing numbering on section labels: "Verse 2", "Chorus x2"
_LABEL_SUFFIX_RE = re.compile(r"\s*(?:x?\d+)?\s*$", re.IGNORECASE)


def _looks_like_names(rest: str) -> bool:
    """True if every word after the colon reads as part of a name.

    A name word starts with an uppercase letter or a CJK/kana/hangul
    character; joiners like "and" and "feat." are allowed between names.
    """
    tokens = [t for t in _NAME_SEPARATOR_RE.split(rest.strip()) if t]
    names = [t for t in tokens if t.lower() not in _NAME_JOINERS]
    if not names:
        return False
    return all(
        t[0].isupper() or unicodedata.category(t[0]) == "Lo"
        for t in names
    )


def _is_credit(text: str) -> bool:
    if _CREDIT_COLON_RE.match(text) or _CREDIT_BY_RE.match(text):
        return True
    match = _NAME_ONLY_COLON_RE.match(text)
    return bool(match) and _looks_like_names(match.group(1))


def _is_label(inner: str) -> bool:
    """True if the bracketed inner text is a credit or section label."""
    stripped = inner.strip()
    if not stripped:
        return False
    if _is_credit(stripped):
        return True
    label = _LABEL_SUFFIX_RE.sub("", stripped).strip().rstrip(":：").lower()
    if label in _SECTION_LABELS:
        return True
    # Bare role keyword, e.g. "【作曲】"
    return bool(re.fullmatch(r"(?:{})".format(_KEYWORD_ALTERNATION), label, re.IGNORECASE))


def is_metadata_line(text: str) -> bool:
    """Classify a line's display text as a credit / non-lyric line.

    WHY: Credit lines are timed exactly like lyrics, so only their wording
    gives them away.

    RULES:
    - Role keyword + colon at line start → metadata
    - Everyday-word keyword + colon + only names → metadata
    - "<role> by ..." at line start → metadata
    - Whole line in brackets holding a credit or section label → metadata
    - Anything else, including empty text → not metadata

    Args:
        text: The line's display text (tags already removed).

    Returns:
        True when the line should be treated as metadata.
    """
    if not text or not text.strip():
        return False
    if _is_credit(text):
        return True
    match = _BRACKETED_RE.match(text)
    if match:
        return _is_label(match.group(1))
    return False
