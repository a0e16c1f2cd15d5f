"""Core parsing and merging modules.

WHY: The core package is the stable heart of the engine: the IR
dataclasses, the two lyric grammars, translation merging, and the
timeline pass. Formatters and the CLI only ever consume its output.

HOW: ir.py defines the data structures, grammar.py the shared line
grammars, line_timed.py and word_synced.py the two parsers,
translation.py the external-track merger, timeline.py durations and
interludes, and parser.py ties them together.

RULES:
- IR dataclasses are the contract — change with care
- Everything here is pure and synchronous; no I/O
- Credit-line detection goes through metadata.py only
"""

from lyrics_engine.core.ir import LyricLine, LyricWord
from lyrics_engine.core.parser import parse_lyrics

__all__ = ["LyricLine", "LyricWord", "parse_lyrics"]
