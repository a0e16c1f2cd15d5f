"""Export format registry.

WHY: A parsed lyric sheet goes to very different places: a player that
wants JSON with word timing, an editor that only reads LRC, or a page
that just wants the words. The CLI's --formats flag and any embedding
code pick exporters by key from this one table.

HOW: FORMATTERS maps a key to a BaseFormatter subclass; callers build
an instance per run, e.g. ``FORMATTERS["lrc"]().format(lines)``.

RULES:
- Keys are what users type after --formats
- Adding an exporter means one module plus one entry here
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lyrics_engine.formatters.json_lines import JSONLinesFormatter
from lyrics_engine.formatters.lrc import LRCFormatter
from lyrics_engine.formatters.plain_text import PlainTextFormatter

if TYPE_CHECKING:
    from lyrics_engine.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "json": JSONLinesFormatter,
    "lrc": LRCFormatter,
    "plain_text": PlainTextFormatter,
}
