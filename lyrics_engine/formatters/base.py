"""Formatter interface and the file container formatters return.

WHY: JSON, LRC and plain text exports all start from the same display
lines. A shared interface lets the CLI (or a player embedding the
engine) loop over any selection of formats without special cases.

HOW: BaseFormatter is an ABC: a ``name`` property plus ``format(lines)``.
FormatterOutput carries one file's suffix, text and MIME type; writing
it to disk is the caller's job.

RULES:
- ``format()`` returns a list of outputs (one per file)
- ``suffix`` is appended to the lyric file's stem, e.g. ``"-lyrics.json"``
- Formatters treat the lines as read-only
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from lyrics_engine.core.ir import LyricLine


@dataclass
class FormatterOutput:
    """A single rendered file.

    Attributes:
        suffix: Appended to the lyric file stem
                (``"-merged.lrc"`` → ``"song-merged.lrc"``).
        content: Rendered text, written as UTF-8.
        media_type: MIME type, e.g. ``"text/plain"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Common interface for lyric exporters.

    New formats subclass this in their own module under formatters/ and
    get a key in FORMATTERS.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name, e.g. 'Enhanced LRC'."""

    @abstractmethod
    def format(self, lines: Sequence[LyricLine]) -> list[FormatterOutput]:
        """Render display lines.

        Args:
            lines: Output of parse_lyrics(), in order.

        Returns:
            One FormatterOutput per file to write.
        """
