"""Plain text lyric formatter.

WHY: For reading, printing, or pasting lyrics somewhere, timestamps are
noise. This is the simplest formatter and the baseline proof that the
pluggable formatter pattern works.

HOW: One lyric per line in time order; each translation line follows
its lyric, indented by two spaces.

RULES:
- Interludes and blank lines are skipped
- No trailing whitespace on any line
- Output suffix: "-lyrics.txt", media type "text/plain"
"""

from __future__ import annotations

from typing import List, Sequence

from lyrics_engine.core.ir import LyricLine
from lyrics_engine.formatters.base import BaseFormatter, FormatterOutput


class PlainTextFormatter(BaseFormatter):
    """Formatter that produces untimed lyric text."""

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, lines: Sequence[LyricLine]) -> List[FormatterOutput]:
        output: List[str] = []
        for line in lines:
            text = line.text.strip()
            if line.is_interlude or not text:
                continue
            output.append(text)
            if line.translation:
                output.extend(
                    "  " + part.strip()
                    for part in line.translation.split("\n")
                    if part.strip()
                )

        content = "\n".join(output)
        if content:
            content += "\n"

        return [
            FormatterOutput(
                suffix="-lyrics.txt",
                content=content,
                media_type="text/plain",
            )
        ]
