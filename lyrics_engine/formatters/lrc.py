"""Enhanced LRC formatter — write display lines back out as LRC text.

WHY: Many players and editors only read LRC. Exporting the merged result
(word timing, attached translations, interludes) as enhanced LRC lets
those tools benefit from the parsing and merging done here.

HOW: Every line gets a ``[mm:ss.xx]`` tag. Lines with words are written
as ``<mm:ss.xx>word`` runs. Each translation line is written on its own
line with the same timestamp, right after the lyric, which is exactly
the shared-timestamp translation idiom the line-timed parser groups back
together. Interludes become empty timed lines.

RULES:
- Times rounded to hundredths
- Lyric line before its translation lines (same timestamp)
- Re-parsing the output reproduces text, translations and line times;
  is_precise_timing is not representable and is lost
- Output suffix: "-merged.lrc", media type "text/plain"
"""

from __future__ import annotations

from typing import List, Sequence

from lyrics_engine.core.ir import LyricLine
from lyrics_engine.formatters.base import BaseFormatter, FormatterOutput


def format_time_tag(seconds: float) -> str:
    """Format seconds as mm:ss.xx (no brackets)."""
    centiseconds = int(round(max(seconds, 0.0) * 100))
    minutes, remainder = divmod(centiseconds, 6000)
    secs, hundredths = divmod(remainder, 100)
    return "{:02d}:{:02d}.{:02d}".format(minutes, secs, hundredths)


def _line_content(line: LyricLine) -> str:
    if not line.words:
        return line.text
    return "".join(
        "<{}>{}".format(format_time_tag(word.start_time), word.text)
        for word in line.words
    )


class LRCFormatter(BaseFormatter):
    """Formatter that produces enhanced LRC text."""

    @property
    def name(self) -> str:
        return "Enhanced LRC"

    def format(self, lines: Sequence[LyricLine]) -> List[FormatterOutput]:
        output: List[str] = []
        for line in lines:
            tag = "[{}]".format(format_time_tag(line.time))
            if line.is_interlude:
                output.append(tag)
                continue
            output.append(tag + _line_content(line))
            if line.translation:
                for part in line.translation.split("\n"):
                    output.append(tag + part)

        content = "\n".join(output)
        if content:
            content += "\n"

        return [
            FormatterOutput(
                suffix="-merged.lrc",
                content=content,
                media_type="text/plain",
            )
        ]
