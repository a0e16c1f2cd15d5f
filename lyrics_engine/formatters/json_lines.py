"""JSON formatter — the display lines as a schema-validated JSON document.

WHY: Players written in other languages (the original web UI, mobile
clients) consume parsed lyrics as JSON. The field names follow the
camelCase naming those clients already use.

HOW: Each LyricLine becomes a dict; optional fields are omitted when
empty. The document is validated with jsonschema against the packaged
lyric_lines.schema.json before it is returned, so a formatter bug fails
loudly here instead of in a client.

RULES:
- Top level: {"version": 1, "lines": [...]}
- Line keys: time, text, isPreciseTiming, isInterlude, and when present
  words, translation, duration
- Word keys: startTime, endTime, text
- Times rounded to milliseconds
- Output suffix: "-lyrics.json", media type "application/json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import jsonschema

from lyrics_engine.core.ir import LyricLine
from lyrics_engine.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent / "lyric_lines.schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def _get_schema() -> dict:
    """Load and cache the lyric lines JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _seconds(value: float) -> float:
    return round(value, 3)


def line_to_dict(line: LyricLine) -> Dict[str, Any]:
    """Serialize one LyricLine, omitting empty optional fields."""
    data: Dict[str, Any] = {
        "time": _seconds(line.time),
        "text": line.text,
        "isPreciseTiming": line.is_precise_timing,
        "isInterlude": line.is_interlude,
    }
    if line.words:
        data["words"] = [
            {
                "startTime": _seconds(word.start_time),
                "endTime": _seconds(word.end_time),
                "text": word.text,
            }
            for word in line.words
        ]
    if line.translation:
        data["translation"] = line.translation
    if line.duration is not None:
        data["duration"] = _seconds(line.duration)
    return data


class JSONLinesFormatter(BaseFormatter):
    """Formatter that produces the lyric lines as JSON."""

    @property
    def name(self) -> str:
        return "Lyric Lines JSON"

    def format(self, lines: Sequence[LyricLine]) -> List[FormatterOutput]:
        """Serialize and validate the lines.

        Raises:
            jsonschema.ValidationError: If the generated document does not
                match the packaged schema.
        """
        document = {
            "version": 1,
            "lines": [line_to_dict(line) for line in lines],
        }
        jsonschema.validate(instance=document, schema=_get_schema())

        return [
            FormatterOutput(
                suffix="-lyrics.json",
                content=json.dumps(document, ensure_ascii=False, indent=2) + "\n",
                media_type="application/json",
            )
        ]
