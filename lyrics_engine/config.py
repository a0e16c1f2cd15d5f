"""Configuration constants and .env loading.

WHY: The grammar thresholds are fixed by the lyric formats themselves,
but the presentation tunables (interlude gap, plain-line hold, last-line
duration) depend on the player. Keeping them here, overridable from the
environment, means nobody has to dig through parser code to change them.

HOW: python-dotenv loads the .env file on import. Each tunable is a
module-level constant read from os.environ with a default. Invalid
values raise ValueError naming the variable.

RULES:
- LYRICS_INSERT_INTERLUDES: "true"/"false" (default true)
- LYRICS_INTERLUDE_MIN_GAP_S: positive float seconds (default 8.0)
- LYRICS_PLAIN_LINE_HOLD_S: non-negative float seconds (default 4.0)
- LYRICS_LAST_LINE_DURATION_S: positive float seconds (default 5.0)
- Callers of parse_lyrics() can override all of these per call
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()


def _env_float(name: str, default: float, allow_zero: bool = False) -> float:
    """Read a float from the environment, validating its sign.

    RULES:
    - Missing or blank → default
    - Not a number, negative, or zero (unless allow_zero) → ValueError
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError("{} must be a number of seconds, got {!r}".format(name, raw)) from None
    if value < 0 or (value == 0 and not allow_zero):
        raise ValueError("{} must be {} seconds, got {!r}".format(
            name, "non-negative" if allow_zero else "positive", raw,
        ))
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ValueError("{} must be true or false, got {!r}".format(name, raw))


INSERT_INTERLUDES = _env_bool("LYRICS_INSERT_INTERLUDES", True)
INTERLUDE_MIN_GAP_S = _env_float("LYRICS_INTERLUDE_MIN_GAP_S", 8.0)
PLAIN_LINE_HOLD_S = _env_float("LYRICS_PLAIN_LINE_HOLD_S", 4.0, allow_zero=True)
LAST_LINE_DURATION_S = _env_float("LYRICS_LAST_LINE_DURATION_S", 5.0)

SUPPORTED_LYRIC_EXTENSIONS: set[str] = {".lrc", ".yrc", ".txt"}
"""Lyric file extensions the CLI accepts (lowercase, with dot)."""
