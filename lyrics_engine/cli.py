"""Command-line interface for the Lyrics Engine.

WHY: Users need a simple way to turn a lyric file (plus an optional
translation file) into merged, cleaned-up output from the terminal. The
CLI wires together file loading, parse_lyrics(), the pluggable
formatters, and file saving behind a single command.

HOW: Uses argparse to accept an input lyric file, an optional
translation file, output format selection, output directory, and
interlude settings. Status messages go to stderr; output files are
saved next to the source (or to --output-dir).

RULES:
- Positional argument: input lyric file path
- Validates file extension against SUPPORTED_LYRIC_EXTENSIONS
- --formats: comma-separated formatter keys (default: all registered)
- Output naming: {stem}{suffix}, numeric suffix for conflicts
  (song-lyrics-2.json)
- Status output goes to stderr (not stdout)
- --verbose enables DEBUG logging from the core
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from lyrics_engine.config import INSERT_INTERLUDES, SUPPORTED_LYRIC_EXTENSIONS
from lyrics_engine.core.parser import parse_lyrics
from lyrics_engine.formatters import FORMATTERS
from lyrics_engine.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def load_lyric_file(path: Path) -> str:
    """Read a lyric file as UTF-8 text.

    RULES:
    - A UTF-8 byte-order mark is dropped
    - Windows line endings are normalized to "\\n"
    - Raises FileNotFoundError / UnicodeDecodeError unchanged
    """
    text = path.read_text(encoding="utf-8-sig")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Pick a path for {stem}{suffix} that does not overwrite anything.

    RULES:
    - song + "-lyrics.json" → song-lyrics.json if free
    - Otherwise song-lyrics-2.json, song-lyrics-3.json, ... (the counter
      goes before the extension)
    """
    name, dot, ext = suffix.rpartition(".")
    if not name:
        name, dot, ext = suffix, "", ""

    candidate = output_dir / (stem + suffix)
    counter = 1
    while candidate.exists():
        counter += 1
        candidate = output_dir / "{}{}-{}{}{}".format(stem, name, counter, dot, ext)
    return candidate


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Save a single formatter output to disk as UTF-8 and return its path."""
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _validate_input(path_arg: str, label: str) -> Path:
    path = Path(path_arg).resolve()
    if not path.is_file():
        _fail("{} not found: {}".format(label, path))
    ext = path.suffix.lower()
    if ext not in SUPPORTED_LYRIC_EXTENSIONS:
        _fail("Unsupported {} type '{}'. Supported: {}".format(
            label.lower(), ext, ", ".join(sorted(SUPPORTED_LYRIC_EXTENSIONS)),
        ))
    return path


def run(args: argparse.Namespace) -> List[Path]:
    """Parse the lyric file, render each selected format, and save it.

    Returns:
        Paths of the saved output files.
    """
    input_path = _validate_input(args.input_file, "File")
    translation_path = (
        _validate_input(args.translation, "Translation file") if args.translation else None
    )

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    if args.formats:
        format_keys = [f.strip() for f in args.formats.split(",") if f.strip()]
        for key in format_keys:
            if key not in FORMATTERS:
                _fail("Unknown format '{}'. Available formats: {}".format(
                    key, ", ".join(sorted(FORMATTERS.keys())),
                ))
    else:
        format_keys = list(FORMATTERS.keys())

    try:
        content = load_lyric_file(input_path)
        translation = load_lyric_file(translation_path) if translation_path else None
    except (OSError, UnicodeDecodeError) as e:
        _fail(str(e))

    _status("Parsing {}...".format(input_path.name))
    lines = parse_lyrics(
        content,
        translation,
        interludes=args.interludes,
        interlude_min_gap_s=args.interlude_gap,
    )
    translated = sum(1 for line in lines if line.translation)
    _status("  {} lines, {} with translation".format(len(lines), translated))
    if not lines:
        _status("  Warning: no timed lyric lines found")

    _status("Formatting output...")
    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        for output in formatter.format(lines):
            saved_path = _save_output(output, input_path.stem, output_dir)
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))

    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))
    return saved_files


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError("not a number: {!r}".format(value)) from None
    if number <= 0:
        raise argparse.ArgumentTypeError("must be positive: {!r}".format(value))
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (kept separate from main() for tests)."""
    parser = argparse.ArgumentParser(
        prog="lyrics_engine",
        description="Parse LRC or word-synced lyrics, merge translations, and "
                    "write cleaned-up output (JSON, enhanced LRC, plain text).",
    )

    parser.add_argument(
        "input_file",
        help="Path to the lyric file (.lrc, .yrc, .txt).",
    )

    parser.add_argument(
        "--translation",
        default=None,
        help="Path to a separate translation lyric file.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Formats to write, comma-separated. "
             "Choices: {}. Default: every format.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Where to write the results (default: next to the lyric file).",
    )

    parser.add_argument(
        "--interludes",
        action=argparse.BooleanOptionalAction,
        default=INSERT_INTERLUDES,
        help="Insert interlude placeholders into long gaps (default: %(default)s).",
    )

    parser.add_argument(
        "--interlude-gap",
        type=_positive_float,
        default=None,
        help="Minimum gap in seconds for an interlude (default: from config).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log parser details to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Console-script entry point; pass argv explicitly in tests."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    run(args)


if __name__ == "__main__":
    main()
