"""Package entry point for ``python -m lyrics_engine``.

WHY: Users run the engine as ``python -m lyrics_engine song.lrc``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.
"""

from lyrics_engine.cli import main

if __name__ == "__main__":
    main()
