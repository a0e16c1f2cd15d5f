"""Shared test fixtures for the lyrics_engine test suite.

WHY: Several test modules need the same realistic lyric files: an LRC
file with credit lines and shared-timestamp translations, and a
word-synced file mixing JSON credit objects, word-synced lines, and a
drifting line-timed translation track. Centralizing them keeps every
module testing against the same inputs.

HOW: Module-level constants hold the raw text; pytest fixtures hand them
out. Expected values are spelled out in the tests that use them.

RULES:
- Fixture text uses "\\n" line endings only
- Timing values are chosen away from threshold boundaries unless a test
  is explicitly about a boundary
"""

import pytest


SAMPLE_LRC = "\n".join([
    "[ti:Sample Song]",
    "[ar:Sample Artist]",
    "[00:00.00]作词 : 张三",
    "[00:01.00]作曲 : 李四",
    "[00:10.00]Hello world",
    "[00:10.00]你好世界",
    "[00:15.50]Second line",
    "[00:15.52]第二行",
])

SAMPLE_WORD_SYNCED = "\n".join([
    '{"t":0,"c":[{"tx":"作词: "},{"tx":"张三"}]}',
    '{"t":1000,"c":[{"tx":"作曲: "},{"tx":"李四"}]}',
    "[12340,2500](12340,500,0)Hello (12840,600,0)world",
    "[15000,3000](15000,800,0)Second (15800,700,0)line(16500,200,0)!",
    "[00:12.50]你好世界",
    "[00:15.20]第二行",
    "[00:40.00]Lonely fallback line",
])


@pytest.fixture
def sample_lrc():
    """LRC text: two credit lines, two lyrics, each with a translation."""
    return SAMPLE_LRC


@pytest.fixture
def sample_word_synced():
    """Word-synced text with credits, a drifting translation, and an orphan."""
    return SAMPLE_WORD_SYNCED
