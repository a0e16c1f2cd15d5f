"""Unit tests for the word-synced parser.

WHY: Word-synced files mix sung lines, credit objects, and a drifting
translation track. Bucket assignment decides which translation lands on
which sung line, and sanitization keeps runaway word durations from
holding a highlight across several lines.

HOW: Tests cover bucket assignment (nearest, tolerance, ties),
orphans, credit suppression, the no-word-synced fallback path, and
word-duration sanitization.
"""

import pytest

from lyrics_engine.core.word_synced import parse_word_synced_lyrics


class TestSingleLine:

    def test_scenario_line(self):
        lines = parse_word_synced_lyrics("[12340,2500](12340,500,0)Hello(12840,600,0)World")
        assert len(lines) == 1
        line = lines[0]
        assert line.time == pytest.approx(12.34)
        assert line.is_precise_timing is True
        assert [(w.start_time, w.end_time, w.text) for w in line.words] == [
            (pytest.approx(12.34), pytest.approx(12.84), "Hello"),
            (pytest.approx(12.84), pytest.approx(13.44), "World"),
        ]

    def test_non_str_raises(self):
        with pytest.raises(TypeError):
            parse_word_synced_lyrics(42)


class TestSampleFile:
    """Credits dropped, translations bucketed, far line kept as orphan."""

    def test_lines(self, sample_word_synced):
        lines = parse_word_synced_lyrics(sample_word_synced)
        assert [(line.text, line.translation, line.is_precise_timing) for line in lines] == [
            ("Hello world", "你好世界", True),
            ("Second line!", "第二行", True),
            ("Lonely fallback line", None, False),
        ]

    def test_sorted_by_time(self, sample_word_synced):
        times = [line.time for line in parse_word_synced_lyrics(sample_word_synced)]
        assert times == sorted(times)

    def test_punctuation_merged_word(self, sample_word_synced):
        second = parse_word_synced_lyrics(sample_word_synced)[1]
        assert [w.text for w in second.words] == ["Second ", "line!"]
        assert second.words[-1].end_time == pytest.approx(16.7)


class TestBucketAssignment:

    def test_nearest_bucket_wins(self):
        content = "\n".join([
            "[10000,1000](10000,500,0)A",
            "[12000,1000](12000,500,0)B",
            "[00:11.50]near B",
        ])
        lines = parse_word_synced_lyrics(content)
        assert lines[0].translation is None
        assert lines[1].translation == "near B"

    def test_equal_distance_goes_to_first_bucket(self):
        content = "\n".join([
            "[10000,1000](10000,500,0)A",
            "[12000,1000](12000,500,0)B",
            "[00:11.00]middle",
        ])
        lines = parse_word_synced_lyrics(content)
        assert lines[0].translation == "middle"
        assert lines[1].translation is None

    def test_tolerance_is_exclusive(self):
        content = "[10000,1000](10000,500,0)A\n[00:13.00]too far"
        lines = parse_word_synced_lyrics(content)
        assert [line.text for line in lines] == ["A", "too far"]
        assert lines[0].translation is None
        assert lines[1].is_precise_timing is False

    def test_drift_within_tolerance_attached(self):
        content = "[10000,1000](10000,500,0)A\n[00:12.90]drifted"
        lines = parse_word_synced_lyrics(content)
        assert len(lines) == 1
        assert lines[0].translation == "drifted"

    def test_several_translations_joined(self):
        content = "[10000,1000](10000,500,0)A\n[00:10.10]one\n[00:10.20]two"
        lines = parse_word_synced_lyrics(content)
        assert lines[0].translation == "one\ntwo"

    def test_duplicate_of_main_dropped(self):
        content = "[10000,1000](10000,500,0)Same\n[00:10.10]same"
        lines = parse_word_synced_lyrics(content)
        assert len(lines) == 1
        assert lines[0].translation is None

    def test_metadata_main_dropped(self):
        content = "[0,2000](0,1000,0)作词: (1000,1000,0)张三\n[30000,1000](30000,500,0)Lyric"
        lines = parse_word_synced_lyrics(content)
        assert [line.text for line in lines] == ["Lyric"]

    def test_main_without_word_groups(self):
        lines = parse_word_synced_lyrics("[5000,2000]Plain content\n[10000,1000](10000,500,0)A")
        assert lines[0].text == "Plain content"
        assert lines[0].words == []
        assert lines[0].is_precise_timing is True

    def test_main_without_word_groups_is_trimmed(self):
        lines = parse_word_synced_lyrics("[1000,2000] Hello\n[00:01.00]Hello")
        assert len(lines) == 1
        assert lines[0].text == "Hello"
        assert lines[0].translation is None

    def test_blank_timed_line_kept_as_empty_orphan(self):
        content = "[10000,1000](10000,500,0)A\n[00:11.00]\n[00:40.00]"
        lines = parse_word_synced_lyrics(content)
        assert [(line.time, line.text, line.translation) for line in lines] == [
            (pytest.approx(10.0), "A", None),
            (pytest.approx(11.0), "", None),
            (pytest.approx(40.0), "", None),
        ]
        assert [line.is_precise_timing for line in lines] == [True, False, False]


class TestFallbackOnly:
    """No word-synced lines: plain line-timed output, no bucketing."""

    def test_fallback_lines_only(self):
        content = '{"t":0,"c":[{"tx":"作词: X"}]}\n[00:05.00]Only fallback\n[00:06.00]...'
        lines = parse_word_synced_lyrics(content)
        assert len(lines) == 1
        assert lines[0].text == "Only fallback"
        assert lines[0].is_precise_timing is False

    def test_unparseable_input(self):
        assert parse_word_synced_lyrics("{broken\nnothing here") == []


class TestWordSanitization:
    """Runaway durations are clamped before bucketing."""

    def test_runaway_word_clamped_to_next_word(self):
        lines = parse_word_synced_lyrics("[1000,5000](1000,9000,0)Long (4000,300,0)word")
        first = lines[0].words[0]
        assert first.end_time <= 4.0
        assert first.end_time <= first.start_time + 2.0
        assert first.end_time == pytest.approx(3.0)

    def test_last_word_clamped_to_next_sung_line(self):
        content = "[1000,5000](1000,1800,0)Hold\n[2500,1000](2500,500,0)Next"
        lines = parse_word_synced_lyrics(content)
        assert lines[0].words[0].end_time == pytest.approx(2.5)

    def test_translation_line_does_not_truncate_word(self):
        content = "[1000,2000](1000,1500,0)Hold\n[00:01.10]translation"
        lines = parse_word_synced_lyrics(content)
        assert lines[0].words[0].end_time == pytest.approx(2.5)

    def test_zero_duration_word_gets_minimum(self):
        lines = parse_word_synced_lyrics("[1000,1000](1000,0,0)Blip")
        word = lines[0].words[0]
        assert word.end_time == pytest.approx(1.1)
