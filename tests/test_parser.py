"""End-to-end tests for parse_lyrics(): detection, dispatch, translation
merge, interludes, and durations.
"""

import pytest

from lyrics_engine import parse_lyrics


def _summary(lines):
    return [(line.time, line.text, line.translation) for line in lines]


class TestScenarios:

    def test_single_line(self):
        lines = parse_lyrics("[00:12.34]Hello world")
        assert len(lines) == 1
        assert lines[0].time == pytest.approx(12.34)
        assert lines[0].text == "Hello world"
        assert lines[0].is_precise_timing is False

    def test_shared_timestamps(self):
        lines = parse_lyrics("[00:10.00][00:20.00]Shared line", interludes=False)
        assert [line.time for line in lines] == [pytest.approx(10.0), pytest.approx(20.0)]
        assert all(line.text == "Shared line" for line in lines)
        assert all(line.translation is None for line in lines)

    def test_near_timestamps_merge(self):
        lines = parse_lyrics("[00:10.00]Main text\n[00:10.05]Translated text")
        assert len(lines) == 1
        assert lines[0].time == pytest.approx(10.0)
        assert lines[0].text == "Main text"
        assert lines[0].translation == "Translated text"

    def test_word_synced_line(self):
        lines = parse_lyrics("[12340,2500](12340,500,0)Hello(12840,600,0)World")
        assert len(lines) == 1
        line = lines[0]
        assert line.time == pytest.approx(12.34)
        assert line.is_precise_timing is True
        assert [(w.start_time, w.end_time, w.text) for w in line.words] == [
            (pytest.approx(12.34), pytest.approx(12.84), "Hello"),
            (pytest.approx(12.84), pytest.approx(13.44), "World"),
        ]

    @pytest.mark.parametrize("content", ["", "   ", "\n\n \t\n"])
    def test_blank_input(self, content):
        assert parse_lyrics(content) == []

    def test_non_str_raises(self):
        with pytest.raises(TypeError):
            parse_lyrics(None)

    def test_non_str_translation_raises(self):
        with pytest.raises(TypeError):
            parse_lyrics("[00:01.00]x", 42)

    def test_unparseable_text(self):
        assert parse_lyrics("just some words\nno timestamps at all") == []


class TestFormatDetection:

    def test_lrc_sample(self, sample_lrc):
        lines = parse_lyrics(sample_lrc, interludes=False)
        assert _summary(lines) == [
            (pytest.approx(10.0), "Hello world", "你好世界"),
            (pytest.approx(15.5), "Second line", "第二行"),
        ]

    def test_word_synced_sample(self, sample_word_synced):
        lines = parse_lyrics(sample_word_synced, interludes=False)
        assert [(line.text, line.translation, line.is_precise_timing) for line in lines] == [
            ("Hello world", "你好世界", True),
            ("Second line!", "第二行", True),
            ("Lonely fallback line", None, False),
        ]

    def test_object_line_alone_selects_word_synced(self):
        content = '{"t":1000,"c":[{"tx":"作词: 张三"}]}\n[00:05.00]Plain'
        lines = parse_lyrics(content)
        assert [line.text for line in lines] == ["Plain"]
        assert lines[0].is_precise_timing is False


class TestTranslationMerge:

    def test_external_translation(self):
        lines = parse_lyrics(
            "[00:10.00]Hello\n[00:20.00]World",
            "[00:10.00]你好\n[00:20.10]世界",
            interludes=False,
        )
        assert [line.translation for line in lines] == ["你好", "世界"]

    def test_word_synced_translation_drift(self):
        lines = parse_lyrics(
            "[12340,2500](12340,500,0)Hello (12840,600,0)world",
            "[00:14.00]你好世界",
        )
        assert lines[0].translation == "你好世界"

    def test_translation_never_equals_text(self):
        lines = parse_lyrics(
            "[00:10.00]Hello\n[00:10.00]HELLO\n[00:20.00]World",
            "[00:20.00]world",
            interludes=False,
        )
        assert all(
            line.translation is None or line.translation.lower() != line.text.lower()
            for line in lines
        )

    def test_none_translation_is_noop(self, sample_lrc):
        assert parse_lyrics(sample_lrc, None) == parse_lyrics(sample_lrc)


class TestInterludesAndDurations:

    def test_interlude_inserted(self):
        lines = parse_lyrics(
            "[00:01.00]Intro line\n[00:30.00]After break",
            interludes=True,
            interlude_min_gap_s=8.0,
            plain_line_hold_s=4.0,
            last_line_duration_s=5.0,
        )
        assert [line.is_interlude for line in lines] == [False, True, False]
        assert lines[1].time == pytest.approx(5.0)
        assert [line.duration for line in lines] == [
            pytest.approx(4.0), pytest.approx(25.0), pytest.approx(5.0),
        ]

    def test_interludes_disabled(self):
        lines = parse_lyrics("[00:01.00]Intro line\n[00:30.00]After break", interludes=False)
        assert len(lines) == 2
        assert lines[0].duration == pytest.approx(29.0)

    def test_word_synced_sample_interlude(self, sample_word_synced):
        lines = parse_lyrics(sample_word_synced, interludes=True, interlude_min_gap_s=8.0)
        interludes = [line for line in lines if line.is_interlude]
        assert len(interludes) == 1
        assert interludes[0].time == pytest.approx(16.7)

    def test_every_line_has_duration(self, sample_word_synced):
        lines = parse_lyrics(sample_word_synced)
        assert all(line.duration is not None and line.duration >= 0 for line in lines)

    def test_output_sorted(self, sample_lrc, sample_word_synced):
        for content in (sample_lrc, sample_word_synced):
            times = [line.time for line in parse_lyrics(content)]
            assert times == sorted(times)
