import pytest

from studiobot_clips.domain.errors import InvalidClipBoundsError
from studiobot_clips.domain.models import Sentiment, SentenceSpan
from studiobot_clips.domain.segmenter import segment_sentences


def _span(start_sec: float, end_sec: float, text: str = "word", sentiment=Sentiment.NEUTRAL) -> SentenceSpan:
    return SentenceSpan(text=text, start_ms=int(start_sec * 1000), end_ms=int(end_sec * 1000), sentiment=sentiment)


def _five_second_spans(count: int) -> list[SentenceSpan]:
    return [_span(i * 5, (i + 1) * 5, text=f"s{i}") for i in range(count)]


def test_empty_input_yields_no_groups():
    assert segment_sentences([], 15, 60) == []


def test_single_short_sentence_is_dropped_by_minimum():
    assert segment_sentences([_span(0, 5)], 15, 60) == []


def test_sentences_within_max_merge_into_one_group():
    spans = [_span(0, 10), _span(10, 25), _span(25, 50)]
    groups = segment_sentences(spans, 15, 60)

    assert len(groups) == 1
    assert groups[0].start_ms == 0
    assert groups[0].end_ms == 50_000
    assert groups[0].sentences == tuple(spans)


def test_overflowing_sentence_starts_a_new_group():
    groups = segment_sentences(_five_second_spans(10), 15, 20)

    assert [(g.start_ms, g.end_ms) for g in groups] == [(0, 20_000), (20_000, 40_000)]
    assert [len(g.sentences) for g in groups] == [4, 4]


def test_trailing_run_below_minimum_is_dropped():
    groups = segment_sentences(_five_second_spans(10), 15, 20)
    used = {s.text for g in groups for s in g.sentences}

    assert "s8" not in used
    assert "s9" not in used


def test_group_exactly_at_max_is_kept():
    groups = segment_sentences([_span(0, 30), _span(30, 60)], 15, 60)
    assert len(groups) == 1
    assert groups[0].duration_sec == 60


def test_oversized_single_sentence_is_dropped_not_split():
    groups = segment_sentences([_span(0, 10), _span(10, 90), _span(90, 110)], 15, 60)

    assert [(g.start_ms, g.end_ms) for g in groups] == [(90_000, 110_000)]


def test_groups_respect_bounds_and_never_share_sentences():
    spans = [_span(i * 3.5, (i + 1) * 3.5, text=f"s{i}") for i in range(60)]
    groups = segment_sentences(spans, 15, 45)

    seen: set[str] = set()
    for group in groups:
        assert 15 <= group.duration_sec <= 45
        texts = {s.text for s in group.sentences}
        assert not texts & seen
        seen |= texts
    starts = [g.start_ms for g in groups]
    assert starts == sorted(starts)


@pytest.mark.parametrize(("min_sec", "max_sec"), [(60, 60), (60, 15), (-1, 30)])
def test_invalid_bounds_are_rejected(min_sec, max_sec):
    with pytest.raises(InvalidClipBoundsError):
        segment_sentences(_five_second_spans(3), min_sec, max_sec)


def test_sub_second_timestamps_measure_whole_second_bounds():
    groups = segment_sentences([_span(0.5, 30.5), _span(30.5, 60.5)], 15, 60)

    assert [(g.start_ms, g.end_ms) for g in groups] == [(500, 30_500), (30_500, 60_500)]


def test_lone_sentence_within_max_by_millis_but_not_by_whole_seconds_is_dropped():
    assert segment_sentences([_span(0.5, 60.2)], 15, 60) == []
