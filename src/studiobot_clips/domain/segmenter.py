from __future__ import annotations

import math
from collections.abc import Sequence

from .errors import InvalidClipBoundsError
from .models import SentenceGroup, SentenceSpan


def validate_duration_bounds(min_sec: float, max_sec: float) -> None:
    if min_sec < 0:
        raise InvalidClipBoundsError(f"min clip duration must be >= 0, got {min_sec}")
    if max_sec <= min_sec:
        raise InvalidClipBoundsError(
            f"max clip duration ({max_sec}s) must be greater than min clip duration ({min_sec}s)"
        )


def clip_bounds_sec(start_ms: int, end_ms: int) -> tuple[int, int]:
    """Whole-second clip bounds that cover the full millisecond span."""
    return math.floor(start_ms / 1000), math.ceil(end_ms / 1000)


def clip_span_sec(start_ms: int, end_ms: int) -> int:
    start, end = clip_bounds_sec(start_ms, end_ms)
    return end - start


def segment_sentences(
    sentences: Sequence[SentenceSpan],
    min_sec: float,
    max_sec: float,
) -> list[SentenceGroup]:
    """Greedily merge ordered sentences into groups no longer than ``max_sec``.

    A sentence that would push the open group past ``max_sec`` closes it and
    opens the next group. Closed groups shorter than ``min_sec`` are dropped, as
    is a single sentence that alone runs longer than ``max_sec``.
    Durations are measured on the whole-second bounds a clip is cut at.
    Sentences must already be sorted by start time; they are not re-checked.
    """
    validate_duration_bounds(min_sec, max_sec)
    if not sentences:
        return []

    groups: list[SentenceGroup] = []
    clip_start = sentences[0].start_ms
    clip_end = sentences[0].end_ms
    current: list[SentenceSpan] = [sentences[0]]

    for sentence in sentences[1:]:
        if clip_span_sec(clip_start, sentence.end_ms) <= max_sec:
            clip_end = sentence.end_ms
            current.append(sentence)
            continue

        _close_group(groups, clip_start, clip_end, current, min_sec, max_sec)
        clip_start = sentence.start_ms
        clip_end = sentence.end_ms
        current = [sentence]

    _close_group(groups, clip_start, clip_end, current, min_sec, max_sec)
    return groups


def _close_group(
    groups: list[SentenceGroup],
    start_ms: int,
    end_ms: int,
    sentences: list[SentenceSpan],
    min_sec: float,
    max_sec: float,
) -> None:
    # only a lone sentence longer than max_sec can exceed the upper bound here
    if min_sec <= clip_span_sec(start_ms, end_ms) <= max_sec:
        groups.append(SentenceGroup(start_ms=start_ms, end_ms=end_ms, sentences=tuple(sentences)))
