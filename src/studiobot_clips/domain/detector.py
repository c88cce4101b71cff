from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .errors import InvalidClipBoundsError
from .models import ClipCandidate, SentenceGroup, SentenceSpan
from .scorer import score_sentences
from .segmenter import clip_bounds_sec, segment_sentences, validate_duration_bounds

DEFAULT_MIN_CLIP_SEC = 15
DEFAULT_MAX_CLIP_SEC = 60
DEFAULT_TOP_N = 10
KEY_MOMENT_COUNT = 3


@dataclass(slots=True, frozen=True)
class DetectionBounds:
    min_clip_sec: float = DEFAULT_MIN_CLIP_SEC
    max_clip_sec: float = DEFAULT_MAX_CLIP_SEC
    top_n: int = DEFAULT_TOP_N

    def validate(self) -> DetectionBounds:
        validate_duration_bounds(self.min_clip_sec, self.max_clip_sec)
        if self.top_n < 0:
            raise InvalidClipBoundsError(f"top_n must be >= 0, got {self.top_n}")
        return self


def build_candidate(group: SentenceGroup) -> ClipCandidate:
    scored = score_sentences(group.sentences)
    texts = group.texts
    start_time, end_time = clip_bounds_sec(group.start_ms, group.end_ms)
    return ClipCandidate(
        start_time=start_time,
        end_time=end_time,
        score=scored.score,
        transcript=" ".join(texts),
        sentiment=scored.sentiment,
        key_moments=". ".join(texts[:KEY_MOMENT_COUNT]),
        reason=scored.reason,
        start_ms=group.start_ms,
        end_ms=group.end_ms,
    )


def rank_candidates(candidates: Sequence[ClipCandidate], top_n: int) -> list[ClipCandidate]:
    # sorted() is stable, so equal scores keep segmentation order
    ranked = sorted(candidates, key=lambda c: c.score, reverse=True)
    return ranked[:top_n]


def detect_clips(
    sentences: Sequence[SentenceSpan],
    min_clip_sec: float = DEFAULT_MIN_CLIP_SEC,
    max_clip_sec: float = DEFAULT_MAX_CLIP_SEC,
    top_n: int = DEFAULT_TOP_N,
) -> list[ClipCandidate]:
    """Segment, score and rank clip candidates from ordered sentence spans.

    Returns at most ``top_n`` candidates, highest score first. Raises
    ``InvalidClipBoundsError`` when the bounds cannot close a group.
    """
    bounds = DetectionBounds(min_clip_sec, max_clip_sec, top_n).validate()
    groups = segment_sentences(sentences, bounds.min_clip_sec, bounds.max_clip_sec)
    return rank_candidates([build_candidate(g) for g in groups], bounds.top_n)
