from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence

from .models import ClipScore, Sentiment, SentenceSpan

SENTIMENT_WEIGHTS = {
    Sentiment.POSITIVE: 1.0,
    Sentiment.NEUTRAL: 0.5,
    Sentiment.NEGATIVE: 0.3,
}
NEUTRAL_SENTIMENT_SCORE = 0.5

# Fixed "ideal short" bands, independent of the caller's min/max bounds.
IDEAL_MIN_SEC = 30.0
IDEAL_MAX_SEC = 45.0
IDEAL_MIN_WORDS_PER_SEC = 2.0
IDEAL_MAX_WORDS_PER_SEC = 4.0

IN_BAND_SCORE = 1.0
OUT_OF_BAND_SCORE = 0.7

SENTIMENT_WEIGHT = 0.4
LENGTH_WEIGHT = 0.3
DENSITY_WEIGHT = 0.3

POSITIVE_REASON_RATIO = 0.6
NEGATIVE_REASON_RATIO = 0.4

REASON_POSITIVE = "High positive sentiment"
REASON_EMOTIONAL = "Strong emotional content"
REASON_OPTIMAL_LENGTH = "Optimal length for short"
REASON_GENERAL = "General content"


def sentiment_score(counts: Counter[Sentiment]) -> float:
    total = sum(counts.values())
    if total == 0:
        return NEUTRAL_SENTIMENT_SCORE
    weighted = sum(weight * counts[label] for label, weight in SENTIMENT_WEIGHTS.items())
    return weighted / total


def dominant_sentiment(counts: Counter[Sentiment]) -> Sentiment:
    pos = counts[Sentiment.POSITIVE]
    neg = counts[Sentiment.NEGATIVE]
    neu = counts[Sentiment.NEUTRAL]
    if pos > neg and pos > neu:
        return Sentiment.POSITIVE
    if neg > pos and neg > neu:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def length_score(duration_sec: float) -> float:
    return IN_BAND_SCORE if _in_ideal_length(duration_sec) else OUT_OF_BAND_SCORE


def density_score(word_count: int, duration_sec: float) -> float:
    if duration_sec <= 0:
        return OUT_OF_BAND_SCORE
    words_per_sec = word_count / duration_sec
    if IDEAL_MIN_WORDS_PER_SEC <= words_per_sec <= IDEAL_MAX_WORDS_PER_SEC:
        return IN_BAND_SCORE
    return OUT_OF_BAND_SCORE


def selection_reason(counts: Counter[Sentiment], duration_sec: float) -> str:
    total = sum(counts.values())
    if counts[Sentiment.POSITIVE] > total * POSITIVE_REASON_RATIO:
        return REASON_POSITIVE
    if counts[Sentiment.NEGATIVE] > total * NEGATIVE_REASON_RATIO:
        return REASON_EMOTIONAL
    if _in_ideal_length(duration_sec):
        return REASON_OPTIMAL_LENGTH
    return REASON_GENERAL


def score_sentences(sentences: Sequence[SentenceSpan]) -> ClipScore:
    """Score an ordered, non-empty run of sentences.

    The composite is ``0.4 * sentiment + 0.3 * length + 0.3 * density``,
    rounded half-up to two decimals. Duration runs from the first
    sentence's start to the last sentence's end.
    """
    if not sentences:
        raise ValueError("cannot score an empty sentence group")

    counts = Counter(s.sentiment for s in sentences)
    duration_sec = (sentences[-1].end_ms - sentences[0].start_ms) / 1000
    word_count = len(" ".join(s.text for s in sentences).split())

    composite = (
        sentiment_score(counts) * SENTIMENT_WEIGHT
        + length_score(duration_sec) * LENGTH_WEIGHT
        + density_score(word_count, duration_sec) * DENSITY_WEIGHT
    )
    return ClipScore(
        score=_round2(composite),
        sentiment=dominant_sentiment(counts),
        reason=selection_reason(counts, duration_sec),
    )


def _in_ideal_length(duration_sec: float) -> bool:
    return IDEAL_MIN_SEC <= duration_sec <= IDEAL_MAX_SEC


def _round2(value: float) -> float:
    # round half up
    return math.floor(value * 100 + 0.5) / 100
