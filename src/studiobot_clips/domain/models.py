from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class Sentiment(StrEnum):
    POSITIVE = "POSITIVE"
    NEUTRAL = "NEUTRAL"
    NEGATIVE = "NEGATIVE"


@dataclass(slots=True, frozen=True)
class SentenceSpan:
    text: str
    start_ms: int
    end_ms: int
    sentiment: Sentiment

    @property
    def duration_sec(self) -> float:
        return (self.end_ms - self.start_ms) / 1000


@dataclass(slots=True, frozen=True)
class WordToken:
    text: str
    start_ms: int
    end_ms: int
    confidence: float = 1.0


@dataclass(slots=True)
class TranscriptResult:
    text: str
    sentences: list[SentenceSpan]
    words: list[WordToken] = field(default_factory=list)
    key_phrases: list[str] = field(default_factory=list)

    @property
    def duration_sec(self) -> float:
        if not self.sentences:
            return 0.0
        return self.sentences[-1].end_ms / 1000


@dataclass(slots=True, frozen=True)
class SentenceGroup:
    """Contiguous run of sentences closed by the segmenter."""

    start_ms: int
    end_ms: int
    sentences: tuple[SentenceSpan, ...]

    @property
    def duration_sec(self) -> float:
        return (self.end_ms - self.start_ms) / 1000

    @property
    def texts(self) -> list[str]:
        return [s.text for s in self.sentences]


@dataclass(slots=True, frozen=True)
class ClipScore:
    score: float
    sentiment: Sentiment
    reason: str


@dataclass(slots=True, frozen=True)
class ClipCandidate:
    start_time: int
    end_time: int
    score: float
    transcript: str
    sentiment: Sentiment
    key_moments: str
    reason: str
    start_ms: int = 0
    end_ms: int = 0

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(slots=True)
class ClipRecord:
    video_id: str
    title: str
    description: str
    start_time: int
    end_time: int
    duration: int
    score: float
    approved: bool
    approval_notes: str


@dataclass(slots=True)
class ViralMoment:
    start_time: int
    end_time: int
    confidence: float
    description: str
    tags: list[str]


@dataclass(slots=True)
class KeyFrame:
    timestamp: int
    description: str


@dataclass(slots=True)
class VideoAnalysis:
    viral_moments: list[ViralMoment]
    summary: str
    estimated_length: float
    keyframes: list[KeyFrame]


@dataclass(slots=True)
class DetectionResult:
    video_id: str
    candidates: list[ClipCandidate]
    records: list[ClipRecord]
    analysis: VideoAnalysis
