import json
from pathlib import Path

import pytest

from studiobot_clips.domain.detector import detect_clips
from studiobot_clips.domain.errors import TranscriptFormatError
from studiobot_clips.domain.models import (
    DetectionResult,
    Sentiment,
    SentenceSpan,
    TranscriptResult,
    VideoAnalysis,
    WordToken,
)
from studiobot_clips.infrastructure.storage.artifact_store import ArtifactStore


def _transcript() -> TranscriptResult:
    sentences = [
        SentenceSpan(text="Big news today", start_ms=0, end_ms=12_000, sentiment=Sentiment.POSITIVE),
        SentenceSpan(text="and it is not good", start_ms=12_000, end_ms=30_000, sentiment=Sentiment.NEGATIVE),
    ]
    return TranscriptResult(
        text="Big news today and it is not good",
        sentences=sentences,
        words=[WordToken(text="Big", start_ms=0, end_ms=300, confidence=0.9)],
        key_phrases=["big news"],
    )


def test_saved_transcript_loads_back(tmp_path: Path):
    store = ArtifactStore(tmp_path / "runs")
    path = store.save_transcript("vid1", _transcript())

    assert path == tmp_path / "runs" / "vid1" / "transcript.json"
    assert store.load_transcript(path) == _transcript()


def test_load_transcript_rejects_missing_fields(tmp_path: Path):
    path = tmp_path / "t.json"
    path.write_text(json.dumps({"sentences": [{"text": "x", "start_ms": 0}]}), encoding="utf-8")

    with pytest.raises(TranscriptFormatError, match="Malformed transcript file"):
        ArtifactStore(tmp_path / "runs").load_transcript(path)


def test_load_transcript_joins_text_when_missing(tmp_path: Path):
    path = tmp_path / "t.json"
    payload = {
        "sentences": [
            {"text": "one", "start_ms": 0, "end_ms": 1000, "sentiment": "NEUTRAL"},
            {"text": "two", "start_ms": 1000, "end_ms": 2000, "sentiment": "positive"},
        ]
    }
    path.write_text(json.dumps(payload), encoding="utf-8")

    result = ArtifactStore(tmp_path / "runs").load_transcript(path)
    assert result.text == "one two"
    assert result.sentences[1].sentiment is Sentiment.POSITIVE


def test_save_detection_writes_plain_json(tmp_path: Path):
    store = ArtifactStore(tmp_path / "runs")
    candidates = detect_clips(_transcript().sentences, 15, 60)
    result = DetectionResult(
        video_id="vid1",
        candidates=candidates,
        records=[],
        analysis=VideoAnalysis(viral_moments=[], summary="s", estimated_length=30.0, keyframes=[]),
    )

    path = store.save_detection(result)
    payload = json.loads(path.read_text(encoding="utf-8"))

    assert path.name == "clips.json"
    assert payload["video_id"] == "vid1"
    assert payload["candidates"][0]["sentiment"] == "NEUTRAL"
    assert payload["candidates"][0]["end_time"] == 30
