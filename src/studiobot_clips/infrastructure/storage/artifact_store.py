from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from studiobot_clips.domain.errors import TranscriptFormatError
from studiobot_clips.domain.models import DetectionResult, SentenceSpan, TranscriptResult, WordToken
from studiobot_clips.infrastructure.transcriber.assemblyai_payload import parse_sentiment


class ArtifactStore:
    def __init__(self, runs_root: Path) -> None:
        self.runs_root = runs_root
        self.runs_root.mkdir(parents=True, exist_ok=True)

    def video_dir(self, video_id: str) -> Path:
        path = self.runs_root / video_id
        path.mkdir(parents=True, exist_ok=True)
        return path

    def transcript_path(self, video_id: str) -> Path:
        return self.video_dir(video_id) / "transcript.json"

    def detection_path(self, video_id: str) -> Path:
        return self.video_dir(video_id) / "clips.json"

    def write_json(self, path: Path, payload: dict | list) -> None:
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")

    def save_transcript(self, video_id: str, transcript: TranscriptResult) -> Path:
        payload = {
            "text": transcript.text,
            "key_phrases": list(transcript.key_phrases),
            "sentences": [
                {
                    "text": s.text,
                    "start_ms": s.start_ms,
                    "end_ms": s.end_ms,
                    "sentiment": s.sentiment.value,
                }
                for s in transcript.sentences
            ],
            "words": [
                {"text": w.text, "start_ms": w.start_ms, "end_ms": w.end_ms, "confidence": w.confidence}
                for w in transcript.words
            ],
        }
        path = self.transcript_path(video_id)
        self.write_json(path, payload)
        return path

    def load_transcript(self, path: Path) -> TranscriptResult:
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
            sentences = [
                SentenceSpan(
                    text=str(s["text"]),
                    start_ms=int(s["start_ms"]),
                    end_ms=int(s["end_ms"]),
                    sentiment=parse_sentiment(s["sentiment"]),
                )
                for s in payload.get("sentences", [])
            ]
            words = [
                WordToken(
                    text=str(w["text"]),
                    start_ms=int(w["start_ms"]),
                    end_ms=int(w["end_ms"]),
                    confidence=float(w.get("confidence", 1.0)),
                )
                for w in payload.get("words", [])
            ]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise TranscriptFormatError(f"Malformed transcript file: {path}") from exc

        return TranscriptResult(
            text=str(payload.get("text") or " ".join(s.text for s in sentences)),
            sentences=sentences,
            words=words,
            key_phrases=[str(p) for p in payload.get("key_phrases", [])],
        )

    def save_detection(self, result: DetectionResult, path: Path | None = None) -> Path:
        target = path or self.detection_path(result.video_id)
        self.write_json(target, detection_payload(result))
        return target


def detection_payload(result: DetectionResult) -> dict:
    # StrEnum values serialize as plain strings
    return asdict(result)
