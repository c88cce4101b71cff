from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from studiobot_clips.domain.errors import TranscriptFormatError
from studiobot_clips.domain.models import Sentiment, SentenceSpan, TranscriptResult, WordToken

MAX_KEY_PHRASES = 10


class AssemblyAIPayloadParser:
    """Maps a finished AssemblyAI transcript JSON body onto ``TranscriptResult``."""

    def load(self, path: Path) -> TranscriptResult:
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise TranscriptFormatError(f"Transcript is not valid UTF-8 JSON: {path}") from exc
        return self.parse(payload)

    def parse(self, payload: dict[str, Any]) -> TranscriptResult:
        if not isinstance(payload, dict):
            raise TranscriptFormatError("Transcript payload must be a JSON object")
        if payload.get("status") == "error":
            raise TranscriptFormatError(f"Transcription failed: {payload.get('error')}")

        return TranscriptResult(
            text=str(payload.get("text") or ""),
            sentences=[self._parse_sentence(s) for s in payload.get("sentiment_analysis_results") or []],
            words=[self._parse_word(w) for w in payload.get("words") or []],
            key_phrases=self._parse_key_phrases(payload.get("auto_highlights_result")),
        )

    def _parse_sentence(self, raw: dict[str, Any]) -> SentenceSpan:
        try:
            return SentenceSpan(
                text=str(raw["text"]),
                start_ms=int(raw["start"]),
                end_ms=int(raw["end"]),
                sentiment=parse_sentiment(raw["sentiment"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TranscriptFormatError(f"Malformed sentence entry: {raw!r}") from exc

    def _parse_word(self, raw: dict[str, Any]) -> WordToken:
        try:
            return WordToken(
                text=str(raw["text"]),
                start_ms=int(raw["start"]),
                end_ms=int(raw["end"]),
                confidence=float(raw.get("confidence", 1.0)),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TranscriptFormatError(f"Malformed word entry: {raw!r}") from exc

    def _parse_key_phrases(self, highlights: Any) -> list[str]:
        if not highlights:
            return []
        try:
            results = highlights.get("results") or []
            return [str(h["text"]) for h in results if h.get("text")][:MAX_KEY_PHRASES]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise TranscriptFormatError(f"Malformed auto_highlights_result: {highlights!r}") from exc


def parse_sentiment(value: Any) -> Sentiment:
    try:
        return Sentiment(str(value).strip().upper())
    except ValueError as exc:
        raise TranscriptFormatError(f"Unknown sentiment label: {value!r}") from exc
