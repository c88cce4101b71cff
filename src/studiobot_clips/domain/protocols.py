from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .models import ClipRecord, TranscriptResult


class Transcriber(Protocol):
    def transcribe(self, audio_path: Path) -> TranscriptResult:
        """Return sentence-level transcript with sentiment labels."""


class ClipRepository(Protocol):
    def save_clips(self, video_id: str, records: list[ClipRecord]) -> None:
        """Persist ranked clip records for a video."""
