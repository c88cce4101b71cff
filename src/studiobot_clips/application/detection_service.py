from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from studiobot_clips.domain.detector import detect_clips
from studiobot_clips.domain.models import (
    ClipCandidate,
    ClipRecord,
    DetectionResult,
    KeyFrame,
    TranscriptResult,
    VideoAnalysis,
    ViralMoment,
)
from studiobot_clips.domain.protocols import ClipRepository, Transcriber
from studiobot_clips.utils.config import DetectionConfig

LogCallback = Callable[[str], None]

KEYFRAME_COUNT = 5
KEYFRAME_DESCRIPTION_CHARS = 100
DESCRIPTION_TRANSCRIPT_CHARS = 200


class ClipDetectionService:
    def __init__(
        self,
        config: DetectionConfig,
        logger,
        repository: ClipRepository | None = None,
        transcriber: Transcriber | None = None,
    ) -> None:
        self.config = config
        self.logger = logger
        self.repository = repository
        self.transcriber = transcriber

    def analyze_audio(
        self,
        video_id: str,
        audio_path: Path,
        video_duration_sec: float | None = None,
        on_log: LogCallback | None = None,
    ) -> DetectionResult:
        if self.transcriber is None:
            raise RuntimeError("No transcriber configured")
        self._emit_log(on_log, f"Transcribing {audio_path}")
        transcript = self.transcriber.transcribe(audio_path)
        self.logger.info(
            "transcript.loaded",
            video_id=video_id,
            sentences=len(transcript.sentences),
            text_length=len(transcript.text),
        )
        return self.analyze(video_id, transcript, video_duration_sec=video_duration_sec, on_log=on_log)

    def analyze(
        self,
        video_id: str,
        transcript: TranscriptResult,
        video_duration_sec: float | None = None,
        on_log: LogCallback | None = None,
    ) -> DetectionResult:
        try:
            if not transcript.sentences:
                self.logger.warning("detection.no_sentences", video_id=video_id)
            candidates = detect_clips(
                transcript.sentences,
                min_clip_sec=self.config.min_clip_sec,
                max_clip_sec=self.config.max_clip_sec,
                top_n=self.config.top_n,
            )
            self._emit_log(on_log, f"Detected {len(candidates)} clip candidates")

            records = self.build_records(video_id, candidates)
            if self.repository is not None:
                self.repository.save_clips(video_id, records)
                self._emit_log(on_log, f"Saved {len(records)} clips")

            duration = transcript.duration_sec if video_duration_sec is None else video_duration_sec
            analysis = self.build_analysis(candidates, duration)
        except Exception as exc:
            self.logger.exception("detection.failed", video_id=video_id, error=str(exc))
            raise

        self.logger.info(
            "detection.completed",
            video_id=video_id,
            candidates=len(candidates),
            approved=sum(1 for r in records if r.approved),
        )
        return DetectionResult(video_id=video_id, candidates=candidates, records=records, analysis=analysis)

    def build_records(self, video_id: str, candidates: list[ClipCandidate]) -> list[ClipRecord]:
        records: list[ClipRecord] = []
        for idx, candidate in enumerate(candidates, start=1):
            percent = f"{candidate.score * 100:.0f}%"
            records.append(
                ClipRecord(
                    video_id=video_id,
                    title=f"Clip {idx}: {candidate.reason}",
                    description=(
                        f"{candidate.sentiment.value} sentiment - Score: {percent}\n\n"
                        f"{candidate.transcript[:DESCRIPTION_TRANSCRIPT_CHARS]}"
                    ),
                    start_time=candidate.start_time,
                    end_time=candidate.end_time,
                    duration=candidate.duration,
                    score=candidate.score,
                    approved=candidate.score >= self.config.auto_approve_score,
                    approval_notes=f"AI Score: {percent} - {candidate.reason}",
                )
            )
        return records

    def build_analysis(self, candidates: list[ClipCandidate], video_duration_sec: float) -> VideoAnalysis:
        return VideoAnalysis(
            viral_moments=[
                ViralMoment(
                    start_time=c.start_time,
                    end_time=c.end_time,
                    confidence=c.score,
                    description=c.reason,
                    tags=[c.sentiment.value.lower(), "ai-detected"],
                )
                for c in candidates
            ],
            summary=(
                f"AI detected {len(candidates)} potential viral clips. "
                f"Video duration: {video_duration_sec:.1f}s"
            ),
            estimated_length=video_duration_sec,
            keyframes=[
                KeyFrame(timestamp=c.start_time, description=c.key_moments[:KEYFRAME_DESCRIPTION_CHARS])
                for c in candidates[:KEYFRAME_COUNT]
            ],
        )

    def _emit_log(self, on_log: LogCallback | None, message: str) -> None:
        self.logger.info("detection.log", message=message)
        if on_log:
            on_log(message)
