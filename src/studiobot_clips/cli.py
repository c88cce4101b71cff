from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from studiobot_clips.app import build_service, default_root_dir
from studiobot_clips.domain.errors import ClipDetectionError
from studiobot_clips.infrastructure.storage.artifact_store import ArtifactStore, detection_payload
from studiobot_clips.infrastructure.transcriber.assemblyai_payload import AssemblyAIPayloadParser
from studiobot_clips.utils.config import load_settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="studiobot-clips", description="Detect clip candidates in a transcript")
    parser.add_argument("--root-dir", default="", help="Directory holding config/default.toml and .env")
    sub = parser.add_subparsers(dest="command", required=True)

    detect_cmd = sub.add_parser("detect", help="Rank clip candidates for one transcript JSON file")
    detect_cmd.add_argument("transcript", help="Transcript JSON file")
    detect_cmd.add_argument(
        "--format",
        choices=("native", "assemblyai"),
        default="native",
        help="native: saved transcript.json / assemblyai: raw AssemblyAI transcript body",
    )
    detect_cmd.add_argument("--video-id", default="", help="Video ID (default: transcript file stem)")
    detect_cmd.add_argument("--min-sec", type=float, default=None, help="Minimum clip duration in seconds")
    detect_cmd.add_argument("--max-sec", type=float, default=None, help="Maximum clip duration in seconds")
    detect_cmd.add_argument("--top-n", type=int, default=None, help="Number of clips to keep")
    detect_cmd.add_argument("--video-duration", type=float, default=None, help="Source video length in seconds")
    detect_cmd.add_argument("--output", default="", help="Write result JSON here instead of stdout")
    detect_cmd.add_argument(
        "--save",
        action="store_true",
        help="Also store transcript.json and clips.json under runs/<video_id>/",
    )
    return parser


def _cmd_detect(args: argparse.Namespace) -> int:
    root_dir = Path(args.root_dir) if args.root_dir else default_root_dir()
    settings = load_settings(root_dir)
    overrides = {
        key: value
        for key, value in (
            ("min_clip_sec", args.min_sec),
            ("max_clip_sec", args.max_sec),
            ("top_n", args.top_n),
        )
        if value is not None
    }
    settings.detection = replace(settings.detection, **overrides)
    settings.detection.bounds()

    service = build_service(root_dir, settings=settings)
    store = ArtifactStore(root_dir / "runs")
    transcript_path = Path(args.transcript)
    if args.format == "assemblyai":
        transcript = AssemblyAIPayloadParser().load(transcript_path)
    else:
        transcript = store.load_transcript(transcript_path)

    video_id = args.video_id.strip() or transcript_path.stem
    result = service.analyze(video_id, transcript, video_duration_sec=args.video_duration)

    if args.save:
        store.save_transcript(video_id, transcript)
        saved = store.save_detection(result)
        print(f"Saved {len(result.candidates)} clips to {saved}", file=sys.stderr)
    if args.output:
        store.save_detection(result, Path(args.output))
        print(f"Wrote {len(result.candidates)} clips to {args.output}")
    else:
        print(json.dumps(detection_payload(result), ensure_ascii=False, indent=2))
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        if args.command == "detect":
            raise SystemExit(_cmd_detect(args))
    except ClipDetectionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
    raise SystemExit("unsupported command")


if __name__ == "__main__":
    main()
