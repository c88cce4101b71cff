import json
from pathlib import Path

import pytest

from studiobot_clips.cli import main


def _native_transcript(path: Path) -> Path:
    sentences = [
        {"text": " ".join(["word"] * 14), "start_ms": i * 7000, "end_ms": (i + 1) * 7000, "sentiment": "NEUTRAL"}
        for i in range(5)
    ]
    path.write_text(json.dumps({"sentences": sentences}), encoding="utf-8")
    return path


def _assemblyai_transcript(path: Path) -> Path:
    payload = {
        "status": "completed",
        "text": "long talk",
        "sentiment_analysis_results": [
            {"text": "word " * 30, "start": i * 10_000, "end": (i + 1) * 10_000, "sentiment": "POSITIVE"}
            for i in range(12)
        ],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_detect_writes_result_json(tmp_path: Path):
    transcript = _native_transcript(tmp_path / "episode1.json")
    output = tmp_path / "out.json"

    with pytest.raises(SystemExit) as exc:
        main(["--root-dir", str(tmp_path), "detect", str(transcript), "--output", str(output)])

    assert exc.value.code == 0
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["video_id"] == "episode1"
    assert payload["candidates"][0]["reason"] == "Optimal length for short"
    assert payload["records"][0]["approved"] is True


def test_detect_reads_assemblyai_payload_with_overrides(tmp_path: Path):
    transcript = _assemblyai_transcript(tmp_path / "raw.json")
    output = tmp_path / "out.json"

    with pytest.raises(SystemExit) as exc:
        main(
            [
                "--root-dir",
                str(tmp_path),
                "detect",
                str(transcript),
                "--format",
                "assemblyai",
                "--video-id",
                "vid42",
                "--max-sec",
                "30",
                "--top-n",
                "2",
                "--output",
                str(output),
                "--save",
            ]
        )

    assert exc.value.code == 0
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert len(payload["candidates"]) == 2
    assert all(c["end_time"] - c["start_time"] <= 30 for c in payload["candidates"])
    assert (tmp_path / "runs" / "vid42" / "clips.json").exists()
    assert (tmp_path / "runs" / "vid42" / "transcript.json").exists()


def test_detect_rejects_invalid_bounds(tmp_path: Path):
    transcript = _native_transcript(tmp_path / "episode1.json")

    with pytest.raises(SystemExit) as exc:
        main(["--root-dir", str(tmp_path), "detect", str(transcript), "--min-sec", "60", "--max-sec", "30"])

    assert exc.value.code == 2
