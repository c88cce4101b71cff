from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from studiobot_clips.domain.detector import (
    DEFAULT_MAX_CLIP_SEC,
    DEFAULT_MIN_CLIP_SEC,
    DEFAULT_TOP_N,
    DetectionBounds,
)

DEFAULT_AUTO_APPROVE_SCORE = 0.7


@dataclass(slots=True)
class DetectionConfig:
    min_clip_sec: float = DEFAULT_MIN_CLIP_SEC
    max_clip_sec: float = DEFAULT_MAX_CLIP_SEC
    top_n: int = DEFAULT_TOP_N
    auto_approve_score: float = DEFAULT_AUTO_APPROVE_SCORE

    def bounds(self) -> DetectionBounds:
        return DetectionBounds(self.min_clip_sec, self.max_clip_sec, self.top_n).validate()


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(slots=True)
class Settings:
    detection: DetectionConfig
    logging: LoggingConfig
    root_dir: Path


def load_settings(root_dir: Path) -> Settings:
    config_path = root_dir / "config" / "default.toml"
    raw: dict = {}
    if config_path.exists():
        with config_path.open("rb") as fh:
            raw = tomllib.load(fh)

    detection = raw.get("detection", {})
    logging_raw = raw.get("logging", {})

    settings = Settings(
        detection=DetectionConfig(
            min_clip_sec=float(detection.get("min_clip_sec", DEFAULT_MIN_CLIP_SEC)),
            max_clip_sec=float(detection.get("max_clip_sec", DEFAULT_MAX_CLIP_SEC)),
            top_n=int(detection.get("top_n", DEFAULT_TOP_N)),
            auto_approve_score=float(detection.get("auto_approve_score", DEFAULT_AUTO_APPROVE_SCORE)),
        ),
        logging=LoggingConfig(
            level=os.getenv("LOG_LEVEL", str(logging_raw.get("level", "INFO"))).upper(),
        ),
        root_dir=root_dir,
    )
    settings.detection.bounds()
    return settings
