from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

from studiobot_clips.application.detection_service import ClipDetectionService
from studiobot_clips.domain.protocols import ClipRepository
from studiobot_clips.utils.config import Settings, load_settings
from studiobot_clips.utils.logger import configure_logger, get_logger


def default_root_dir() -> Path:
    return Path(__file__).resolve().parents[2]


def build_service(
    root_dir: Path,
    repository: ClipRepository | None = None,
    settings: Settings | None = None,
) -> ClipDetectionService:
    load_dotenv(root_dir / ".env")
    settings = settings or load_settings(root_dir)
    configure_logger(settings.logging.level)
    return ClipDetectionService(
        config=settings.detection,
        logger=get_logger(),
        repository=repository,
    )
