from __future__ import annotations


class ClipDetectionError(Exception):
    pass


class InvalidClipBoundsError(ClipDetectionError, ValueError):
    pass


class TranscriptFormatError(ClipDetectionError):
    pass
