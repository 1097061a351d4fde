from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

MIN_QUALITY = 1
MAX_QUALITY = 100
DEFAULT_QUALITY = 80

STATUS_READY = "Ready"
STATUS_INPUT_SELECTED = "Input file selected"
STATUS_OUTPUT_SELECTED = "Output file selected"
STATUS_COMPRESSING = "Compressing..."
STATUS_UNSUPPORTED_FORMAT = "Error: unsupported format. Use .jpg, .png, or .webp"
NO_FILE_SELECTED = "No file selected"

# Enqueued on the request channel to close it
CLOSE = None

# (filter name, extensions) in dialog order
INPUT_FILTERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Images", ("png", "jpg", "jpeg", "webp")),
)
OUTPUT_FILTERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("JPEG", ("jpg", "jpeg")),
    ("PNG", ("png",)),
    ("WebP", ("webp",)),
)


class TargetFormat(Enum):
    JPEG = "jpeg"
    PNG = "png"
    WEBP_LOSSLESS = "webp"


class StatusTone(Enum):
    ERROR = "error"
    SUCCESS = "success"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class CompressionRequest:
    input_path: Path
    output_path: Path
    quality: int


@dataclass(frozen=True)
class CompressionOutcome:
    success: bool
    message: str

    @classmethod
    def succeeded(cls, output: Path) -> CompressionOutcome:
        return cls(True, f"Success: saved to {output}")

    @classmethod
    def failed(cls, message: str) -> CompressionOutcome:
        return cls(False, message)


@dataclass
class UIState:
    input_path: Path | None = None
    output_path: Path | None = None
    quality: int = DEFAULT_QUALITY
    busy: bool = False
    status: str = field(default=STATUS_READY)


def clamp_quality(value: int) -> int:
    return max(MIN_QUALITY, min(MAX_QUALITY, int(value)))


def status_tone(status: str) -> StatusTone:
    if status.startswith("Error"):
        return StatusTone.ERROR
    if status.startswith("Success"):
        return StatusTone.SUCCESS
    return StatusTone.NEUTRAL
