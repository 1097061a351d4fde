from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Callable

from PIL import Image

from .models import (
    STATUS_UNSUPPORTED_FORMAT,
    CompressionOutcome,
    CompressionRequest,
    TargetFormat,
)

logger = logging.getLogger("imgcompressor.compress")

Encoder = Callable[[Image.Image, BinaryIO, int], None]

_EXTENSION_FORMATS: dict[str, TargetFormat] = {
    "jpg": TargetFormat.JPEG,
    "jpeg": TargetFormat.JPEG,
    "png": TargetFormat.PNG,
    "webp": TargetFormat.WEBP_LOSSLESS,
}
_ENCODER_REGISTRY: dict[TargetFormat, Encoder] = {}

# zlib levels behind the Fast / Default / Best compression types
PNG_FAST = 1
PNG_DEFAULT = 6
PNG_BEST = 9

# Modes Pillow's JPEG writer stores as-is
JPEG_MODES = {"1", "L", "RGB", "CMYK"}

# Single-channel modes holding 16-bit samples
WIDE_GRAY_MODES = {"I", "I;16", "I;16L", "I;16B", "I;16N"}


def target_format_for(path: Path) -> TargetFormat | None:
    extension = Path(path).suffix.lower().lstrip(".")
    return _EXTENSION_FORMATS.get(extension)


def png_compress_level(quality: int) -> int:
    if quality < 40:
        return PNG_FAST
    if quality < 80:
        return PNG_DEFAULT
    return PNG_BEST


def compress(request: CompressionRequest) -> CompressionOutcome:
    """Decode the input, re-encode it for the output extension and write it.

    Every failure is reported as an outcome instead of raised:
    ``Error loading image: ...`` when decoding fails, the fixed unsupported
    format message when the output extension is unknown (nothing is written),
    and ``Error saving image: ...`` when opening or encoding the output fails.
    A partially written output is left on disk.
    """
    try:
        image = decode_image(request.input_path)
    except Exception as exc:
        logger.warning("Failed to load %s: %s", request.input_path, exc)
        return CompressionOutcome.failed(f"Error loading image: {exc}")
    try:
        target = target_format_for(request.output_path)
        if target is None:
            logger.warning("Unsupported output extension: %s", request.output_path)
            return CompressionOutcome.failed(STATUS_UNSUPPORTED_FORMAT)
        try:
            write_image(image, request.output_path, target, request.quality)
        except Exception as exc:
            logger.warning("Failed to save %s: %s", request.output_path, exc)
            return CompressionOutcome.failed(f"Error saving image: {exc}")
    finally:
        image.close()
    logger.info(
        "Saved %s as %s (quality %d)", request.output_path, target.name, request.quality
    )
    return CompressionOutcome.succeeded(request.output_path)


def decode_image(path: Path) -> Image.Image:
    image = Image.open(path)
    try:
        image.load()
    except Exception:
        image.close()
        raise
    return image


def write_image(image: Image.Image, output: Path, target: TargetFormat, quality: int) -> None:
    encoder = get_encoder_registry()[target]
    with Path(output).open("wb") as handle:
        encoder(image, handle, quality)


def to_8bit(image: Image.Image) -> Image.Image:
    """Scale 16-bit gray samples down to 8 bits instead of clipping them."""
    if image.mode not in WIDE_GRAY_MODES:
        return image
    return image.convert("I").point(lambda value: value * (1 / 257)).convert("L")


def save_jpeg(image: Image.Image, handle: BinaryIO, quality: int) -> None:
    image = to_8bit(image)
    if image.mode not in JPEG_MODES:
        image = image.convert("RGB")
    image.save(handle, format="JPEG", quality=quality)


def save_png(image: Image.Image, handle: BinaryIO, quality: int) -> None:
    # Pillow filters 8-bit RGBA rows adaptively
    rgba = to_8bit(image).convert("RGBA")
    rgba.save(handle, format="PNG", compress_level=png_compress_level(quality))


def save_webp_lossless(image: Image.Image, handle: BinaryIO, quality: int) -> None:
    rgba = to_8bit(image).convert("RGBA")
    rgba.save(handle, format="WEBP", lossless=True, exact=True)


def get_encoder_registry() -> dict[TargetFormat, Encoder]:
    global _ENCODER_REGISTRY
    if not _ENCODER_REGISTRY:
        _ENCODER_REGISTRY = {
            TargetFormat.JPEG: save_jpeg,
            TargetFormat.PNG: save_png,
            TargetFormat.WEBP_LOSSLESS: save_webp_lossless,
        }
    return _ENCODER_REGISTRY


def set_encoder_registry(registry: dict[TargetFormat, Encoder]) -> None:
    global _ENCODER_REGISTRY
    _ENCODER_REGISTRY = dict(registry)
