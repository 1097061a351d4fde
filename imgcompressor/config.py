"""Application settings. Loads overrides from the environment and a .env file."""
from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

WINDOW_TITLE = "Image Compressor"
WINDOW_SIZE = (500, 400)


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# One frame at 60 Hz
POLL_INTERVAL_MS = max(1, env_int("IMGCOMPRESSOR_POLL_INTERVAL_MS", 16))
LOG_LEVEL = os.getenv("IMGCOMPRESSOR_LOG_LEVEL", "INFO").strip().upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None) -> None:
    value = getattr(logging, (level or LOG_LEVEL).upper(), None)
    if not isinstance(value, int):
        value = logging.INFO
    logging.basicConfig(
        level=value,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
