from __future__ import annotations

import logging
from queue import SimpleQueue
from typing import Optional

from PySide6.QtCore import QObject, Signal

from .compress import compress
from .models import CLOSE, CompressionOutcome, CompressionRequest

logger = logging.getLogger("imgcompressor.worker")

RequestChannel = SimpleQueue  # of Optional[CompressionRequest]
ResultChannel = SimpleQueue  # of CompressionOutcome


def process_request(request: CompressionRequest) -> CompressionOutcome:
    try:
        return compress(request)
    except Exception as exc:
        logger.exception("Compression of %s crashed", request.input_path)
        return CompressionOutcome.failed(f"Error: {exc}")


class CompressWorker(QObject):
    """Drains compression requests one at a time on a background thread."""

    outcome_ready = Signal(object)
    stopped = Signal()

    def __init__(self, requests: RequestChannel, results: ResultChannel) -> None:
        super().__init__()
        self.requests = requests
        self.results = results

    def run(self) -> None:
        logger.debug("Worker started")
        while True:
            request: Optional[CompressionRequest] = self.requests.get()
            if request is CLOSE:
                break
            logger.info(
                "Compressing %s -> %s (quality %d)",
                request.input_path,
                request.output_path,
                request.quality,
            )
            outcome = process_request(request)
            self.results.put(outcome)
            self.outcome_ready.emit(outcome)
        logger.debug("Worker stopped")
        self.stopped.emit()
