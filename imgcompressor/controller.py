from __future__ import annotations

from pathlib import Path
from queue import Empty, SimpleQueue
from typing import Protocol

from .models import (
    CLOSE,
    STATUS_COMPRESSING,
    STATUS_INPUT_SELECTED,
    STATUS_OUTPUT_SELECTED,
    CompressionOutcome,
    CompressionRequest,
    StatusTone,
    UIState,
    clamp_quality,
    status_tone,
)


class FileDialogs(Protocol):
    def open_image(self) -> Path | None: ...

    def save_image(self) -> Path | None: ...


class CompressorController:
    """Presentation state of the compressor window.

    Owned by the UI thread. Requests go out on ``requests`` and outcomes come
    back on ``results``; nothing else is shared with the worker. The window
    calls :meth:`poll` once per tick while :attr:`state.busy` is set.
    """

    def __init__(
        self,
        dialogs: FileDialogs,
        requests: SimpleQueue,
        results: SimpleQueue,
    ) -> None:
        self.dialogs = dialogs
        self.requests = requests
        self.results = results
        self.state = UIState()

    @property
    def can_compress(self) -> bool:
        state = self.state
        return state.input_path is not None and state.output_path is not None and not state.busy

    @property
    def status_tone(self) -> StatusTone:
        return status_tone(self.state.status)

    def pick_input(self) -> Path | None:
        path = self.dialogs.open_image()
        if not path:
            return None
        self.state.input_path = Path(path)
        self.state.status = STATUS_INPUT_SELECTED
        return self.state.input_path

    def pick_output(self) -> Path | None:
        path = self.dialogs.save_image()
        if not path:
            return None
        self.state.output_path = Path(path)
        self.state.status = STATUS_OUTPUT_SELECTED
        return self.state.output_path

    def set_quality(self, value: int) -> int:
        self.state.quality = clamp_quality(value)
        return self.state.quality

    def submit(self) -> CompressionRequest | None:
        if not self.can_compress:
            return None
        request = CompressionRequest(
            input_path=Path(self.state.input_path),
            output_path=Path(self.state.output_path),
            quality=self.state.quality,
        )
        self.requests.put(request)
        self.state.busy = True
        self.state.status = STATUS_COMPRESSING
        return request

    def poll(self) -> CompressionOutcome | None:
        try:
            outcome: CompressionOutcome = self.results.get_nowait()
        except Empty:
            return None
        self.state.busy = False
        self.state.status = outcome.message
        return outcome

    def shutdown(self) -> None:
        self.requests.put(CLOSE)
