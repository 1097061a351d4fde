from __future__ import annotations

import logging
import sys
from pathlib import Path
from queue import SimpleQueue

from PySide6.QtCore import Qt, QThread, QTimer
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from .config import POLL_INTERVAL_MS, WINDOW_SIZE, WINDOW_TITLE, setup_logging
from .controller import CompressorController, FileDialogs
from .models import (
    INPUT_FILTERS,
    MAX_QUALITY,
    MIN_QUALITY,
    NO_FILE_SELECTED,
    OUTPUT_FILTERS,
    StatusTone,
)
from .worker import CompressWorker

logger = logging.getLogger("imgcompressor.app")

TONE_COLORS = {
    StatusTone.ERROR: "red",
    StatusTone.SUCCESS: "green",
    StatusTone.NEUTRAL: "gray",
}


def build_name_filter(filters: tuple[tuple[str, tuple[str, ...]], ...]) -> str:
    parts = []
    for name, extensions in filters:
        patterns = " ".join(f"*.{extension}" for extension in extensions)
        parts.append(f"{name} ({patterns})")
    return ";;".join(parts)


class QtFileDialogs:

    def __init__(self, parent: QWidget) -> None:
        self.parent = parent

    def open_image(self) -> Path | None:
        path, _ = QFileDialog.getOpenFileName(
            self.parent, "Select input image", "", build_name_filter(INPUT_FILTERS)
        )
        return Path(path) if path else None

    def save_image(self) -> Path | None:
        path, _ = QFileDialog.getSaveFileName(
            self.parent, "Select output file", "", build_name_filter(OUTPUT_FILTERS)
        )
        return Path(path) if path else None


class MainWindow(QMainWindow):

    def __init__(self, dialogs: FileDialogs | None = None) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(*WINDOW_SIZE)
        requests: SimpleQueue = SimpleQueue()
        results: SimpleQueue = SimpleQueue()
        self.controller = CompressorController(dialogs or QtFileDialogs(self), requests, results)
        self.input_label = QLabel(NO_FILE_SELECTED)
        self.output_label = QLabel(NO_FILE_SELECTED)
        self.quality_slider = QSlider(Qt.Horizontal)
        self.quality_value = QLabel()
        self.compress_button = QPushButton("Compress image")
        self.status_label = QLabel()
        self.poll_timer = QTimer(self)
        self.poll_timer.setInterval(POLL_INTERVAL_MS)
        self.worker_thread = QThread()
        self.worker = CompressWorker(requests, results)
        self.setup_ui()
        self.start_worker()
        self.refresh()

    def setup_ui(self) -> None:
        central = QWidget()
        layout = QVBoxLayout()
        heading = QLabel(WINDOW_TITLE)
        font = QFont(heading.font())
        if font.pointSizeF() > 0:
            font.setPointSizeF(font.pointSizeF() * 1.5)
        font.setBold(True)
        heading.setFont(font)
        layout.addWidget(heading)
        layout.addLayout(self.build_browse_row("Input file:", self.pick_input))
        layout.addWidget(self.input_label)
        layout.addLayout(self.build_browse_row("Output file:", self.pick_output))
        layout.addWidget(self.output_label)
        layout.addWidget(self.build_separator())
        quality_row = QHBoxLayout()
        quality_row.addWidget(QLabel("Compression quality:"))
        quality_row.addWidget(self.quality_value)
        quality_row.addStretch()
        layout.addLayout(quality_row)
        layout.addWidget(self.quality_slider)
        layout.addWidget(QLabel("Lower = more compression / smaller file."))
        layout.addWidget(QLabel("Higher = less compression / better quality."))
        layout.addWidget(self.build_separator())
        layout.addWidget(self.compress_button)
        status_row = QHBoxLayout()
        status_row.addWidget(QLabel("Status:"))
        status_row.addWidget(self.status_label, 1)
        layout.addLayout(status_row)
        layout.addStretch()
        central.setLayout(layout)
        self.setCentralWidget(central)
        self.status_label.setWordWrap(True)
        for label in (self.input_label, self.output_label, self.status_label):
            label.setTextFormat(Qt.PlainText)
        self.quality_slider.setRange(MIN_QUALITY, MAX_QUALITY)
        self.quality_slider.setValue(self.controller.state.quality)
        self.quality_slider.valueChanged.connect(self.on_quality_changed)
        self.compress_button.clicked.connect(self.on_compress)
        self.poll_timer.timeout.connect(self.on_poll)

    def build_browse_row(self, title: str, handler) -> QHBoxLayout:
        row = QHBoxLayout()
        button = QPushButton("Browse…")
        button.clicked.connect(handler)
        row.addWidget(QLabel(title))
        row.addWidget(button)
        row.addStretch()
        return row

    def build_separator(self) -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.HLine)
        line.setFrameShadow(QFrame.Sunken)
        return line

    def start_worker(self) -> None:
        self.worker.moveToThread(self.worker_thread)
        self.worker_thread.started.connect(self.worker.run)
        # The UI thread may be blocked in wait() when the worker stops
        self.worker.stopped.connect(self.worker_thread.quit, Qt.DirectConnection)
        self.worker.outcome_ready.connect(self.on_outcome_ready)
        app = QApplication.instance()
        if app is not None:
            app.aboutToQuit.connect(self.stop_worker)
        self.worker_thread.start()

    def stop_worker(self) -> None:
        self.poll_timer.stop()
        if not self.worker_thread.isRunning():
            return
        self.controller.shutdown()
        self.worker_thread.wait()

    def pick_input(self) -> None:
        self.controller.pick_input()
        self.refresh()

    def pick_output(self) -> None:
        self.controller.pick_output()
        self.refresh()

    def on_quality_changed(self, value: int) -> None:
        self.controller.set_quality(value)
        self.refresh()

    def on_compress(self) -> None:
        request = self.controller.submit()
        if request is None:
            return
        logger.info("Submitted %s -> %s", request.input_path, request.output_path)
        self.poll_timer.start()
        self.refresh()

    def on_poll(self) -> None:
        outcome = self.controller.poll()
        if not self.controller.state.busy:
            self.poll_timer.stop()
        if outcome is not None:
            self.refresh()

    def on_outcome_ready(self, outcome) -> None:
        self.on_poll()

    def refresh(self) -> None:
        state = self.controller.state
        self.input_label.setText(str(state.input_path) if state.input_path else NO_FILE_SELECTED)
        self.output_label.setText(str(state.output_path) if state.output_path else NO_FILE_SELECTED)
        self.quality_value.setText(f"{state.quality}%")
        self.compress_button.setEnabled(self.controller.can_compress)
        self.status_label.setText(state.status)
        color = TONE_COLORS[self.controller.status_tone]
        self.status_label.setStyleSheet(f"color: {color};")

    def closeEvent(self, event) -> None:
        self.stop_worker()
        super().closeEvent(event)


def main() -> int:
    setup_logging()
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    return app.exec()
