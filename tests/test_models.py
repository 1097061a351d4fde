from pathlib import Path

import pytest

from imgcompressor.models import (
    DEFAULT_QUALITY,
    STATUS_COMPRESSING,
    STATUS_READY,
    STATUS_UNSUPPORTED_FORMAT,
    CompressionOutcome,
    StatusTone,
    UIState,
    clamp_quality,
    status_tone,
)


def test_ui_state_defaults():
    state = UIState()
    assert state.input_path is None
    assert state.output_path is None
    assert state.quality == DEFAULT_QUALITY == 80
    assert state.busy is False
    assert state.status == STATUS_READY


@pytest.mark.parametrize(
    "value, expected",
    [(-50, 1), (0, 1), (1, 1), (55, 55), (100, 100), (101, 100), (10_000, 100)],
)
def test_clamp_quality(value, expected):
    assert clamp_quality(value) == expected


@pytest.mark.parametrize(
    "status, tone",
    [
        ("Error loading image: nope", StatusTone.ERROR),
        (STATUS_UNSUPPORTED_FORMAT, StatusTone.ERROR),
        ("Error saving image: disk full", StatusTone.ERROR),
        ("Success: saved to /tmp/a.jpg", StatusTone.SUCCESS),
        (STATUS_READY, StatusTone.NEUTRAL),
        (STATUS_COMPRESSING, StatusTone.NEUTRAL),
        ("error lowercase is not an error", StatusTone.NEUTRAL),
        ("Saved with Error inside", StatusTone.NEUTRAL),
    ],
)
def test_status_tone_depends_on_prefix_only(status, tone):
    assert status_tone(status) is tone


def test_outcome_messages():
    ok = CompressionOutcome.succeeded(Path("/out/photo.jpg"))
    assert ok.success
    assert ok.message == f"Success: saved to {Path('/out/photo.jpg')}"
    failed = CompressionOutcome.failed("Error saving image: boom")
    assert not failed.success
    assert failed.message == "Error saving image: boom"
