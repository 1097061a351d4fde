import os

import pytest
from PIL import Image

from imgcompressor.compress import get_encoder_registry, set_encoder_registry

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def make_photo(size: tuple[int, int]) -> Image.Image:
    """Deterministic picture with smooth gradients and sensor-like noise."""
    red = Image.linear_gradient("L").resize(size)
    green = Image.radial_gradient("L").resize(size)
    blue = Image.effect_noise(size, 48).convert("L")
    return Image.merge("RGB", (red, green, blue))


@pytest.fixture
def photo_png(tmp_path):
    path = tmp_path / "photo.png"
    make_photo((1024, 768)).save(path)
    return path


@pytest.fixture
def small_png(tmp_path):
    path = tmp_path / "small.png"
    make_photo((128, 96)).save(path)
    return path


@pytest.fixture
def restore_encoders():
    saved = dict(get_encoder_registry())
    yield
    set_encoder_registry(saved)
