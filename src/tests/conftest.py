import sys
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

# Ensure the repository 'src' directory is on sys.path so tests can import `palmbot`.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from palmbot.models.hand_classifier import ModelState  # noqa: E402


def encode_image(img: Image.Image, fmt: str = "PNG") -> bytes:
    buf = BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


class FakeClassifier:
    """Stands in for HandClassifier; returns a fixed score."""

    def __init__(self, score: float = 0.8, state: ModelState = ModelState.READY):
        self.score = score
        self.state = state
        self.seen_shapes = []

    @property
    def is_ready(self) -> bool:
        return self.state is ModelState.READY

    def predict(self, tensor):
        self.seen_shapes.append(tuple(tensor.shape))
        return self.score


@pytest.fixture
def png_bytes() -> bytes:
    return encode_image(Image.new("RGB", (320, 480), (200, 150, 120)))


@pytest.fixture
def make_classifier():
    return FakeClassifier
