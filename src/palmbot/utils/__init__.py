# Image processing utilities
from .image_utils import preprocess_image, INPUT_SHAPE

# Logging
from .log_utils import setup_logging

__all__ = [
    "preprocess_image",
    "INPUT_SHAPE",
    "setup_logging",
]
