import logging
from io import BytesIO

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from palmbot.config.config import Config
from palmbot.errors import DecodeError

logger = logging.getLogger(__name__)

TARGET_SIZE = 224
INPUT_SHAPE = (1, TARGET_SIZE, TARGET_SIZE, 3)

# Pixel values are scaled to [0, 1]; the exported hand classifier was trained on /255 inputs.
PIXEL_SCALE = 255.0

_HIGH_DEPTH_MODES = ("I", "F")


def _to_rgb(im: Image.Image) -> Image.Image:
    """
    Convert any PIL mode to 3-channel RGB.

    Alpha (RGBA, LA, PA, transparent palettes) is dropped, single channel
    images are replicated to three channels, and 16-bit / float images are
    scaled down to 8 bits first since PIL cannot convert them to RGB directly.
    """
    if im.mode.startswith("I;16"):
        im = im.convert("I")
    if im.mode in _HIGH_DEPTH_MODES:
        im = im.point(lambda v: v * (1 / 256)).convert("L")
    if im.mode != "RGB":
        im = im.convert("RGB")
    return im


def _exif_oriented(im: Image.Image) -> Image.Image:
    try:
        return ImageOps.exif_transpose(im)
    except Exception:
        logger.debug("Ignoring unreadable EXIF orientation", exc_info=True)
        return im


def _decode_pixels(src: Image.Image) -> np.ndarray:
    """
    Decode an opened image into 224x224 RGB pixels without materializing huge images.

    JPEGs are first switched to the smallest DCT scale that still covers the
    target box, so a 48 MP photo decodes at 1/8 size. The size that would
    actually be decoded is then checked against Config.MAX_IMAGE_PIXELS;
    formats without reduced-scale decoding are checked at full size.
    """
    src.draft("RGB", (TARGET_SIZE, TARGET_SIZE))
    width, height = src.size
    if width * height > Config.MAX_IMAGE_PIXELS:
        raise DecodeError(f"Image too large: {width}x{height}")
    src.load()

    oriented = _exif_oriented(src)
    try:
        rgb = _to_rgb(oriented)
        fitted = ImageOps.fit(
            rgb,
            (TARGET_SIZE, TARGET_SIZE),
            method=Image.Resampling.BILINEAR,
            centering=(0.5, 0.5),
        )
        return np.asarray(fitted, dtype=np.float32)
    finally:
        if oriented is not src:
            oriented.close()


def preprocess_image(image_bytes: bytes) -> np.ndarray:
    """
    Turn raw uploaded image bytes into the classifier input tensor.

    Args:
        image_bytes: Encoded image in any format PIL can read.

    Returns:
        float32 array of shape (1, 224, 224, 3), RGB, values in [0, 1].
        The image is scaled to cover the 224x224 box and center-cropped
        (bilinear), so there is no padding.

    Raises:
        DecodeError: If the bytes are empty, not an image, truncated, or
            exceed the configured pixel budget after reduced-scale decoding.
    """
    if not image_bytes:
        raise DecodeError("Empty image payload")

    try:
        with Image.open(BytesIO(image_bytes)) as src:
            pixels = _decode_pixels(src)
    except DecodeError:
        raise
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Invalid image data: {e}") from e

    tensor = np.ascontiguousarray((pixels / PIXEL_SCALE)[np.newaxis, ...], dtype=np.float32)
    if tensor.shape != INPUT_SHAPE:
        # Only reachable if PIL hands back an unexpected band count.
        raise DecodeError(f"Unexpected decoded shape {tensor.shape}")
    return tensor
