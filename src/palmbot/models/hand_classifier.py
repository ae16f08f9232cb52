"""Hand classifier adapter.

Wraps the exported TorchScript model so the rest of the app can call
`predict(tensor)` and get the probability that the photo shows a right hand.

The model is loaded once at start-up. A missing or unreadable artifact leaves
the adapter in the FAILED state for the lifetime of the process; every
prediction then fails fast with ModelNotLoaded and /health reports it.
"""
import logging
import math
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

import numpy as np
import torch

from palmbot.config.config import Config
from palmbot.errors import ModelNotLoaded, ShapeMismatch
from palmbot.utils.image_utils import INPUT_SHAPE

logger = logging.getLogger(__name__)

# project root: src/palmbot/models -> src/palmbot -> src -> project root
PROJECT_ROOT = Path(__file__).resolve().parents[3]


class ModelState(str, Enum):
    UNLOADED = "unloaded"
    READY = "ready"
    FAILED = "failed"


def torch_loader(path: Path):
    """Load a TorchScript module on CPU."""
    return torch.jit.load(str(path), map_location="cpu")


def resolve_model_path(path: Optional[str] = None) -> Path:
    p = Path(path or Config.MODEL_PATH)
    return p if p.is_absolute() else (PROJECT_ROOT / p)


class HandClassifier:
    """Binary left/right hand classifier backed by a TorchScript module."""

    def __init__(self, model_path, loader: Callable = torch_loader):
        self.model_path = Path(model_path)
        self._loader = loader
        self._model = None
        self._state = ModelState.UNLOADED

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ModelState.READY

    def load(self) -> ModelState:
        """
        Load the model once.

        Returns:
            READY on success, FAILED if the artifact is missing or cannot be
            loaded. Later calls return the current state without retrying.
        """
        if self._state is not ModelState.UNLOADED:
            return self._state

        if not self.model_path.exists():
            logger.error("[MODEL] ❌ model not found: %s (place the exported model there)", self.model_path)
            self._state = ModelState.FAILED
            return self._state

        logger.info("[MODEL] Loading… %s", self.model_path)
        try:
            model = self._loader(self.model_path)
            model.eval()
        except Exception:
            logger.exception("[MODEL] ❌ Load error: %s", self.model_path)
            self._state = ModelState.FAILED
            return self._state

        self._model = model
        self._state = ModelState.READY
        logger.info("[MODEL] ✅ Loaded")
        return self._state

    def predict(self, tensor: np.ndarray) -> float:
        """
        Run one forward pass.

        Args:
            tensor: float32 array of shape (1, 224, 224, 3) from preprocess_image.

        Returns:
            Probability of "right hand", clipped to [0, 1].

        Raises:
            ModelNotLoaded: If load() did not succeed.
            ShapeMismatch: If the input or the model output breaks the contract.
        """
        if not self.is_ready:
            raise ModelNotLoaded(f"Hand classifier is {self._state.value}")

        if not isinstance(tensor, np.ndarray) or tuple(tensor.shape) != INPUT_SHAPE:
            shape = getattr(tensor, "shape", None)
            raise ShapeMismatch(f"Expected input shape {INPUT_SHAPE}, got {shape}")
        if tensor.dtype != np.float32:
            raise ShapeMismatch(f"Expected float32 input, got {tensor.dtype}")

        # Weights are read-only and inference_mode keeps no autograd state,
        # so concurrent requests can share the module.
        with torch.inference_mode():
            output = self._model(torch.from_numpy(tensor))

        flat = torch.as_tensor(output).reshape(-1)
        if flat.numel() == 0:
            raise ShapeMismatch("Model returned an empty output")
        score = float(flat[0])
        if math.isnan(score) or math.isinf(score):
            raise ShapeMismatch(f"Model returned a non-finite score: {score}")
        return min(max(score, 0.0), 1.0)


_CLASSIFIER: Optional[HandClassifier] = None


def get_classifier() -> HandClassifier:
    """Process-wide classifier instance."""
    global _CLASSIFIER
    if _CLASSIFIER is None:
        _CLASSIFIER = HandClassifier(resolve_model_path())
    return _CLASSIFIER


def load_model(path: Optional[str] = None) -> HandClassifier:
    """Create the process-wide classifier from `path` (or Config.MODEL_PATH) and load it."""
    global _CLASSIFIER
    if _CLASSIFIER is None or path is not None:
        _CLASSIFIER = HandClassifier(resolve_model_path(path))
    _CLASSIFIER.load()
    return _CLASSIFIER
