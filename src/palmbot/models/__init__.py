from .palm_result import Classification, PalmAnalysis, LEFT, RIGHT
from .hand_classifier import HandClassifier, ModelState, get_classifier, load_model

__all__ = [
    "Classification",
    "PalmAnalysis",
    "LEFT",
    "RIGHT",
    "HandClassifier",
    "ModelState",
    "get_classifier",
    "load_model",
]
