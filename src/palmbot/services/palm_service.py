import logging

from palmbot.models.hand_classifier import HandClassifier
from palmbot.models.palm_result import PalmAnalysis
from palmbot.services.classification_service import classify
from palmbot.services.reading_service import basic_reading
from palmbot.utils.image_utils import preprocess_image

logger = logging.getLogger(__name__)


def analyze_palm(image_bytes: bytes, classifier: HandClassifier) -> PalmAnalysis:
    """
    Classify a palm photo and attach the basic reading.

    Shared by the webhook dispatcher and the /analyze-palm endpoint.

    Args:
        image_bytes: Encoded image.
        classifier: Loaded hand classifier.

    Returns:
        PalmAnalysis with the classification and basic reading.

    Raises:
        ModelNotLoaded, DecodeError, ShapeMismatch: From the pipeline stages.
    """
    tensor = preprocess_image(image_bytes)
    try:
        score = classifier.predict(tensor)
    finally:
        del tensor

    classification = classify(score)
    logger.info("[PALM] %s (score=%.4f, confidence=%d%%)",
                classification.label, classification.score, classification.confidence)
    return PalmAnalysis(classification=classification, reading=basic_reading(classification.label))
