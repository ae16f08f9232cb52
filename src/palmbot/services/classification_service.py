import math

from palmbot.models.palm_result import Classification, LEFT, RIGHT

# Scores strictly above this are "right"; exactly 0.5 is "left".
DECISION_THRESHOLD = 0.5


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def classify(score: float) -> Classification:
    """
    Convert a classifier score into a hand label and a display confidence.

    Args:
        score: Probability of "right hand" in [0, 1].

    Returns:
        Classification with label RIGHT iff score > 0.5 (0.5 resolves to LEFT)
        and confidence = round(max(score, 1 - score) * 100), halves rounded up,
        so it is always between 50 and 100.

    Raises:
        ValueError: If score is NaN or outside [0, 1].
    """
    score = float(score)
    if not 0.0 <= score <= 1.0:
        raise ValueError(f"Score must be within [0, 1], got {score}")

    label = RIGHT if score > DECISION_THRESHOLD else LEFT
    confidence = _round_half_up(max(score, 1.0 - score) * 100)
    return Classification(label=label, confidence=confidence, score=score)
