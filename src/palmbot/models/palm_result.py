from dataclasses import dataclass
from typing import Dict

LEFT = "left"
RIGHT = "right"

HAND_NAMES = {
    LEFT: "Left hand",
    RIGHT: "Right hand",
}

'''
Result Models
Classification is the decision rule output for one classifier score.
PalmAnalysis bundles it with the basic reading for the standalone endpoint
and the webhook fortune step.
'''
@dataclass(frozen=True)
class Classification:
    label: str          # left | right
    confidence: int     # percent, 50..100
    score: float        # raw probability of "right"

    @property
    def hand_name(self) -> str:
        return HAND_NAMES.get(self.label, "Hand")

    def to_dict(self) -> Dict:
        return {"label": self.label, "confidence": self.confidence, "score": self.score}


@dataclass(frozen=True)
class PalmAnalysis:
    classification: Classification
    reading: str

    @property
    def summary(self) -> str:
        c = self.classification
        return f"{c.hand_name} detected! Confidence: {c.confidence}%\n\n{self.reading}"

    def to_dict(self) -> Dict:
        c = self.classification
        return {
            "success": True,
            "hand": c.hand_name,
            "handEn": c.label,
            "confidence": c.confidence,
            "palmReading": self.reading,
            "lineMessage": self.summary,
        }
