import pytest

from palmbot.errors import DecodeError, ModelNotLoaded
from palmbot.models.hand_classifier import HandClassifier
from palmbot.services.palm_service import analyze_palm
from palmbot.services.reading_service import BASIC_READINGS
from palmbot.utils.image_utils import INPUT_SHAPE


def test_analyze_palm_right_hand(png_bytes, make_classifier):
    clf = make_classifier(score=0.9)

    result = analyze_palm(png_bytes, clf)

    assert clf.seen_shapes == [INPUT_SHAPE]
    assert result.classification.label == "right"
    assert result.classification.confidence == 90
    assert result.reading == BASIC_READINGS["right"]
    assert result.to_dict() == {
        "success": True,
        "hand": "Right hand",
        "handEn": "right",
        "confidence": 90,
        "palmReading": BASIC_READINGS["right"],
        "lineMessage": f"Right hand detected! Confidence: 90%\n\n{BASIC_READINGS['right']}",
    }


def test_analyze_palm_left_hand(png_bytes, make_classifier):
    result = analyze_palm(png_bytes, make_classifier(score=0.25))

    assert result.classification.label == "left"
    assert result.classification.confidence == 75


def test_analyze_palm_bad_image_never_reaches_model(make_classifier):
    clf = make_classifier()

    with pytest.raises(DecodeError):
        analyze_palm(b"garbage", clf)
    assert clf.seen_shapes == []


def test_analyze_palm_unloaded_model(png_bytes, tmp_path):
    with pytest.raises(ModelNotLoaded):
        analyze_palm(png_bytes, HandClassifier(tmp_path / "missing.ts"))
