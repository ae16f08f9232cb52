import logging

from flask import Blueprint, current_app, jsonify, request

from palmbot.errors import DecodeError, ModelNotLoaded
from palmbot.services import analyze_palm

logger = logging.getLogger(__name__)

palm_bp = Blueprint("palm", __name__)


@palm_bp.route("/analyze-palm", methods=["POST"])
def analyze():
    """
    Classify an uploaded palm photo (multipart field `image`).

    Returns:
        JSON with hand, confidence and basic reading, or an error payload.
    """
    classifier = current_app.classifier
    if not classifier.is_ready:
        return jsonify({"error": "Model loading"}), 503

    upload = request.files.get("image")
    if upload is None:
        return jsonify({"error": "No image"}), 400

    try:
        result = analyze_palm(upload.read(), classifier)
        return jsonify(result.to_dict()), 200
    except DecodeError as e:
        return jsonify({"error": str(e)}), 400
    except ModelNotLoaded as e:
        return jsonify({"error": str(e)}), 503
    except Exception as e:
        logger.exception("[ANALYZE] error")
        return jsonify({"error": str(e)}), 500
