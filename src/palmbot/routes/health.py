from flask import Blueprint, current_app, jsonify

from palmbot.models.hand_classifier import ModelState

health_bp = Blueprint("health", __name__)

HEALTH_STATUS = {
    ModelState.READY: "healthy",
    ModelState.UNLOADED: "loading",
    ModelState.FAILED: "failed",
}


@health_bp.route("/", methods=["GET"])
def landing_page():
    return jsonify({"status": "OK", "loaded": current_app.classifier.is_ready})


@health_bp.route("/health", methods=["GET"])
def health():
    """Readiness of the hand classifier; 503 until it has loaded."""
    state = current_app.classifier.state
    code = 200 if state is ModelState.READY else 503
    return jsonify({"status": HEALTH_STATUS[state], "model": state.value}), code
