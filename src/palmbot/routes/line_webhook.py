from flask import Blueprint, current_app, jsonify, request

from palmbot.services import dispatch_events

line_webhook_bp = Blueprint("line_webhook", __name__)


@line_webhook_bp.route("/line-webhook", methods=["POST"])
def line_webhook():
    """
    Endpoint for LINE Messaging API webhook deliveries.

    Every event is answered (or ignored) before returning; failures are
    handled per event, so LINE always gets a 200.
    """
    data = request.get_json(silent=True) or {}
    events = data.get("events") if isinstance(data, dict) else None
    if not isinstance(events, list):
        events = []

    dispatch_events(events, current_app.classifier)
    return "", 200


@line_webhook_bp.route("/test-webhook", methods=["POST"])
def test_webhook():
    return jsonify({"ok": True, "data": request.get_json(silent=True)})
