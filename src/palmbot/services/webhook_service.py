import logging
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Iterable, List

from palmbot.config.config import Config
from palmbot.models.hand_classifier import HandClassifier
from palmbot.services.fortune_service import generate_fortune
from palmbot.services.line_service import fetch_message_content, reply_message
from palmbot.services.palm_service import analyze_palm
from palmbot.services.text_reply_service import select_text_reply

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = (
    "Sorry, something went wrong while reading your palm 🙏\n\n"
    "📸 Photo tips\n"
    "- A bright place (natural light is best)\n"
    "- Get the whole palm in the frame\n"
    "- Make sure it's in focus\n\n"
    "Please try again."
)

# Outcomes returned per event by dispatch_events
IMAGE = "image"
TEXT = "text"
IGNORED = "ignored"
ERROR = "error"
TIMEOUT = "timeout"


def handle_image_event(event: dict, classifier: HandClassifier) -> bool:
    """
    Run the full palm pipeline for an image message and reply exactly once.

    Any failure before the reply (download, decode, model, shape) becomes
    ANALYSIS_FAILED_MESSAGE. A failed fortune call does not count: the
    fortune service already falls back to a local reading.

    Returns:
        Whether the reply was delivered.
    """
    try:
        image_bytes = fetch_message_content(event["message"]["id"])
        analysis = analyze_palm(image_bytes, classifier)
        message = generate_fortune(analysis.classification, analysis.reading)
    except Exception:
        logger.exception("[PALM] error")
        message = ANALYSIS_FAILED_MESSAGE

    return reply_message(event.get("replyToken"), message)


def handle_text_event(event: dict) -> bool:
    """Reply to a text message with the matching canned message."""
    text = event.get("message", {}).get("text", "")
    return reply_message(event.get("replyToken"), select_text_reply(text))


def handle_event(event: dict, classifier: HandClassifier) -> str:
    if not isinstance(event, dict) or event.get("type") != "message":
        return IGNORED

    message_type = (event.get("message") or {}).get("type")
    if message_type == "image":
        handle_image_event(event, classifier)
        return IMAGE
    if message_type == "text":
        handle_text_event(event)
        return TEXT
    return IGNORED


def dispatch_events(events: Iterable[dict], classifier: HandClassifier) -> List[str]:
    """
    Process the events of one webhook delivery concurrently, within a deadline.

    Events run on up to Config.WEBHOOK_WORKERS threads. Results are collected
    until Config.WEBHOOK_DEADLINE, which stays below the gunicorn worker
    timeout so the worker is never killed mid-batch. An event still running
    at the deadline is reported as "timeout" and keeps running in the
    background, where it still sends its single reply. An exception in one
    event is logged and does not affect the others.

    Args:
        events: The `events` list of a LINE webhook body.
        classifier: Hand classifier used for image events.

    Returns:
        One outcome per event, in input order: "image", "text", "ignored",
        "error" or "timeout".
    """
    events = list(events)
    if not events:
        return []

    deadline = time.monotonic() + Config.WEBHOOK_DEADLINE
    workers = max(1, min(Config.WEBHOOK_WORKERS, len(events)))
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="webhook")
    try:
        futures = [executor.submit(handle_event, event, classifier) for event in events]
        outcomes = []
        for future in futures:
            try:
                outcomes.append(future.result(timeout=max(0.0, deadline - time.monotonic())))
            except FutureTimeout:
                logger.error("[WEBHOOK] event still running at the %.0fs delivery deadline", Config.WEBHOOK_DEADLINE)
                outcomes.append(TIMEOUT)
            except Exception:
                logger.exception("[WEBHOOK] event failed")
                outcomes.append(ERROR)
    finally:
        executor.shutdown(wait=False)
    return outcomes
