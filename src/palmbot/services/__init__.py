from .classification_service import classify
from .reading_service import basic_reading
from .fortune_service import generate_fortune, fallback_fortune
from .palm_service import analyze_palm
from .text_reply_service import select_text_reply
from .webhook_service import dispatch_events

__all__ = [
    "classify",
    "basic_reading",
    "generate_fortune",
    "fallback_fortune",
    "analyze_palm",
    "select_text_reply",
    "dispatch_events",
]
