import re

GREETING_MESSAGE = (
    "Hello! I'm the palm reading bot ✋\n\n"
    "Send me a photo of your palm and I'll reply with an AI analysis and a reading.\n\n"
    "📸 Tips: bright place / whole palm in frame / keep it in focus"
)

HELP_MESSAGE = (
    "📋 How to use\n"
    "1) Take a photo of your palm\n"
    "2) Send the photo in this chat\n"
    "3) The AI reading comes back to you\n\n"
    "For better results: natural light, open hand, fingertips to wrist in frame 📷"
)

DEFAULT_MESSAGE = (
    "Thanks for your message! ✨\n"
    "If you'd like a palm reading, send a photo of your palm 📸\n"
    "Send \"help\" if you get stuck."
)

# Evaluated in order, first match wins.
TEXT_RULES = [
    (re.compile(r"(こんにち|はじめ|hello|\bhi\b)", re.IGNORECASE), GREETING_MESSAGE),
    (re.compile(r"(使い方|ヘルプ|help)", re.IGNORECASE), HELP_MESSAGE),
]


def select_text_reply(text: str) -> str:
    """
    Pick the canned reply for an incoming text message.

    Args:
        text: Raw message text (may be None, empty, or not a string).

    Returns:
        The greeting, help, or default message.
    """
    text = str(text or "").lower()
    for pattern, message in TEXT_RULES:
        if pattern.search(text):
            return message
    return DEFAULT_MESSAGE
