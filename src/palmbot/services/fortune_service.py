import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout

import requests

from palmbot.config.config import Config
from palmbot.errors import UpstreamFailure
from palmbot.models.palm_result import Classification

logger = logging.getLogger(__name__)

# Outbound chat completion calls; a timed-out call finishes here without blocking the caller
_fortune_pool = ThreadPoolExecutor(max_workers=8, thread_name_prefix="fortune")

SYSTEM_PROMPT = "You are a friendly, experienced palm reader who gives careful, warm readings."

STYLE_DIRECTIVE = """\
[Style]
- Warm and approachable, lightly playful
- Strengths first, then constructive advice
- Concrete and practical
- Close on a positive conclusion

[Include]
🌟 Features of the palm
💪 Life line (health, vitality)
🧠 Head line (talents, suitable work)
❤️ Heart line (love, relationships)
🍀 Overall fortune and advice

[Length] 250-350 words"""


def build_prompt(classification: Classification, reading: str) -> str:
    return (
        "Please give a palm reading.\n\n"
        "[Analysis]\n"
        f"Hand: {classification.hand_name}\n"
        f"Confidence: {classification.confidence}%\n"
        f"Basic reading: {reading}\n\n"
        f"{STYLE_DIRECTIVE}\n"
    )


def fallback_fortune(classification: Classification, reading: str) -> str:
    """Reply composed only from local data, used when the chat completion is unavailable."""
    return (
        f"I've looked at your {classification.hand_name.lower()} ✋\n\n"
        f"{reading}\n\n"
        f"Confidence: {classification.confidence}%\n\n"
        "* A detailed reading will follow later."
    )


def _request_fortune(classification: Classification, reading: str) -> str:
    """Single chat completion call; raises on any failure."""
    if not Config.OPENAI_API_KEY:
        raise UpstreamFailure("OpenAI key missing")

    payload = {
        "model": Config.OPENAI_MODEL,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(classification, reading)},
        ],
        "max_tokens": Config.OPENAI_MAX_TOKENS,
        "temperature": Config.OPENAI_TEMPERATURE,
    }
    headers = {
        "Authorization": f"Bearer {Config.OPENAI_API_KEY}",
        "Content-Type": "application/json",
    }

    r = requests.post(Config.OPENAI_API_URL, headers=headers, json=payload, timeout=Config.OPENAI_TIMEOUT)
    if not r.ok:
        raise UpstreamFailure(f"OpenAI {r.status_code} {r.text[:200]}")

    try:
        content = r.json()["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise UpstreamFailure(f"Malformed OpenAI response: {e}") from e

    if not isinstance(content, str) or not content.strip():
        raise UpstreamFailure("OpenAI returned an empty reading")
    return content.strip()


def generate_fortune(classification: Classification, reading: str) -> str:
    """
    Generate the full reading for a classified palm.

    One attempt only. The call runs on a worker thread and is abandoned after
    Config.OPENAI_TIMEOUT seconds in total, so a slowly trickling response
    cannot hold the webhook past its deadline. Whatever goes wrong (missing
    key, network error, timeout, error status, malformed body) the caller
    gets fallback_fortune() instead of an exception.

    Args:
        classification: Hand label and confidence.
        reading: Basic reading for the label.

    Returns:
        The generated reading, or the local fallback text.
    """
    try:
        future = _fortune_pool.submit(_request_fortune, classification, reading)
        return future.result(timeout=Config.OPENAI_TIMEOUT)
    except FutureTimeout:
        logger.error("[OPENAI] no reading after %.0fs, using fallback reading", Config.OPENAI_TIMEOUT)
        return fallback_fortune(classification, reading)
    except Exception:
        logger.exception("[OPENAI] error, using fallback reading")
        return fallback_fortune(classification, reading)
