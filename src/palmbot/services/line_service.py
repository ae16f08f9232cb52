import logging
import time

import requests

from palmbot.config.config import Config
from palmbot.errors import UpstreamFailure

logger = logging.getLogger(__name__)

# LINE rejects text messages longer than this
MAX_TEXT_LENGTH = 5000
CHUNK_SIZE = 64 * 1024


def _auth_headers() -> dict:
    if not Config.LINE_CHANNEL_ACCESS_TOKEN:
        raise UpstreamFailure("LINE token missing (set LINE_CHANNEL_ACCESS_TOKEN)")
    return {"Authorization": f"Bearer {Config.LINE_CHANNEL_ACCESS_TOKEN}"}


def fetch_message_content(message_id: str) -> bytes:
    """
    Download the binary content of an image message.

    Args:
        message_id: LINE message id from the webhook event.

    Returns:
        Raw image bytes.

    Raises:
        UpstreamFailure: On a missing token, transport error, non-success
            status, a body larger than Config.MAX_IMAGE_BYTES, or a download
            that takes longer than Config.LINE_TIMEOUT in total.
    """
    url = f"{Config.LINE_DATA_API_URL}/v2/bot/message/{message_id}/content"
    deadline = time.monotonic() + Config.LINE_TIMEOUT
    headers = _auth_headers()

    try:
        with requests.get(url, headers=headers, timeout=Config.LINE_TIMEOUT, stream=True) as response:
            if not response.ok:
                raise UpstreamFailure(f"Get image failed: {response.status_code} {response.text[:200]}")

            declared = response.headers.get("Content-Length")
            if declared and declared.isdigit() and int(declared) > Config.MAX_IMAGE_BYTES:
                raise UpstreamFailure(f"Image too large: {declared} bytes")

            buf = bytearray()
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                buf.extend(chunk)
                if len(buf) > Config.MAX_IMAGE_BYTES:
                    raise UpstreamFailure(f"Image exceeds {Config.MAX_IMAGE_BYTES} bytes")
                # requests timeouts apply per socket read; bound the whole body
                if time.monotonic() > deadline:
                    raise UpstreamFailure(f"Get image timed out after {Config.LINE_TIMEOUT}s")
    except requests.RequestException as e:
        raise UpstreamFailure(f"Get image failed: {e}") from e

    return bytes(buf)


def reply_message(reply_token: str, text: str) -> bool:
    """
    Send one text reply for a webhook event.

    Failures are logged and reported through the return value only; there is
    no other channel to tell the user, so nothing is retried or raised.

    Returns:
        True if LINE accepted the reply.
    """
    try:
        headers = _auth_headers()
        headers["Content-Type"] = "application/json"
        payload = {
            "replyToken": reply_token,
            "messages": [{"type": "text", "text": (text or "")[:MAX_TEXT_LENGTH]}],
        }
        r = requests.post(
            f"{Config.LINE_API_URL}/v2/bot/message/reply",
            headers=headers,
            json=payload,
            timeout=Config.LINE_TIMEOUT,
        )
        if not r.ok:
            raise UpstreamFailure(f"LINE reply failed: {r.status_code} {r.text[:200]}")
    except (requests.RequestException, UpstreamFailure):
        logger.exception("[LINE] reply error")
        return False
    return True
