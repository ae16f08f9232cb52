import os
import sys

# Ensure the src directory is on sys.path so "import palmbot" works
ROOT = os.path.abspath(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"
workers = int(os.getenv("WEB_CONCURRENCY", 2))
threads = int(os.getenv("GUNICORN_THREADS", 4))
# LINE expects the webhook to answer within its delivery deadline
timeout = int(os.getenv("GUNICORN_TIMEOUT", 60))


def post_worker_init(worker):
    """
    Gunicorn hook executed in each worker after the app is loaded.
    Reports whether the hand classifier is ready so a failed model load is
    visible in the server log rather than only through /health.
    """
    from palmbot.models.hand_classifier import ModelState, get_classifier

    state = get_classifier().state
    if state is ModelState.READY:
        worker.log.info("Hand classifier ready in worker PID=%s", os.getpid())
    else:
        worker.log.error("Hand classifier %s in worker PID=%s; image analysis disabled", state.value, os.getpid())
