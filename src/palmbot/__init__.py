import logging

from flask import Flask

from palmbot.config.config import Config
from palmbot.models.hand_classifier import load_model
from palmbot.routes import register_blueprints
from palmbot.utils.log_utils import setup_logging

from typing import Optional

logger = logging.getLogger(__name__)

def create_app(config_object: Optional[object] = None, classifier=None):
    """App factory: load config, load the hand classifier, register blueprints."""
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    setup_logging(app.config.get("LOG_LEVEL", "INFO"))

    # missing secrets degrade the service instead of stopping it
    for name in Config.missing_required():
        logger.error("[BOOT] ❌ %s missing", name)

    app.classifier = classifier if classifier is not None else load_model()
    register_blueprints(app)
    return app
