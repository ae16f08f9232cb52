from palmbot.routes.health import health_bp
from palmbot.routes.palm import palm_bp
from palmbot.routes.line_webhook import line_webhook_bp

def register_blueprints(app):
    """Register all app routes."""
    app.register_blueprint(health_bp)
    app.register_blueprint(palm_bp)
    app.register_blueprint(line_webhook_bp)
