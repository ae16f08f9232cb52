import os
from dotenv import load_dotenv

# Load environment variables from the .env file
load_dotenv()

class Config:
    """
    App configuration loaded from environment variables.

    Required:
      - LINE_CHANNEL_ACCESS_TOKEN: LINE Messaging API channel access token
        (LINE_ACCESS_TOKEN is accepted as an alias)
      - OPENAI_API_KEY: API key for the chat completion service

    Optional:
      (defaults)
      - FLASK_HOST: host to run the Flask app on (default: 0.0.0.0)
      - FLASK_PORT: port to run the Flask app on (default: 3000)
      - FLASK_DEBUG: enable/disable debug mode (default: false)
      - LOG_LEVEL: root log level (default: INFO)

      (classifier)
      - MODEL_PATH: TorchScript hand classifier, relative paths resolve against
        the project root (default: models/hand_classifier.ts)

      (chat completion)
      - OPENAI_MODEL: chat model name (default: gpt-4o)
      - OPENAI_API_URL: chat completion endpoint
      - OPENAI_TIMEOUT: seconds before the fortune falls back to local text (default: 20)
      - OPENAI_MAX_TOKENS: completion token budget (default: 800)
      - OPENAI_TEMPERATURE: sampling temperature (default: 0.7)

      (LINE)
      - LINE_API_URL / LINE_DATA_API_URL: Messaging API hosts
      - LINE_TIMEOUT: total seconds for a content download, and for a reply call (default: 10)

      (webhook)
      - WEBHOOK_WORKERS: events of one delivery processed in parallel (default: 4)
      - WEBHOOK_DEADLINE: seconds a delivery may take before the response is sent;
        keep it below the gunicorn worker timeout (default: 45)

      (limits)
      - MAX_UPLOAD_BYTES: max request body for /analyze-palm (default: 10 MiB)
      - MAX_IMAGE_BYTES: max image size downloaded from LINE (default: 10 MiB)
      - MAX_IMAGE_PIXELS: max pixels actually decoded, after JPEG reduced-scale decoding (default: 40M)

    Copy .env.example -> .env and fill the required values.
    """
    # Flask
    FLASK_HOST = os.getenv('FLASK_HOST', '0.0.0.0')
    FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", 3000)))
    FLASK_DEBUG = os.getenv('FLASK_DEBUG', 'false').lower() == 'true'
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Hand classifier (TorchScript export of the trained model)
    MODEL_PATH = os.getenv('MODEL_PATH', 'models/hand_classifier.ts')

    # LINE Messaging API
    LINE_CHANNEL_ACCESS_TOKEN = (
        os.getenv('LINE_CHANNEL_ACCESS_TOKEN') or os.getenv('LINE_ACCESS_TOKEN') or ''
    ).strip()
    LINE_API_URL = os.getenv('LINE_API_URL', 'https://api.line.me')
    LINE_DATA_API_URL = os.getenv('LINE_DATA_API_URL', 'https://api-data.line.me')
    LINE_TIMEOUT = float(os.getenv('LINE_TIMEOUT', 10))

    # Webhook delivery budget (gunicorn_conf.py timeout defaults to 60)
    WEBHOOK_WORKERS = int(os.getenv('WEBHOOK_WORKERS', 4))
    WEBHOOK_DEADLINE = float(os.getenv('WEBHOOK_DEADLINE', 45))

    # OpenAI chat completion
    OPENAI_API_KEY = (os.getenv('OPENAI_API_KEY') or '').strip()
    OPENAI_MODEL = (os.getenv('OPENAI_MODEL') or 'gpt-4o').strip()
    OPENAI_API_URL = os.getenv('OPENAI_API_URL', 'https://api.openai.com/v1/chat/completions')
    OPENAI_TIMEOUT = float(os.getenv('OPENAI_TIMEOUT', 20))
    OPENAI_MAX_TOKENS = int(os.getenv('OPENAI_MAX_TOKENS', 800))
    OPENAI_TEMPERATURE = float(os.getenv('OPENAI_TEMPERATURE', 0.7))

    # Upload / decode limits
    MAX_UPLOAD_BYTES = int(os.getenv('MAX_UPLOAD_BYTES', 10 * 1024 * 1024))
    MAX_IMAGE_BYTES = int(os.getenv('MAX_IMAGE_BYTES', 10 * 1024 * 1024))
    MAX_IMAGE_PIXELS = int(os.getenv('MAX_IMAGE_PIXELS', 40_000_000))

    # Flask reads this key from the config object
    MAX_CONTENT_LENGTH = MAX_UPLOAD_BYTES

    @classmethod
    def missing_required(cls) -> list:
        """
        Returns the names of required settings that are not set.

        The service still boots without them: image events fall back to the
        failure reply and fortunes fall back to the locally composed text.
        """
        required_vars = [
            'LINE_CHANNEL_ACCESS_TOKEN',
            'OPENAI_API_KEY',
        ]
        return [name for name in required_vars if not getattr(cls, name)]
