from palmbot.config.config import Config
from palmbot import create_app

app = create_app()


if __name__ == "__main__":
    host = Config.FLASK_HOST
    port = Config.FLASK_PORT
    debug = Config.FLASK_DEBUG

    app.run(host=host, port=port, debug=debug)
