import os
from aiohttp import web
import logging
from logging.config import dictConfig
import json


def configure_logging():
    """Load a JSON dictConfig from LOGGING_CONFIG_FILE, or log to stderr at LOG_LEVEL."""
    logging_config_file = os.getenv("LOGGING_CONFIG_FILE", "")

    if len(logging_config_file) > 0:
        with open(logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(os.getenv("LOG_LEVEL", "DEBUG").upper())


def invoke():
    configure_logging()

    from social.graze.addr.app.config import Settings
    from social.graze.addr.app.server import start_web_server

    settings = Settings()  # type: ignore
    web.run_app(start_web_server(settings), port=settings.http_port)


if __name__ == "__main__":
    invoke()
