"""Logging setup for the API process."""

import logging

from config import LOG_LEVEL, JWT_SECRET_KEY, DEFAULT_JWT_SECRET_KEY

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> None:
    """Configure root logging once for the whole application."""
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    if JWT_SECRET_KEY == DEFAULT_JWT_SECRET_KEY:
        logging.getLogger(__name__).warning(
            "JWT_SECRET_KEY is not set; using the development placeholder secret"
        )
