"""
Logger Configuration Module

Handles logging setup for search dispatch operations.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def create_logger(log_dir: str = "logs") -> logging.Logger:
    # Create logs directory if it doesn't exist
    Path(log_dir).mkdir(parents=True, exist_ok=True)

    # Package logger, component loggers propagate into it
    search_logger = logging.getLogger("federated_search")
    search_logger.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(
        Path(log_dir) / "federated_search.log", encoding="utf-8"
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    search_logger.addHandler(file_handler)

    # Create file handler for provider errors only
    error_handler = logging.FileHandler(
        Path(log_dir) / "provider_errors.log", encoding="utf-8"
    )
    error_handler.setLevel(logging.WARNING)
    error_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    search_logger.addHandler(error_handler)

    return search_logger


search_logger: logging.Logger | None = None


def setup_logging(log_dir: str = "logs") -> logging.Logger:
    global search_logger
    if search_logger is None:
        search_logger = create_logger(log_dir)
    return search_logger
