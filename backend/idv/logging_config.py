"""
Logging Setup — console and file handlers under LOG_DIR.
"""
import logging
import os

from idv.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_file: str = "server.log") -> None:
    """Install stream and file handlers on the root logger (idempotent)."""
    settings = get_settings()
    os.makedirs(settings.LOG_DIR, exist_ok=True)

    root = logging.getLogger()
    root.handlers.clear()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(os.path.join(settings.LOG_DIR, log_file)),
            logging.StreamHandler(),
        ],
    )
