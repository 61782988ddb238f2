# lan_share/backend/app/core/logging_config.py
import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """
    Configures the root logger for the application.
    Call once at startup, before the server starts accepting connections.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
        stream=sys.stdout,
    )
    # Silence noisy libraries
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("python_multipart").setLevel(logging.WARNING)
    logging.getLogger("websockets").setLevel(logging.INFO)
