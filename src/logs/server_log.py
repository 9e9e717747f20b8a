import logging
import sys
from pathlib import Path

from src.core import get_settings

# Log files live next to this module
log_dir = Path(__file__).parent
log_dir.mkdir(exist_ok=True)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Request log: one line per handled request, to file and stdout"""
    logger = logging.getLogger("api_logger")
    logger.setLevel(level)
    logger.propagate = False

    # Re-importing the module must not stack handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

    file_handler = logging.FileHandler(log_dir / "api_requests.log", encoding="utf-8")
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


api_logger = setup_logging(get_settings().LOG_LEVEL)
