import sys
from pathlib import Path

from loguru import logger


def setup_logger(log_dir: str | None = "logs", level: str = "INFO"):
    logger.remove()
    logger.add(sys.stderr, level=level)
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        logger.add(Path(log_dir) / "goldquote.log", rotation="10 MB", level=level)
    return logger
