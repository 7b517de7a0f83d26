"""
Logging configuration using loguru.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def setup_logging(log_dir: Optional[Path] = None, verbose: bool = False):
    """
    Setup application logging.

    Args:
        log_dir: Directory for the log file; no file sink when None
        verbose: Enable debug output on the console

    Returns:
        Configured logger instance
    """
    # Remove default handler
    logger.remove()
    logger.enable("remoteserver")

    # Console handler
    log_level = "DEBUG" if verbose else "WARNING"
    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
    )

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "remoteserver.log"
        logger.add(
            log_file,
            rotation="10 MB",
            retention="30 days",
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
        )
        logger.debug(f"Log file: {log_file}")

    return logger
