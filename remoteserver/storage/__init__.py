"""
Logging setup.
"""

from remoteserver.storage.logger import setup_logging

__all__ = [
    "setup_logging",
]
