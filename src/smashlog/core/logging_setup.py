"""
Logging configuration for smashlog.

Sets up standard library logging from a LoggingConfig.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler

from smashlog.core.config import LoggingConfig


def setup_logging(config: LoggingConfig | None = None, verbose: bool = False) -> None:
    """
    Configure root logging.

    Args:
        config: Logging section of the configuration (defaults if None)
        verbose: If True, log at DEBUG regardless of the configured level
    """
    config = config or LoggingConfig()
    level = logging.DEBUG if verbose else getattr(logging, str(config.level).upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(
            RotatingFileHandler(
                config.file,
                maxBytes=config.file_max_bytes,
                backupCount=config.file_backup_count,
                encoding="utf-8",
            )
        )

    logging.basicConfig(level=level, format=config.format, handlers=handlers, force=True)
