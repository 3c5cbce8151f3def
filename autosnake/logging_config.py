"""Logging configuration for the autosnake package."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

logger = logging.getLogger("autosnake")


def configure_logging(level: str = "WARNING",
                      log_dir: Optional[Path] = None) -> None:
    """
    Configure the package logger.

    Logs go to stderr; with `log_dir` a timestamped file handler is added as
    well. If the log directory cannot be created, fall back to stderr only.
    """
    handlers = [logging.StreamHandler()]

    if log_dir is not None:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file = log_dir / f"simulation_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}.log"
            handlers.append(logging.FileHandler(log_file))
        except OSError as exc:
            logger.warning(
                "Failed to initialize file logging in %s: %s. Falling back to stderr logging.",
                log_dir,
                exc,
            )

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)

    logger.handlers.clear()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False

    # Suppress debug chatter from plotting backends
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
