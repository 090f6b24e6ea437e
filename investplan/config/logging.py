"""
Logging configuration.

Configures loguru sinks with rotation and retention policies.
"""

from pathlib import Path

from loguru import logger

from investplan.config.settings import settings


def setup_logging() -> None:
    """Configure logger with file rotation."""
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_dir / "investplan.log",
        rotation="1 day",
        retention="7 days",
        level=settings.log_level,
        encoding="utf-8",
    )

    logger.info("Investment plan engine logging configured")
