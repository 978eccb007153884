"""
Logging setup.

Configures loguru sinks for processes embedding the incentive engine.
"""

import sys

from loguru import logger

from incentives.config.settings import Settings


def setup_logging(config: Settings) -> None:
    """
    Configure logger sinks.

    Replaces the default handler with a stderr sink at the configured level
    and, when ``log_file`` is set, adds a file sink with daily rotation.

    Args:
        config: Application settings
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=config.log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        backtrace=config.debug,
        diagnose=config.debug,
    )

    if config.log_file:
        logger.add(
            config.log_file,
            rotation="1 day",
            retention="7 days",
            level=config.log_level,
            encoding="utf-8",
        )

    logger.info(
        f"Incentive engine logging ready | environment={config.environment} "
        f"| level={config.log_level}"
    )
