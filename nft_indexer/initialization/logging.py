"""
Indexer Initialization - Logging Module.

Configures loguru logger for the indexer.
Sets up log rotation and retention policies.
"""

import sys

from loguru import logger

from nft_indexer.config.settings import settings


def setup_logging() -> None:
    """Configure stderr sink and optional file sink with rotation."""
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)

    if settings.log_file:
        logger.add(
            settings.log_file,
            rotation="1 day",
            retention="7 days",
            level=settings.log_level,
            encoding="utf-8",
        )

    logger.info("Starting NFT indexer...")
