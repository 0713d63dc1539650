"""Loguru sink configuration."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from gymnarium.configs import LoggingConfig

TEXT_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(config: LoggingConfig, sink=sys.stderr) -> int:
    """Replace all loguru sinks with a single one described by ``config``.

    Returns:
        The id of the new sink, usable with ``logger.remove``.
    """
    logger.remove()
    if config.log_format == "json":
        return logger.add(sink, level=config.log_level, serialize=True)
    return logger.add(
        sink,
        level=config.log_level,
        format=TEXT_FORMAT,
        colorize=config.colorize,
    )
