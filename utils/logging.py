"""
Central logging helpers.
Configures the root logger once and hands out module-scoped loggers.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

from config import settings

_DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_is_configured = False


def configure_logging(level: Union[int, str, None] = None, fmt: str = _DEFAULT_LOG_FORMAT) -> None:
    """Configure the root logger exactly once (level defaults to LOG_LEVEL); later calls are no-ops."""
    global _is_configured
    if _is_configured:
        return
    logging.basicConfig(level=level or settings.log_level.upper(), format=fmt)
    _is_configured = True


def get_logger(name: Optional[str] = None, level: Union[int, str, None] = None) -> logging.Logger:
    """Return a module-scoped logger, configuring logging on first use."""
    configure_logging()
    logger = logging.getLogger(name or "claims")
    if level is not None:
        logger.setLevel(level)
    return logger
