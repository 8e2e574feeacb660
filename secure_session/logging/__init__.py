"""
Logging Package
Session logging with redaction of secrets and session ids

Every module logs through ``getLogger(__name__)`` so records propagate to
the ``secure_session`` logger configured by LoggerConfig.
"""
import logging
from typing import Optional

from secure_session.logging.logger_config import (
    LoggerConfig,
    JSONFormatter,
    SensitiveDataFilter,
    mask_session_id,
)

__all__ = [
    'LoggerConfig',
    'JSONFormatter',
    'SensitiveDataFilter',
    'mask_session_id',
    'getLogger',
    'ROOT_LOGGER_NAME',
]

ROOT_LOGGER_NAME = 'secure_session'


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger in the secure_session tree

    Dotted module names are kept as-is; None and bare names are folded
    into the package logger.

    Example:
        logger = getLogger(__name__)
        logger.warning("Session id regenerated", extra={'reason': 'fixation'})
    """
    if name is None or '.' not in name:
        name = ROOT_LOGGER_NAME
    return logging.getLogger(name)
