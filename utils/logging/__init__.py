"""
Logging utilities for application monitoring.

Provides structured logging configuration and event helpers.
"""

from .logging_utils import (
    CustomJSONFormatter,
    setup_logging,
    log_event
)

__all__ = [
    # Logging configuration
    'CustomJSONFormatter',
    'setup_logging',

    # Logging functions
    'log_event'
]

# Initialize package logger
import logging
logging.getLogger(__name__).addHandler(logging.NullHandler())
