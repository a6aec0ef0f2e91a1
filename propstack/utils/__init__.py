"""
Utilities Module
================

Contains logging helpers.
"""

from .logger import setup_logging, get_logger, ResolutionLogger, LoggingContext, with_debug_logging, with_quiet_logging

__all__ = [
    'setup_logging',
    'get_logger',
    'ResolutionLogger',
    'LoggingContext',
    'with_debug_logging',
    'with_quiet_logging',
]
