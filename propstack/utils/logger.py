"""
Logging Utilities
=================

Centralized logging configuration for propstack and its callers.
"""

import logging
import logging.handlers
import os
import sys
from typing import Optional

from ..config.resolver import MISSING, ConfigResolver


def setup_logging(
    config: Optional[ConfigResolver] = None,
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_file_size: str = "10MB",
    backup_count: int = 5
) -> logging.Logger:
    """
    Set up centralized logging configuration.

    Args:
        config: Resolver to read ``logging.*`` keys from
        log_level: Logging level
        log_file: Log file path
        max_file_size: Maximum log file size
        backup_count: Number of backup files to keep

    Returns:
        Configured logger
    """
    if config is not None:
        log_level = config.get_string('logging.level', log_level)
        log_file = config.get_string('logging.file', log_file)
        max_file_size = config.get_string('logging.max_file_size', max_file_size)
        backup_count = config.get_int('logging.backup_count', backup_count)

    # Convert log level string to logging constant
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    # Create logs directory if it doesn't exist
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        size_bytes = _parse_size(max_file_size)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=size_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    app_logger = logging.getLogger('propstack')
    app_logger.debug(f"Logging initialized - Level: {log_level}, File: {log_file}")

    return app_logger

def _parse_size(size_str: str) -> int:
    """
    Parse size string to bytes.

    Args:
        size_str: Size string (e.g., '10MB', '1GB')

    Returns:
        Size in bytes
    """
    size_str = size_str.upper().strip()

    if size_str.endswith('KB'):
        return int(float(size_str[:-2]) * 1024)
    elif size_str.endswith('MB'):
        return int(float(size_str[:-2]) * 1024 * 1024)
    elif size_str.endswith('GB'):
        return int(float(size_str[:-2]) * 1024 * 1024 * 1024)
    else:
        # Assume bytes
        return int(size_str)

def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name."""
    return logging.getLogger(name)

class ResolutionLogger:
    """
    Structured one-line log records for configuration resolution.

    Values pass through the resolver's display masking, so sensitive
    values never reach a log handler.
    """

    def __init__(self, resolver: ConfigResolver, name: str = "propstack.resolution"):
        self.resolver = resolver
        self.logger = get_logger(name)
        self.name = name

    def log_resolution(self, key: str, level: str = "INFO"):
        """
        Log where a key's effective value came from.

        Args:
            key: Configuration key
            level: Log level
        """
        resolved = self.resolver.get(key)
        if resolved is MISSING:
            message = f"MISSING - Key: {key}"
        else:
            message = (
                f"RESOLVED - Key: {key}, Source: {resolved.source}, "
                f"Value: {self.resolver.get_display_value(key)}"
            )
        getattr(self.logger, level.lower())(message)

    def log_profile(self, level: str = "INFO"):
        summary = self.resolver.profile_configuration()
        message = (
            f"PROFILE - Environment: {summary.environment}, Log Level: {summary.log_level}, "
            f"Debug: {summary.debug_enabled}, Metrics: {summary.metrics_enabled}, "
            f"Cache: {summary.cache_enabled}, Strict Security: {summary.security_strict}"
        )
        getattr(self.logger, level.lower())(message)

    def log_sources(self, level: str = "DEBUG"):
        """Log each source in precedence order with its key count."""
        for source in self.resolver.registry:
            getattr(self.logger, level.lower())(
                f"SOURCE - Priority: {source.priority}, Name: {source.name}, Keys: {len(source.properties)}"
            )

class LoggingContext:
    """
    Context manager for temporary logging configuration.
    """

    def __init__(self, logger: logging.Logger, level: int):
        self.logger = logger
        self.new_level = level
        self.old_level = logger.level

    def __enter__(self):
        """Enter context - set new log level."""
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context - restore old log level."""
        self.logger.setLevel(self.old_level)

def with_debug_logging(logger: logging.Logger):
    """Context manager for temporary debug logging."""
    return LoggingContext(logger, logging.DEBUG)

def with_quiet_logging(logger: logging.Logger):
    """Context manager for temporary quiet logging."""
    return LoggingContext(logger, logging.WARNING)
