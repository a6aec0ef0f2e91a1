"""
Configuration Errors
====================

Exceptions raised while loading property resources.

Expected absence of a *key* is never an error; the resolver returns
``MISSING`` for that. These exceptions cover absent or unreadable *resources*.
"""

from typing import Optional


class ConfigError(Exception):
    """Base class for all configuration loading errors."""


class NotFoundError(ConfigError, LookupError):
    """The resource namespace has no entry for the requested name."""

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"Resource not found: {resource}")


class MalformedFileError(ConfigError, ValueError):
    """A property resource contains a line that is not a ``key=value`` pair."""

    def __init__(self, resource: str, line_number: int, line: Optional[str] = None, reason: str = "missing '='"):
        self.resource = resource
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Malformed property file {resource}, line {line_number}: {reason}")
