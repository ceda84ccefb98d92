"""
Exceptions raised by the connection string builders and profile loader.
"""
from typing import Any, Dict, Optional


class ConnStringError(Exception):
    """Base exception; ``details`` carries structured context for logging."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ValidationError(ConnStringError):
    """A builder argument has the wrong type or is out of range."""


class ConfigurationError(ConnStringError):
    """A profiles file is unreadable or does not validate."""
