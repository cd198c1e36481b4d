"""Engine error types."""

from __future__ import annotations

from typing import Any, Optional


class EngineError(Exception):
    """Base class for errors raised by the analytics engine."""


class ValidationError(EngineError, ValueError):
    """A malformed activity record was supplied."""

    def __init__(self, message: str, index: Optional[int] = None, record: Any = None):
        super().__init__(message)
        self.index = index
        self.record = record


class ConfigError(EngineError, ValueError):
    """An analyzer option is out of range."""
