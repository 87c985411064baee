"""
Error types and error translation helpers for monako.

Every failure is fatal for the run except generator failures, which the
orchestrator may log and ignore.
"""

import functools
from typing import Callable, Optional, TypeVar

from .logger import logger


T = TypeVar("T")


class MonakoError(Exception):
    """Base exception for all monako failures."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(message)

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message} (Original: {self.original_error})"
        return self.message


class ConfigError(MonakoError):
    """Raised when the configuration file or a setting is invalid."""


class CloneError(MonakoError):
    """Raised when an origin repository cannot be cloned."""


class ComposeError(MonakoError):
    """Raised when reading from a snapshot or writing the compose tree fails."""


class GeneratorError(MonakoError):
    """Raised when the external site generator fails."""


def handle_io_error(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator translating filesystem errors into ComposeError.

    MonakoError subclasses raised by the wrapped function pass through
    untouched.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except MonakoError:
            raise
        except OSError as e:
            target = e.filename or "unknown path"
            logger.debug(f"I/O error in {func.__name__}: {e}")
            raise ComposeError(f"I/O error on '{target}'", e) from e

    return wrapper


__all__ = [
    "MonakoError",
    "ConfigError",
    "CloneError",
    "ComposeError",
    "GeneratorError",
    "handle_io_error",
]
