"""
Core data models API surface for monako.

Re-exports the model classes so they can be imported as
`from monako.models import X`.
"""

from .config import (
    DEFAULT_THEME_NAME,
    DEFAULT_THEME_URL,
    Origin,
    ComposeConfig,
    CommandLineSettings,
)
from .compose import (
    ContentFormat,
    ComposeStatus,
    FilterCriteria,
    OriginFile,
    ComposeResult,
)

__all__ = [
    # Config models
    "DEFAULT_THEME_NAME",
    "DEFAULT_THEME_URL",
    "Origin",
    "ComposeConfig",
    "CommandLineSettings",
    # Compose models
    "ContentFormat",
    "ComposeStatus",
    "FilterCriteria",
    "OriginFile",
    "ComposeResult",
]
