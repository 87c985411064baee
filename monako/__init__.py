"""
monako composes documentation from several git repositories into a single
Hugo site.
"""

__version__ = "0.1.0"

from .models import CommandLineSettings, ComposeConfig, Origin
from .interfaces.api import DocsComposer

__all__ = [
    "__version__",
    "CommandLineSettings",
    "ComposeConfig",
    "Origin",
    "DocsComposer",
]
