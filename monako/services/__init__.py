from .git import GitService
from .hugo import HugoService
from .theme import ThemeService
from .asciidoctor import AsciidoctorShim

__all__ = [
    "GitService",
    "HugoService",
    "ThemeService",
    "AsciidoctorShim",
]
