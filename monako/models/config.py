"""
Configuration models for monako.

This module contains the dataclasses describing a documentation origin,
the site-wide compose configuration and the command line settings of a
single generation run.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, TYPE_CHECKING

from ..infrastructure.logger import logger

if TYPE_CHECKING:
    from .compose import OriginFile


DEFAULT_THEME_NAME = "monako-book"
DEFAULT_THEME_URL = "https://github.com/snipem/monako-book/archive/master.zip"


@dataclass
class Origin:
    """A git repository (and subdirectory of it) contributing documentation."""

    url: str
    branch: str = "master"
    source_dir: str = "."
    target_dir: str = "."
    file_whitelist: List[str] = field(default_factory=list)

    # Names of environment variables holding HTTP credentials
    env_username: Optional[str] = None
    env_password: Optional[str] = None

    # Runtime state, filled in by the cloner and the composer
    workspace: Optional[Path] = field(default=None, repr=False, compare=False)
    files: List["OriginFile"] = field(default_factory=list, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("Origin URL is required")

    @property
    def display_name(self) -> str:
        return f"{self.url}@{self.branch}:{self.source_dir}"

    def credentials(self) -> Optional[Tuple[str, str]]:
        """Resolve the configured credential variables from the environment."""

        if not self.env_username or not self.env_password:
            return None

        username = os.environ.get(self.env_username, "")
        password = os.environ.get(self.env_password, "")
        if username and password:
            return username, password

        logger.debug(
            f"Credential variables {self.env_username}/{self.env_password} "
            f"not set for {self.url}"
        )
        return None


@dataclass
class ComposeConfig:
    """Root aggregate of all origins plus the site metadata."""

    base_url: str = ""
    title: str = ""
    file_whitelist: List[str] = field(default_factory=list)
    origins: List[Origin] = field(default_factory=list)

    theme_url: str = DEFAULT_THEME_URL
    theme_name: str = DEFAULT_THEME_NAME

    target_dir: Path = field(default_factory=lambda: Path("."))

    def __post_init__(self) -> None:
        self.target_dir = Path(self.target_dir)
        for origin in self.origins:
            if not origin.file_whitelist:
                origin.file_whitelist = list(self.file_whitelist)

    @property
    def hugo_working_dir(self) -> Path:
        return self.target_dir / "compose"

    @property
    def content_working_dir(self) -> Path:
        return self.hugo_working_dir / "content"

    def set_target_dir(self, target_dir) -> None:
        self.target_dir = Path(target_dir)
        logger.debug(f"Hugo working dir is {self.hugo_working_dir}")

    def clean_up(self) -> None:
        """Remove the output of previous runs."""

        if self.hugo_working_dir.exists():
            logger.info(f"Removing previous compose dir {self.hugo_working_dir}")
            shutil.rmtree(self.hugo_working_dir)


@dataclass
class CommandLineSettings:
    """Settings for one run, as given on the command line."""

    config_file_path: str = "config.monako.yaml"
    menu_config_file_path: str = "config.menu.md"
    target_dir: str = "."
    base_url: str = ""
    trace: bool = False
    fail_on_error: bool = False


__all__ = [
    "DEFAULT_THEME_NAME",
    "DEFAULT_THEME_URL",
    "Origin",
    "ComposeConfig",
    "CommandLineSettings",
]
