"""
Python API for running monako programmatically.
"""

import logging
import sys
from typing import List, Optional

from ..models import CommandLineSettings, ComposeConfig, ComposeResult
from ..core.config import init_config
from ..core.orchestrator import ComposeOrchestrator
from ..services import AsciidoctorShim, GitService, HugoService, ThemeService
from ..infrastructure.logger import logger


class DocsComposer:
    """
    High-level entry point wiring configuration, services and orchestrator.

    Usage:
        composer = DocsComposer(CommandLineSettings(config_file_path="config.monako.yaml"))
        composer.run()
    """

    def __init__(
        self,
        settings: CommandLineSettings,
        config: Optional[ComposeConfig] = None,
        verbose: Optional[bool] = None,
        hugo_binary: str = "hugo",
        git_binary: str = "git",
    ):
        self.settings = settings
        self.verbose = settings.trace if verbose is None else verbose
        self.set_verbose(self.verbose)

        self.config = config or init_config(settings)

        self.git_service = GitService(git_binary)
        self.hugo_service = HugoService(hugo_binary, env=self._generator_environment())
        self.theme_service = ThemeService()

        self.orchestrator = ComposeOrchestrator(
            self.config,
            self.git_service,
            self.hugo_service,
            self.theme_service,
            fail_on_error=settings.fail_on_error,
        )

    def _generator_environment(self):
        if sys.platform.startswith("win"):
            logger.info("Can't apply asciidoc diagram workaround on windows")
            return None

        shim = AsciidoctorShim(self.config.base_url, self.config.hugo_working_dir)
        shim.install()
        return shim.environment()

    def set_verbose(self, verbose: bool) -> None:
        """Switch the package logger between DEBUG and INFO."""

        self.verbose = verbose
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    def run(self) -> List[ComposeResult]:
        try:
            return self.orchestrator.run(self.settings.menu_config_file_path)
        finally:
            self.theme_service.close()


__all__ = ["DocsComposer"]
