"""
Orchestrator for a complete generation run: scaffold the Hugo site,
compose every origin into it and build it.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..models import ComposeConfig, ComposeResult
from ..services import GitService, HugoService, ThemeService
from ..infrastructure.error_handler import GeneratorError
from ..infrastructure.logger import logger
from .composer import OriginComposer



####
##      RUN STATISTICS MODEL
#####
@dataclass
class ComposeStatistics:
    """Statistics for one generation run."""

    origins: int = 0
    composed_files: int = 0
    generator_errors: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def duration_seconds(self) -> float:
        """Get total duration in seconds."""

        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0


####
##      COMPOSE ORCHESTRATOR
#####
class ComposeOrchestrator:
    """
    Runs the generation steps one after another.

    Every failure aborts the run, except generator failures when
    `fail_on_error` is off: those are logged and the run continues.
    """

    def __init__(
        self,
        config: ComposeConfig,
        git_service: GitService,
        hugo_service: HugoService,
        theme_service: ThemeService,
        fail_on_error: bool = False
    ):
        self.config = config
        self.git_service = git_service
        self.hugo_service = hugo_service
        self.theme_service = theme_service
        self.fail_on_error = fail_on_error
        self.composer = OriginComposer(config)
        self.statistics = ComposeStatistics()

    def compose(self) -> List[ComposeResult]:
        """
        Clone and compose every origin in configuration order.

        Returns:
            One ComposeResult per origin
        """
        results = []

        for origin in self.config.origins:
            with self.git_service.cloned(origin):
                result = self.composer.compose_origin(origin)

            results.append(result)
            self.statistics.origins += 1
            self.statistics.composed_files += len(result.composed_files)

        return results

    def _run_generator(self, step: str, func, *args) -> None:
        try:
            func(*args)
        except GeneratorError as e:
            if self.fail_on_error:
                raise
            self.statistics.generator_errors += 1
            logger.error(f"Hugo {step} failed, continuing: {e}")

    def run(self, menu_config_file) -> List[ComposeResult]:
        """
        Execute the complete generation run.

        Args:
            menu_config_file: Markdown file used as the site menu

        Returns:
            The per-origin compose results
        """
        self.statistics = ComposeStatistics(start_time=datetime.now())

        self.config.clean_up()

        self._run_generator("new site", self.hugo_service.new_site, self.config.hugo_working_dir)

        hugo_config = self.theme_service.create_hugo_page(self.config, Path(menu_config_file))

        results = self.compose()

        self._run_generator("build", self.hugo_service.build, self.config.hugo_working_dir, hugo_config)

        self.statistics.end_time = datetime.now()
        logger.info(
            f"Composed {self.statistics.composed_files} files from "
            f"{self.statistics.origins} origins in "
            f"{self.statistics.duration_seconds:.1f}s"
        )

        return results
