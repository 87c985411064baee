"""
Invocation of the external Hugo site generator.
"""

import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..infrastructure.error_handler import GeneratorError
from ..infrastructure.logger import logger


class HugoService:
    """
    Runs the `hugo` binary.

    The environment is passed explicitly to every invocation, which is how
    the asciidoctor shim ends up first on Hugo's PATH.
    """

    def __init__(self, binary: str = "hugo", env: Optional[Dict[str, str]] = None):
        self.binary = binary
        self.env = env

    def run(self, args: Sequence[str]) -> str:
        """
        Run hugo with the given arguments and return its standard output.

        Raises:
            GeneratorError: If hugo is missing or exits non-zero
        """
        command: List[str] = [self.binary, *args]
        logger.debug(f"Running {' '.join(command)}")

        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                env=self.env,
            )
        except FileNotFoundError as e:
            raise GeneratorError(f"Hugo binary '{self.binary}' not found", e) from e

        if completed.stdout.strip():
            logger.debug(completed.stdout.strip())
        if completed.stderr.strip():
            logger.warning(completed.stderr.strip())

        if completed.returncode != 0:
            raise GeneratorError(
                f"Hugo exited with code {completed.returncode}: {' '.join(command)}"
            )

        return completed.stdout

    def new_site(self, path: Path) -> str:
        return self.run(["--quiet", "new", "site", str(path)])

    def build(self, source: Path, config_file: Optional[Path] = None) -> str:
        args = ["--source", str(source)]
        if config_file is not None:
            args += ["--config", str(Path(config_file).resolve())]
        return self.run(args)


__all__ = ["HugoService"]
