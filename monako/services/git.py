"""
Shallow cloning of origin repositories with the `git` binary.
"""

import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Tuple
from urllib.parse import quote, urlsplit, urlunsplit

from ..models import Origin
from ..infrastructure.error_handler import CloneError
from ..infrastructure.logger import logger


def _with_credentials(url: str, credentials: Optional[Tuple[str, str]]) -> str:
    """Embed basic auth credentials into an http(s) URL."""

    if not credentials:
        return url

    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        logger.warning(f"Ignoring credentials for non-HTTP origin {url}")
        return url

    username, password = credentials
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    netloc = f"{quote(username, safe='')}:{quote(password, safe='')}@{host}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


class GitService:
    """Thin wrapper around `git clone` for origins."""

    def __init__(self, git_binary: str = "git"):
        self.git_binary = git_binary

    def clone_command(self, origin: Origin, destination: Path) -> List[str]:
        return [
            self.git_binary, "clone",
            "--quiet",
            "--depth", "1",
            "--single-branch",
            "--branch", origin.branch,
            _with_credentials(origin.url, origin.credentials()),
            str(destination),
        ]

    def clone(self, origin: Origin, destination: Path) -> Path:
        """
        Shallow clone a single branch of an origin.

        Args:
            origin: Origin to clone
            destination: Empty or non-existing directory for the snapshot

        Returns:
            The destination path

        Raises:
            CloneError: If git is missing or the clone fails
        """
        logger.info(f"Cloning {origin.url} with branch {origin.branch}")
        if origin.credentials():
            logger.info("Using username and password")

        try:
            completed = subprocess.run(
                self.clone_command(origin, destination),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as e:
            raise CloneError(f"git binary '{self.git_binary}' not found", e) from e

        if completed.returncode != 0:
            detail = completed.stderr.strip() or f"exit code {completed.returncode}"
            raise CloneError(f"Cloning {origin.url} (branch '{origin.branch}') failed: {detail}")

        return destination

    @contextmanager
    def cloned(self, origin: Origin) -> Iterator[Path]:
        """Clone into a temporary snapshot that is removed afterwards."""

        tempdir = Path(tempfile.mkdtemp(prefix="monako_"))
        try:
            origin.workspace = self.clone(origin, tempdir / "repo")
            yield origin.workspace
        finally:
            origin.workspace = None
            shutil.rmtree(tempdir, ignore_errors=True)


__all__ = ["GitService"]
