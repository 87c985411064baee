"""
Wrapper script placed in front of the real asciidoctor binary.

Hugo calls `asciidoctor` without a way to pass extra options. The wrapper
enables asciidoctor-diagram and moves the rendered diagrams into the
published site, rewriting their image sources to match.
"""

import os
import stat
import tempfile
from pathlib import Path
from typing import Dict, Mapping, Optional
from urllib.parse import urlsplit

from ..infrastructure.error_handler import ConfigError, handle_io_error
from ..infrastructure.logger import logger


SHIM_DIRECTORY_NAME = "asciidoctor_fake_binary"

SHIM_TEMPLATE = """#!/bin/bash
if [ -f /usr/local/bin/asciidoctor ]; then
  ad="/usr/local/bin/asciidoctor"
else
  ad="/usr/bin/asciidoctor"
fi

# asciidoctor needs a stylesheet, an empty one keeps Hugo's styling
echo "" > empty.css

$ad -B . \\
  -r asciidoctor-diagram \\
  -a nofooter \\
  -a stylesheet=empty.css \\
  --safe \\
  --trace \\
  - | sed -E -e "s/img src=\\"([^/]+)\\"/img src=\\"{diagram_path}\\/diagram\\/\\1\\"/"

mkdir -p "{diagram_dir}"

if ls *.svg >/dev/null 2>&1; then
  mv -f *.svg "{diagram_dir}"
fi

if ls *.png >/dev/null 2>&1; then
  mv -f *.png "{diagram_dir}"
fi
"""


def diagram_url_path(base_url: str) -> str:
    """Return the URL path of the site, escaped for use in a sed pattern."""

    try:
        path = urlsplit(base_url).path
    except ValueError as e:
        raise ConfigError(f"Invalid base URL '{base_url}'", e) from e

    # A lone slash would produce "//diagram", which some web servers reject
    if path == "/":
        path = ""
    return path.rstrip("/").replace("/", "\\/")


class AsciidoctorShim:
    """Installs the asciidoctor wrapper and exposes the matching environment."""

    def __init__(self, base_url: str, hugo_working_dir: Path, directory: Optional[Path] = None):
        self.base_url = base_url
        self.hugo_working_dir = Path(hugo_working_dir)
        self.directory = Path(directory) if directory else Path(tempfile.gettempdir()) / SHIM_DIRECTORY_NAME

    @property
    def binary(self) -> Path:
        return self.directory / "asciidoctor"

    def render(self) -> str:
        diagram_dir = (self.hugo_working_dir / "public" / "diagram").resolve()
        return SHIM_TEMPLATE.format(
            diagram_path=diagram_url_path(self.base_url),
            diagram_dir=diagram_dir,
        )

    @handle_io_error
    def install(self) -> Path:
        """Write the wrapper script and return its path."""

        self.directory.mkdir(mode=0o700, parents=True, exist_ok=True)
        self.binary.write_text(self.render(), encoding="utf-8")
        self.binary.chmod(stat.S_IRWXU)

        logger.debug(f"Installed asciidoctor wrapper {self.binary}")
        return self.binary

    def environment(self, base_env: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Copy of the environment with the wrapper directory first on PATH."""

        env = dict(os.environ if base_env is None else base_env)
        current = env.get("PATH", "")
        env["PATH"] = f"{self.directory}{os.pathsep}{current}" if current else str(self.directory)
        return env


__all__ = ["AsciidoctorShim", "diagram_url_path"]
