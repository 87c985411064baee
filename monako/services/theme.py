"""
Scaffolding of the Hugo page: menu, site configuration and theme.
"""

import io
import shutil
import zipfile
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Optional

import httpx
import yaml

from ..models import ComposeConfig
from ..infrastructure.error_handler import ConfigError, GeneratorError, handle_io_error
from ..infrastructure.logger import logger


HUGO_CONFIG_FILE = "config.monako.yaml"
MENU_BUNDLE = "menu"


def hugo_site_config(config: ComposeConfig) -> Dict[str, Any]:
    """Hugo configuration for the composed site."""

    return {
        "baseURL": config.base_url,
        "title": config.title,
        "theme": config.theme_name,
        "disablePathToLower": True,
        "markup": {
            "goldmark": {"renderer": {"unsafe": True}},
            "asciidocExt": {
                "extensions": ["asciidoctor-diagram"],
                "workingFolderCurrent": True,
            },
        },
        "params": {
            "BookMenuBundle": f"/{MENU_BUNDLE}",
            "BookSection": "/",
        },
    }


class ThemeService:
    """Creates everything Hugo needs besides the composed content."""

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = 60.0):
        self._owns_client = client is None
        self.client = client or httpx.Client(follow_redirects=True, timeout=timeout)

    def close(self) -> None:
        """Close the HTTP client if this service created it."""

        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "ThemeService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def create_hugo_page(self, config: ComposeConfig, menu_config_file) -> Path:
        """
        Write the menu and the site config and install the theme.

        Returns:
            Path of the written Hugo configuration file
        """
        self.copy_menu(config, Path(menu_config_file))
        config_file = self.write_hugo_config(config)

        if config.theme_url:
            self.install_theme(config)
        else:
            logger.info("No theme URL configured, skipping theme download")

        return config_file

    @handle_io_error
    def copy_menu(self, config: ComposeConfig, menu_config_file: Path) -> Path:
        if not menu_config_file.is_file():
            raise ConfigError(f"Menu file '{menu_config_file}' not found")

        menu_dir = config.content_working_dir / MENU_BUNDLE
        menu_dir.mkdir(parents=True, exist_ok=True)
        target = menu_dir / "index.md"
        shutil.copyfile(menu_config_file, target)

        logger.debug(f"Copied menu {menu_config_file} -> {target}")
        return target

    @handle_io_error
    def write_hugo_config(self, config: ComposeConfig) -> Path:
        config.hugo_working_dir.mkdir(parents=True, exist_ok=True)
        target = config.hugo_working_dir / HUGO_CONFIG_FILE
        with target.open("w", encoding="utf-8") as f:
            yaml.safe_dump(hugo_site_config(config), f, default_flow_style=False, sort_keys=False)
        return target

    def download_theme(self, url: str) -> bytes:
        logger.info(f"Downloading theme from {url}")
        try:
            response = self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise GeneratorError(f"Downloading theme from {url} failed", e) from e
        return response.content

    @handle_io_error
    def install_theme(self, config: ComposeConfig) -> Path:
        """Extract the theme archive into `themes/<theme_name>`."""

        theme_dir = config.hugo_working_dir / "themes" / config.theme_name
        archive = self.download_theme(config.theme_url)

        try:
            with zipfile.ZipFile(io.BytesIO(archive)) as zf:
                extract_archive(zf, theme_dir)
        except zipfile.BadZipFile as e:
            raise GeneratorError(f"Theme archive from {config.theme_url} is not a zip file", e) from e

        logger.debug(f"Installed theme {config.theme_name} into {theme_dir}")
        return theme_dir


def extract_archive(zf: zipfile.ZipFile, destination: Path) -> None:
    """
    Extract a zip archive, dropping its single top-level folder if present.

    GitHub branch archives wrap everything in `<repo>-<branch>/`.
    """
    entries = [(PurePosixPath(info.filename), info) for info in zf.infolist()]
    roots = {name.parts[0] for name, _ in entries if name.parts}
    strip = len(roots) == 1 and all(len(name.parts) > 1 or info.is_dir() for name, info in entries)

    destination.mkdir(parents=True, exist_ok=True)
    base = destination.resolve()

    for name, info in entries:
        parts = name.parts[1:] if strip else name.parts
        if not parts or info.is_dir():
            continue

        target = (base / Path(*parts)).resolve()
        if base not in target.parents:
            raise GeneratorError(f"Theme archive entry escapes the theme dir: {info.filename}")

        target.parent.mkdir(parents=True, exist_ok=True)
        with zf.open(info) as src, open(target, "wb") as dst:
            shutil.copyfileobj(src, dst)


__all__ = ["HUGO_CONFIG_FILE", "hugo_site_config", "ThemeService", "extract_archive"]
