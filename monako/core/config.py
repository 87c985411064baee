"""
Loading of the monako YAML configuration file.
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml

from ..models import ComposeConfig, CommandLineSettings, Origin
from ..models.config import DEFAULT_THEME_NAME, DEFAULT_THEME_URL
from ..infrastructure.error_handler import ConfigError
from ..infrastructure.logger import logger


def _as_whitelist(value: Any, where: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(f"'whitelist' of {where} must be a list of suffixes")
    return [str(suffix) for suffix in value]


def _parse_origin(raw: Dict[str, Any], index: int) -> Origin:
    if not isinstance(raw, dict):
        raise ConfigError(f"Origin #{index} must be a mapping")

    src = raw.get("src")
    if not src:
        raise ConfigError(f"Origin #{index} has no 'src'")

    return Origin(
        url=str(src),
        branch=str(raw.get("branch") or "master"),
        source_dir=str(raw.get("docdir") or "."),
        target_dir=str(raw.get("targetdir") or "."),
        file_whitelist=_as_whitelist(raw.get("whitelist"), f"origin '{src}'"),
        env_username=raw.get("envusername"),
        env_password=raw.get("envpassword"),
    )


def parse_config(data: Any) -> ComposeConfig:
    """Build a ComposeConfig from an already parsed YAML document."""

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a YAML mapping")

    raw_origins = data.get("origins")
    if not raw_origins or not isinstance(raw_origins, list):
        raise ConfigError("Configuration declares no 'origins'")

    theme_url = data.get("theme", DEFAULT_THEME_URL)

    return ComposeConfig(
        base_url=str(data.get("baseURL") or ""),
        title=str(data.get("title") or ""),
        file_whitelist=_as_whitelist(data.get("whitelist"), "the configuration"),
        origins=[_parse_origin(raw, i) for i, raw in enumerate(raw_origins)],
        theme_url=str(theme_url) if theme_url else "",
        theme_name=str(data.get("themeName") or DEFAULT_THEME_NAME),
    )


def load_config(path) -> ComposeConfig:
    """
    Read and validate a configuration file.

    Args:
        path: Path of the YAML configuration file

    Returns:
        ComposeConfig with every origin's whitelist resolved

    Raises:
        ConfigError: If the file is missing or malformed
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file '{path}'", e) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in '{path}'", e) from e

    config = parse_config(data)
    logger.debug(f"Loaded {len(config.origins)} origins from {path}")
    return config


def init_config(settings: CommandLineSettings) -> ComposeConfig:
    """Load the configuration and apply the command line overrides."""

    config = load_config(settings.config_file_path)

    if settings.base_url:
        logger.debug(f"Overriding base URL with {settings.base_url}")
        config.base_url = settings.base_url

    config.set_target_dir(settings.target_dir)
    return config


__all__ = ["parse_config", "load_config", "init_config"]
