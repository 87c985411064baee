"""
Command line interface for monako.
"""

import argparse
from typing import List, Optional

from .. import __version__
from ..models import CommandLineSettings
from ..infrastructure.error_handler import MonakoError
from ..infrastructure.logger import configure_logging, logger
from .api import DocsComposer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monako",
        description="Compose documentation from several git repositories into one Hugo site",
    )
    parser.add_argument("--config", default="config.monako.yaml", help="Configuration file")
    parser.add_argument("--menu-config", default="config.menu.md", help="Menu file for monako-book theme")
    parser.add_argument("--target-dir", default=".", help="Target dir for composed site")
    parser.add_argument("--base-url", default="", help="Custom base URL")
    parser.add_argument("--trace", action="store_true", help="Enable trace logging")
    parser.add_argument("--fail-on-error", action="store_true", help="Fail on document conversion errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_settings(argv: Optional[List[str]] = None) -> CommandLineSettings:
    args = build_parser().parse_args(argv)
    return CommandLineSettings(
        config_file_path=args.config,
        menu_config_file_path=args.menu_config,
        target_dir=args.target_dir,
        base_url=args.base_url,
        trace=args.trace,
        fail_on_error=args.fail_on_error,
    )


def main(argv: Optional[List[str]] = None) -> int:
    settings = parse_settings(argv)
    configure_logging(trace=settings.trace)

    try:
        DocsComposer(settings).run()
    except MonakoError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
