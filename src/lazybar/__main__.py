#!/usr/bin/env python3
"""
lazybar - Demo Entry Point

Runs the console estimation demo. An optional first argument names a JSON
configuration file; otherwise ``~/.config/lazybar/config.json`` is used when
it exists.
"""

import asyncio
import sys
from pathlib import Path

from loguru import logger

from .config import ScrollbarConfig
from .demo import run_demo
from .errors import ConfigurationError
from .utils.logging import setup_logging

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "lazybar" / "config.json"


def main(argv=None):
    """Main entry point for the lazybar demo."""
    args = sys.argv[1:] if argv is None else argv
    config_path = Path(args[0]) if args else DEFAULT_CONFIG_PATH

    try:
        config = ScrollbarConfig.load(config_path)
    except ConfigurationError as e:
        setup_logging("INFO")
        logger.error(f"Fatal error loading configuration: {e}")
        return 1

    setup_logging(config.log_level)
    try:
        asyncio.run(run_demo())
        return 0
    except KeyboardInterrupt:
        logger.info("Demo stopped by user")
        return 0


if __name__ == "__main__":
    sys.exit(main())
