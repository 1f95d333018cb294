#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .app import FluxApp
from .client import MinifluxClient
from .config import CONFIG_PATH, load_config, setup_logging, validate_config

logger = logging.getLogger("flux")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Miniflux terminal client")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--config",
        default=CONFIG_PATH,
        help=f"Path to the config file (default: {CONFIG_PATH})",
    )
    parser.add_argument("--theme", type=str, help="Set theme for this run")
    args = parser.parse_args(argv)

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    config = load_config(args.config)
    problems = validate_config(config)
    if problems:
        print(f"Cannot start, please fix {args.config}:", file=sys.stderr)
        for problem in problems:
            print(f"  - {problem}", file=sys.stderr)
        sys.exit(1)

    client = MinifluxClient(
        config["server_url"], config["api_key"], timeout=config["http_timeout"]
    )
    logger.info("Connecting to %s", client.base_url)

    try:
        app = FluxApp(client, config=config, theme=args.theme)
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
