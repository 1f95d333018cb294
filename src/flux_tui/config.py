from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

# --- Configuration ---
CONFIG_PATH = os.path.expanduser("~/.config/flux/config.json")

HTTP_TIMEOUT = 15
PAGE_SIZE = 100
TICK_INTERVAL = 1.0
INBOX_POLL_INTERVAL = 0.02
DEFAULT_THEME = "dracula"

REQUEST_HEADERS = {
    "User-Agent": "flux-tui/0.1 (+https://miniflux.app)",
    "Accept": "application/json",
}
RETRY_TOTAL = 3
RETRY_BACKOFF = 0.3
RETRY_STATUSES = [429, 500, 502, 503, 504]

DEFAULT_CONFIG: Dict[str, Any] = {
    "server_url": "",
    "api_key": "",
    "theme": DEFAULT_THEME,
    "page_size": PAGE_SIZE,
    "http_timeout": HTTP_TIMEOUT,
    "tick_interval": TICK_INTERVAL,
}

# --- Logging ---
logger = logging.getLogger("flux")


def setup_logging(debug: bool = False) -> Optional[str]:
    """Configure logging."""
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    pid = os.getpid()
    debug_path = f"/tmp/flux_debug_{ts}_{pid}.log"

    logging.basicConfig(
        level=logging.DEBUG,
        filename=debug_path,
        filemode="a",
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def ensure_config_file_exists(path: str = CONFIG_PATH) -> None:
    """Write a default config file if the user's config file is not found."""
    if not os.path.exists(path):
        logger.info("Config file not found at %s, creating default.", path)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "w") as f:
                json.dump(DEFAULT_CONFIG, f, indent=2)
        except (IOError, OSError) as e:
            logger.error("Failed to create default config file: %s", e)


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    """Load the main configuration file, filling in defaults for missing keys."""
    ensure_config_file_exists(path)
    config = dict(DEFAULT_CONFIG)
    try:
        with open(path, "r") as f:
            config.update(json.load(f))
            logger.info("Loaded config from %s", path)
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """Return the problems that prevent the client from connecting."""
    problems = []
    if not config.get("server_url"):
        problems.append("'server_url' is not set")
    if not config.get("api_key"):
        problems.append("'api_key' is not set")
    for key in ("page_size", "http_timeout", "tick_interval"):
        value = config.get(key)
        if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
            problems.append(f"'{key}' must be a positive number")
    return problems
