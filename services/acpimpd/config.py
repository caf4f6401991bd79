# acpi-mpd
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""
Optional configuration loader for the acpi-mpd service.

Loads a single JSON config file.  Search order:
  1. /etc/acpi-mpd/config.json     (system-wide install)
  2. config.json                    (CWD — handy for local dev)
  3. ../../config/default.json      (repo fallback)

Nothing is required: every value has a built-in default and command-line
flags take precedence over anything read here.

Usage:
    from acpimpd.config import cfg

    acpid_socket = cfg("acpid", "socket", default="/var/run/acpid.socket")
    mpd_timeout  = cfg("mpd", "timeout", default=10)
    level        = cfg("log_level", default="INFO")
"""

import json
import logging
import os

logger = logging.getLogger(__name__)

_config: dict | None = None

_SEARCH_PATHS = [
    "/etc/acpi-mpd/config.json",
    "config.json",
    os.path.join(os.path.dirname(__file__), "..", "..", "config", "default.json"),
]

# (section, key) pairs that must be positive integers when present
_POSITIVE_INTS = [
    ("acpid", "max_event_size"),
    ("acpid", "max_address_len"),
    ("mpd", "port"),
    ("mpd", "retries"),
]


def _section(config: dict, name: str) -> dict:
    val = config.get(name)
    return val if isinstance(val, dict) else {}


def _validate(config: dict, path: str) -> None:
    """Warn about missing or suspicious config values."""
    for name in ("acpid", "mpd", "watchdog"):
        if name in config and not isinstance(config[name], dict):
            logger.warning("Config %s: '%s' should be an object, got %r", path, name, config[name])
    for section, key in _POSITIVE_INTS:
        val = _section(config, section).get(key)
        if val is None:
            continue
        if not isinstance(val, int) or isinstance(val, bool) or val <= 0:
            logger.warning("Config %s: %s.%s should be a positive integer, got %r",
                           path, section, key, val)
    timeout = _section(config, "mpd").get("timeout")
    if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
        logger.warning("Config %s: mpd.timeout should be a positive number of seconds, got %r",
                       path, timeout)
    level = config.get("log_level")
    if level is not None and str(level).upper() not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        logger.warning("Config %s: unknown log_level '%s'", path, level)


def load_config() -> dict:
    """Load config from the first JSON file found. Cached after first call."""
    global _config
    if _config is not None:
        return _config

    for path in _SEARCH_PATHS:
        try:
            with open(path) as f:
                loaded = json.load(f)
        except FileNotFoundError:
            continue
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in %s: %s", path, e)
            continue

        if not isinstance(loaded, dict):
            logger.error("Config %s: top level must be a JSON object, got %s",
                         path, type(loaded).__name__)
            continue
        logger.info("Config loaded from %s", path)
        _validate(loaded, path)
        _config = loaded
        return _config

    logger.warning("No config.json found — using built-in defaults")
    _config = {}
    return _config


def cfg(section: str, key: str | None = None, *, default=None):
    """Read a config value.

    cfg("log_level")                → config["log_level"]
    cfg("mpd", "host")              → config["mpd"]["host"]
    cfg("mpd", "retries", default=3)  → config["mpd"]["retries"] or 3
    """
    config = load_config()
    val = config.get(section)
    if key is None:
        return val if val is not None else default
    if isinstance(val, dict):
        found = val.get(key)
        return found if found is not None else default
    return default


def reload_config():
    """Force re-read from disk (for testing or hot-reload)."""
    global _config
    _config = None
    return load_config()
