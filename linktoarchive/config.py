"""Configuration management for linktoarchive."""

import copy
import json
import os
from pathlib import Path
from typing import Any

# Application name for XDG paths
APP_NAME = "linktoarchive"

# Default configuration
DEFAULT_CONFIG: dict[str, Any] = {
    "links": {
        "default_rel": "noopener noreferrer",
        "default_target": "_blank",
        "web_archive_prefix": "https://web.archive.org/web/",
        "archive_today_prefix": "https://archive.today/",
        "external_class": "external",  # marker class of external links in rendered pages
        "processed_class": "archive-processed",
    },
    "render": {
        "style": "label",  # "label" renders [archive.org], "icon" renders an <img>
        "icon_base_path": "/static/images",
    },
    "i18n": {
        "language": "en",
        "fallback_language": "en",
    },
    "server": {
        "host": "127.0.0.1",
        "port": 5180,
    },
}


def get_xdg_config_home() -> Path:
    """Get XDG config home directory."""
    return Path(os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config")))


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_xdg_config_home() / APP_NAME / "config.json"


def load_config() -> dict[str, Any]:
    """Load configuration, merging with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = get_config_path()

    if config_path.exists():
        with open(config_path) as f:
            user_config = json.load(f)
            config = deep_merge(config, user_config)

    return config


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to file."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        json.dump(config, f, indent=2)


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings():
    """Load configuration as a validated ``LinkToArchiveConfig``."""
    from .models.config import LinkToArchiveConfig

    return LinkToArchiveConfig.from_dict(load_config())
