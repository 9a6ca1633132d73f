"""Configuration loading for hidsite.

The site configuration is an optional YAML mapping, ``_config.yml`` by
default. A missing or unusable file is never fatal: the site simply runs on
its directory conventions.

Recognized keys:
- layout_dir: Layout directory (default ``_layouts``).
- posts_dir: Posts directory (default ``_posts``).
- include_dir: Include directory (default ``_includes`` when it exists).
- site_dir: Output directory (default ``_site``).
- processor_name: Registered processor to render with (default ``Template``).
- processor_args: Arguments for the processor factory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

CONFIG_FILE = "_config.yml"

DEFAULT_LAYOUT_DIR = "_layouts"
DEFAULT_POSTS_DIR = "_posts"
DEFAULT_INCLUDE_DIR = "_includes"
DEFAULT_SITE_DIR = "_site"
DEFAULT_PROCESSOR = "Template"


class ConfigError(Exception):
    """Fatal configuration error that aborts the whole build."""


def load_config(config_path: Path) -> dict[str, Any]:
    """Load site configuration from a YAML file.

    Args:
        config_path: Path to the configuration file.

    Returns:
        The configuration mapping, or an empty dict when the file is absent,
        unreadable, not valid YAML, or not a mapping.
    """
    if not config_path.is_file():
        return {}
    try:
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return {}
    if not isinstance(loaded, dict):
        return {}
    return loaded
