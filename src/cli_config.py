"""Configuration loading for the CLI.

Reads version options from a YAML or JSON file and applies CLI overrides on
top with highest precedence. Loading problems are logged and produce an
empty configuration rather than an exception.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants
from versioning.models import AdditionalFileSpec, VersionOptions

logger = logging.getLogger(__name__)


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load version options from a YAML or JSON config file.

    Args:
        path: Path to the config file. Files ending in ``.json`` are read as
            JSON; anything else as YAML.

    Returns:
        The ``version`` section when present, otherwise the whole document.
        Empty dict when the file is missing, unreadable or not a mapping.
    """
    if not path:
        return {}

    if not os.path.isfile(path):
        logger.warning("Config file not found: %s", path)
        return {}

    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        logger.error("Failed to load config %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Config file %s does not contain a mapping, ignoring", path)
        return {}
    section = data.get(Constants.CONFIG_SECTION)
    if isinstance(section, dict):
        return section
    return data


def resolve_config_path(args: Any) -> Optional[str]:
    """Return the config path from ``--config`` or the ``GETVERSION_CONFIG`` variable."""
    path = getattr(args, "CONFIG", None)
    if isinstance(path, str) and path.strip():
        return path
    env_path = os.environ.get(Constants.ENV_CONFIG_PATH)
    if env_path and env_path.strip():
        return env_path.strip()
    return None


def parse_file_argument(value: str) -> AdditionalFileSpec:
    """Parse ``PATH`` or ``PATH#PROP`` using the rightmost ``#``."""
    if "#" not in value:
        return AdditionalFileSpec(path=value)
    path, prop = value.rsplit("#", 1)
    return AdditionalFileSpec(path=path, prop=prop.strip() or Constants.DEFAULT_VERSION_PROP)


def apply_cli_overrides(opts: VersionOptions, args: Any) -> VersionOptions:
    """Apply CLI flags to ``opts`` in place and return it."""
    priority = getattr(args, "PRIORITY", None)
    if priority:
        opts.priority = [part for value in priority for part in value.split(",") if part.strip()]

    env_names = getattr(args, "ENV_NAMES", None)
    if env_names:
        opts.env.name = list(env_names)
    if getattr(args, "NO_ENV", False):
        opts.env.enable = False

    if getattr(args, "GIT_TEMPLATE", None) is not None:
        opts.git.git_template = args.GIT_TEMPLATE
    if getattr(args, "GIT_DIR", None):
        opts.git.directory = args.GIT_DIR
    if getattr(args, "NO_GIT", False):
        opts.git.enable = False

    files = getattr(args, "FILES", None)
    if files:
        opts.file.additional_files = [parse_file_argument(value) for value in files]
    if getattr(args, "NO_NPM_PACKAGE", False):
        opts.file.npm_package = False
    if getattr(args, "START_DIR", None):
        opts.file.start_directory = args.START_DIR
    if getattr(args, "NO_FILE", False):
        opts.file.enable = False

    if getattr(args, "FALLBACK", None) is not None:
        opts.fallback = args.FALLBACK
    return opts


def build_options(args: Any) -> VersionOptions:
    """Build version options from config file and CLI flags.

    Raises:
        ConfigError: If the config file content has an invalid shape.
    """
    config_path = resolve_config_path(args)
    config = load_config_file(config_path)
    if config:
        logger.debug("Loaded config from: %s", config_path)
    opts = VersionOptions.from_dict(config)
    return apply_cli_overrides(opts, args)
