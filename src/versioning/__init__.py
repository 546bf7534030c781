"""Resolve a version identifier from environment variables, git, files or a fallback.

Example:
    >>> from versioning import get_version_sync
    >>> get_version_sync({"priority": ["env", "file"], "fallback": "0.0.0-dev"})
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional, Union

from .errors import ConfigError
from .models import (
    AdditionalFileSpec,
    CommitMetadata,
    EnvOptions,
    FileOptions,
    GitOptions,
    SourceKind,
    VersionOptions,
)
from .service import VersionResolutionService, normalize_priority

logger = logging.getLogger(__name__)

OptionsInput = Union[VersionOptions, Mapping[str, Any], None]


async def get_version(options: OptionsInput = None) -> Optional[str]:
    """Resolve a version identifier.

    Args:
        options: ``VersionOptions`` or a mapping in the documented options
            format. Defaults try ``env``, ``git``, ``file`` then ``fallback``.

    Returns:
        The version string, or None. Never raises for missing or broken
        sources; invalid option mappings are logged and yield None.
    """
    if options is None or isinstance(options, VersionOptions):
        opts = options
    else:
        try:
            opts = VersionOptions.from_dict(options)
        except ConfigError as e:
            logger.error("Invalid version options: %s", e)
            return None
    return await VersionResolutionService(opts).resolve()


def get_version_sync(options: OptionsInput = None) -> Optional[str]:
    """Blocking wrapper around :func:`get_version`."""
    return asyncio.run(get_version(options))


__all__ = [
    "AdditionalFileSpec",
    "CommitMetadata",
    "EnvOptions",
    "FileOptions",
    "GitOptions",
    "SourceKind",
    "VersionOptions",
    "VersionResolutionService",
    "get_version",
    "get_version_sync",
    "normalize_priority",
]
