"""Resolution service: try each version source in priority order."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from common.logging_utils import extra_context, is_debug_enabled

from .models import PriorityEntry, SourceKind, VersionOptions
from .sources.env import parse_env_version
from .sources.file import parse_file_version
from .sources.git import parse_git_version

logger = logging.getLogger(__name__)

_SOURCE_LOOKUP: Dict[str, SourceKind] = {kind.value: kind for kind in SourceKind}


def normalize_priority(priority: Iterable[PriorityEntry], fallback: Optional[str] = None) -> List[str]:
    """Trim, lower-case and de-duplicate priority entries.

    Unknown entries are kept (they never match a source) and logged. When a
    non-blank ``fallback`` is given but ``fallback`` is not listed, it is
    appended as the last entry.
    """
    tokens: List[str] = []
    for entry in priority:
        raw = entry.value if isinstance(entry, SourceKind) else str(entry)
        clean = raw.strip().lower()
        if clean in tokens:
            continue
        if clean not in _SOURCE_LOOKUP:
            logger.warning("Priority '%s' is not a valid source, ignoring.", clean)
        tokens.append(clean)

    if fallback is not None and str(fallback).strip() != "" and SourceKind.FALLBACK.value not in tokens:
        logger.warning("'fallback' value provided but not in priorities! Adding as last priority...")
        tokens.append(SourceKind.FALLBACK.value)
    return tokens


class VersionResolutionService:
    """Resolve a version identifier from the sources named in ``options.priority``.

    Sources run one at a time; the first one returning something other than
    None wins and later sources are never invoked. Source callables can be
    replaced, mainly for tests.
    """

    def __init__(
        self,
        options: Optional[VersionOptions] = None,
        *,
        env_source: Callable[..., Any] = parse_env_version,
        git_source: Callable[..., Any] = parse_git_version,
        file_source: Callable[..., Any] = parse_file_version,
    ):
        self.options = options or VersionOptions()
        self._dispatch: Dict[SourceKind, Callable[[], Any]] = {
            SourceKind.ENV: lambda: env_source(self.options.env),
            SourceKind.GIT: lambda: git_source(self.options.git),
            SourceKind.FILE: lambda: file_source(self.options.file),
            SourceKind.FALLBACK: self._fallback_value,
        }

    def _fallback_value(self) -> Optional[str]:
        fallback = self.options.fallback
        return None if fallback is None else str(fallback)

    async def _try_source(self, kind: SourceKind) -> Optional[str]:
        try:
            result = self._dispatch[kind]()
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Source '%s' failed, continuing: %s", kind.value, exc)
            return None

    async def resolve(self) -> Optional[str]:
        """Return the first version found, or None if no source produced one."""
        priority = normalize_priority(self.options.priority, self.options.fallback)
        if not priority:
            logger.warning("No priorities found?")
            return None

        for token in priority:
            kind = _SOURCE_LOOKUP.get(token)
            if kind is None:
                continue
            version = await self._try_source(kind)
            if version is not None:
                logger.debug("Found version %s from source %s", version, kind.value)
                return version
            if is_debug_enabled(logger):
                logger.debug(
                    "Source produced no version",
                    extra=extra_context(event="decision", component="service", source=kind.value, outcome="absent"),
                )
        return None
