"""Data models for version resolution options and source results."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from constants import Constants

from .errors import ConfigError

logger = logging.getLogger(__name__)


class SourceKind(Enum):
    """Sources that may produce a version identifier."""
    ENV = "env"
    GIT = "git"
    FILE = "file"
    FALLBACK = "fallback"


# A priority entry as given by callers; unknown strings are kept as no-ops.
PriorityEntry = Union[SourceKind, str]


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the value of the first key present in ``data``."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def _warn_unknown_keys(section: str, data: Mapping[str, Any], known: Sequence[str]) -> None:
    for key in data:
        if key not in known:
            logger.warning("Ignoring unknown option '%s' in '%s' options", key, section)


def _as_mapping(section: str, data: Any) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"'{section}' options must be a mapping, got {type(data).__name__}")
    return data


def _as_name_list(section: str, value: Any) -> Union[str, List[str]]:
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigError(f"'{section}' must be a string or a list of strings")


@dataclass
class AdditionalFileSpec:
    """An explicit file to read a version from, with the dot-path to use for JSON."""
    path: str
    prop: str = Constants.DEFAULT_VERSION_PROP

    @classmethod
    def coerce(cls, entry: Union[str, "AdditionalFileSpec", Mapping[str, Any]]) -> "AdditionalFileSpec":
        """Normalize a bare path or a ``{path, prop}`` mapping into a spec."""
        if isinstance(entry, AdditionalFileSpec):
            return entry
        if isinstance(entry, str):
            return cls(path=entry)
        if isinstance(entry, Mapping):
            path = entry.get("path")
            if not isinstance(path, str) or not path:
                raise ConfigError("Additional file entries require a 'path' string")
            prop = entry.get("prop") or Constants.DEFAULT_VERSION_PROP
            return cls(path=path, prop=str(prop))
        raise ConfigError(f"Unsupported additional file entry: {entry!r}")


@dataclass
class EnvOptions:
    """Options for reading a version from environment variables."""
    enable: bool = True
    name: Union[str, List[str]] = field(default_factory=lambda: list(Constants.DEFAULT_ENV_NAMES))

    @classmethod
    def from_dict(cls, data: Any) -> "EnvOptions":
        data = _as_mapping("env", data)
        _warn_unknown_keys("env", data, ("enable", "name"))
        opts = cls(enable=bool(data.get("enable", True)))
        if "name" in data:
            opts.name = _as_name_list("env.name", data["name"])
        return opts


@dataclass
class GitOptions:
    """Options for rendering a version from the last git commit."""
    enable: bool = True
    git_template: str = Constants.DEFAULT_GIT_TEMPLATE
    directory: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "GitOptions":
        data = _as_mapping("git", data)
        _warn_unknown_keys("git", data, ("enable", "gitTemplate", "git_template", "directory"))
        template = _pick(data, "gitTemplate", "git_template", default=Constants.DEFAULT_GIT_TEMPLATE)
        if not isinstance(template, str):
            raise ConfigError("'git.gitTemplate' must be a string")
        return cls(
            enable=bool(data.get("enable", True)),
            git_template=template,
            directory=data.get("directory"),
        )


@dataclass
class FileOptions:
    """Options for reading a version from explicit files and npm package manifests."""
    npm_package: bool = True
    additional_files: List[Union[str, AdditionalFileSpec]] = field(default_factory=list)
    enable: bool = True
    start_directory: Optional[str] = None

    def additional_file_specs(self) -> List[AdditionalFileSpec]:
        """Return additional files normalized to specs, in order."""
        return [AdditionalFileSpec.coerce(entry) for entry in self.additional_files]

    @classmethod
    def from_dict(cls, data: Any) -> "FileOptions":
        data = _as_mapping("file", data)
        _warn_unknown_keys("file", data, (
            "npmPackage", "npm_package", "additionalFiles", "additional_files",
            "enable", "startDirectory", "start_directory",
        ))
        files = _pick(data, "additionalFiles", "additional_files", default=[]) or []
        if not isinstance(files, (list, tuple)):
            raise ConfigError("'file.additionalFiles' must be a list")
        return cls(
            npm_package=bool(_pick(data, "npmPackage", "npm_package", default=True)),
            additional_files=[AdditionalFileSpec.coerce(entry) for entry in files],
            enable=bool(data.get("enable", True)),
            start_directory=_pick(data, "startDirectory", "start_directory"),
        )


@dataclass
class VersionOptions:
    """Top-level options for resolving a version identifier."""
    priority: List[PriorityEntry] = field(default_factory=lambda: list(Constants.DEFAULT_PRIORITY))
    env: EnvOptions = field(default_factory=EnvOptions)
    file: FileOptions = field(default_factory=FileOptions)
    git: GitOptions = field(default_factory=GitOptions)
    fallback: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "VersionOptions":
        """Build options from a parsed configuration mapping.

        Accepts the camelCase keys used by the documented options format as
        well as their snake_case spellings.

        Raises:
            ConfigError: If a section or value has the wrong shape.
        """
        data = _as_mapping("version", data)
        _warn_unknown_keys("version", data, ("priority", "env", "file", "git", "fallback"))
        opts = cls(
            env=EnvOptions.from_dict(data.get("env")),
            file=FileOptions.from_dict(data.get("file")),
            git=GitOptions.from_dict(data.get("git")),
        )
        if "priority" in data:
            priority = data["priority"]
            if isinstance(priority, str):
                priority = [part for part in priority.split(",") if part.strip()]
            opts.priority = list(_as_name_list("priority", priority))
        fallback = data.get("fallback")
        if fallback is not None:
            opts.fallback = str(fallback)
        return opts


@dataclass
class Person:
    """Name and email of a commit author or committer."""
    name: str = ""
    email: str = ""


@dataclass
class CommitMetadata:
    """Details of the last commit as reported by git."""
    hash: str
    short_hash: str
    branch: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    subject: str = ""
    sanitized_subject: str = ""
    body: str = ""
    authored_on: Optional[int] = None
    committed_on: Optional[int] = None
    author: Person = field(default_factory=Person)
    committer: Person = field(default_factory=Person)
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return the metadata keyed by template placeholder names."""
        return {
            "branch": self.branch,
            "hash": self.hash,
            "shortHash": self.short_hash,
            "tag": self.tags[0] if self.tags else None,
        }
