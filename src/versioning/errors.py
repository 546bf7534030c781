"""Exceptions raised by version resolution components."""


class VersionError(Exception):
    """Base class for version resolution errors."""


class ConfigError(VersionError):
    """Raised when resolution options are structurally invalid."""


class GitMetadataError(VersionError):
    """Raised when commit metadata cannot be read from git."""
