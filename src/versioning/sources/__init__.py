"""Version sources: environment variables, git commit metadata and files."""

from .env import parse_env_version
from .file import parse_file_version
from .git import GitCommitProvider, parse_git_version

__all__ = [
    "parse_env_version",
    "parse_file_version",
    "parse_git_version",
    "GitCommitProvider",
]
