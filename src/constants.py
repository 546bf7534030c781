"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    NOT_FOUND = 1
    CONFIG_ERROR = 2


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    DEFAULT_PRIORITY = ["env", "git", "file", "fallback"]
    DEFAULT_ENV_NAMES = ["APP_VERSION"]
    DEFAULT_GIT_TEMPLATE = "{branch}-{shortHash}"
    DEFAULT_VERSION_PROP = "version"

    PACKAGE_JSON_FILE = "package.json"
    PACKAGE_LOCK_FILE = "package-lock.json"
    NPM_SHRINKWRAP_FILE = "npm-shrinkwrap.json"
    # Checked in this order at every directory level
    PACKAGE_FILE_NAMES = [PACKAGE_JSON_FILE, PACKAGE_LOCK_FILE, NPM_SHRINKWRAP_FILE]
    DEPENDENCY_ROOT_DIR = "node_modules"

    GIT_EXECUTABLE = "git"
    # Commit messages cannot contain NUL, so it is a safe field separator
    GIT_FIELD_SEPARATOR = "\x00"
    GIT_LOG_FORMAT = "%x00".join(
        ["%h", "%H", "%s", "%f", "%b", "%at", "%ct", "%an", "%ae", "%cn", "%ce", "%N"]
    )

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    ENV_LOG_LEVEL = "GETVERSION_LOG_LEVEL"
    ENV_DEBUG_MODE = "DEBUG_MODE"
    ENV_CONFIG_PATH = "GETVERSION_CONFIG"
    CONFIG_SECTION = "version"
