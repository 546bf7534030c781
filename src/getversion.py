"""getversion - print a version identifier resolved from ENV, git, files or a fallback.

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from args import parse_args
from cli_config import build_options
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from versioning import get_version_sync
from versioning.errors import ConfigError


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    # Honor CLI --loglevel by passing it to centralized logger via env
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()
    if getattr(args, "LOG_FILE", None):
        add_file_handler(args.LOG_FILE)
        logger.info("Logging to file: %s", args.LOG_FILE)

    try:
        opts = build_options(args)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return ExitCodes.CONFIG_ERROR.value

    if is_debug_enabled(logger):
        logger.debug(
            "Resolving version",
            extra=extra_context(event="function_entry", component="cli", action="main",
                                priority=",".join(str(p) for p in opts.priority)),
        )

    version = get_version_sync(opts)
    if version is None:
        logger.warning("No version found from any source.")
        return ExitCodes.NOT_FOUND.value

    print(version)
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
