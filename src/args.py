"""Argument parsing functionality for getversion."""

import argparse


def build_parser():
    """Builds the argument parser for the program."""
    parser = argparse.ArgumentParser(
        prog="getversion",
        description=(
            "Resolve a version identifier from ENV variables, git, files or a fallback"
        ),
        add_help=True,
    )

    parser.add_argument("-p", "--priority",
                        dest="PRIORITY",
                        help="Source to try, in order: env, git, file, fallback. Repeatable or comma-separated.",
                        action="append",
                        type=str)
    parser.add_argument("--fallback",
                        dest="FALLBACK",
                        help="Value to use when no source yields a version",
                        action="store",
                        type=str)

    env_group = parser.add_argument_group("env source")
    env_group.add_argument("--env-name",
                           dest="ENV_NAMES",
                           help="ENV variable to read (default: APP_VERSION). Repeatable.",
                           action="append",
                           type=str)
    env_group.add_argument("--no-env",
                           dest="NO_ENV",
                           help="Disable the ENV source.",
                           action="store_true")

    git_group = parser.add_argument_group("git source")
    git_group.add_argument("--git-template",
                           dest="GIT_TEMPLATE",
                           help="Template with {branch}, {hash}, {shortHash} and {tag} placeholders",
                           action="store",
                           type=str)
    git_group.add_argument("--git-dir",
                           dest="GIT_DIR",
                           help="Directory to run git in (default: current directory)",
                           action="store",
                           type=str)
    git_group.add_argument("--no-git",
                           dest="NO_GIT",
                           help="Disable the git source.",
                           action="store_true")

    file_group = parser.add_argument_group("file source")
    file_group.add_argument("--file",
                            dest="FILES",
                            help="Additional file to read, as PATH or PATH#PROP for JSON. Repeatable.",
                            action="append",
                            type=str)
    file_group.add_argument("--no-npm-package",
                            dest="NO_NPM_PACKAGE",
                            help="Do not search parent directories for npm package files.",
                            action="store_true")
    file_group.add_argument("--start-dir",
                            dest="START_DIR",
                            help="Directory to start the package file search from (default: current directory)",
                            action="store",
                            type=str)
    file_group.add_argument("--no-file",
                            dest="NO_FILE",
                            help="Disable the file source.",
                            action="store_true")

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='WARNING')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
