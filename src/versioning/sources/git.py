"""Git commit version source.

Reads the last commit of the working repository with the ``git`` executable
and renders it through a version template such as ``{branch}-{shortHash}``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from common.logging_utils import extra_context, is_debug_enabled, is_debug_mode
from constants import Constants

from ..errors import GitMetadataError
from ..models import CommitMetadata, GitOptions, Person
from ..template import render_template

logger = logging.getLogger(__name__)

_LOG_FIELD_COUNT = 12


def _to_epoch(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None


def parse_log_record(record: str) -> CommitMetadata:
    """Parse the output of ``git log -1`` using ``Constants.GIT_LOG_FORMAT``.

    Branch and tags are not part of the log record and are left empty.

    Raises:
        GitMetadataError: If the record does not contain every field.
    """
    fields = record.split(Constants.GIT_FIELD_SEPARATOR)
    if len(fields) < _LOG_FIELD_COUNT or not fields[1].strip():
        raise GitMetadataError("Unexpected output from git log")
    (short_hash, full_hash, subject, sanitized_subject, body, authored_on,
     committed_on, author_name, author_email, committer_name, committer_email) = fields[:11]
    return CommitMetadata(
        hash=full_hash.strip(),
        short_hash=short_hash.strip(),
        subject=subject,
        sanitized_subject=sanitized_subject,
        body=body,
        authored_on=_to_epoch(authored_on),
        committed_on=_to_epoch(committed_on),
        author=Person(name=author_name, email=author_email),
        committer=Person(name=committer_name, email=committer_email),
        notes=Constants.GIT_FIELD_SEPARATOR.join(fields[11:]).strip(),
    )


def parse_tags(output: str) -> List[str]:
    """Return non-blank lines of ``git tag --contains`` output in order."""
    return [line.strip() for line in output.splitlines() if line.strip()]


class GitCommitProvider:
    """Reads last-commit metadata by running git in ``directory``.

    No timeout is applied; a git process that never exits blocks the caller.
    """

    def __init__(self, directory: Optional[str] = None):
        self.directory = directory

    async def _run_git(self, *args: str) -> str:
        try:
            proc = await asyncio.create_subprocess_exec(
                Constants.GIT_EXECUTABLE,
                *args,
                cwd=self.directory,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise GitMetadataError(f"Could not run git: {exc}") from exc
        stdout, stderr = await proc.communicate()
        if proc.returncode != 0:
            raise GitMetadataError(
                f"git {args[0]} exited with status {proc.returncode}: "
                f"{stderr.decode('utf-8', errors='replace').strip()}"
            )
        return stdout.decode("utf-8", errors="replace")

    async def get_last_commit(self) -> CommitMetadata:
        """Return metadata for ``HEAD`` including its branch and tags.

        Raises:
            GitMetadataError: If git is missing, fails, or prints something unexpected.
        """
        record = await self._run_git("log", "-1", f"--pretty=format:{Constants.GIT_LOG_FORMAT}")
        commit = parse_log_record(record)
        branch = (await self._run_git("rev-parse", "--abbrev-ref", "HEAD")).strip()
        commit.branch = branch or None
        commit.tags = parse_tags(await self._run_git("tag", "--contains", "HEAD"))
        return commit


async def parse_git_version(opts: Optional[GitOptions] = None, provider: Any = None) -> Optional[str]:
    """Render the configured template from the last commit.

    Args:
        opts: Git options.
        provider: Object exposing ``async get_last_commit()``; defaults to a
            ``GitCommitProvider`` running in ``opts.directory``.

    Returns:
        The rendered template (untrimmed), or None when disabled or when the
        commit could not be read.
    """
    opts = opts or GitOptions()
    if not opts.enable:
        return None

    provider = provider if provider is not None else GitCommitProvider(opts.directory)
    try:
        commit = await provider.get_last_commit()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        if is_debug_mode():
            logger.debug("Could not get git info, continuing... (%s)", exc, exc_info=True)
        return None

    if is_debug_enabled(logger):
        logger.debug(
            "Read last commit",
            extra=extra_context(
                event="source_read",
                component="git",
                outcome="success",
                commit_hash=commit.short_hash,
                branch=commit.branch,
            ),
        )
    return render_template(opts.git_template, commit)
