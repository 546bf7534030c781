"""File version source: explicit additional files, then npm package manifests.

Additional files are tried in the order given. When none of them exists the
directory tree is walked upwards looking for ``package.json``,
``package-lock.json`` or ``npm-shrinkwrap.json``. JSON content is resolved
with a dot-path (``version`` by default); any other content is returned as is.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

from ..dot_path import resolve_dot_path
from ..models import AdditionalFileSpec, FileOptions

logger = logging.getLogger(__name__)

ManifestContent = Union[Dict[str, Any], List[Any], str]


def read_version_file(path: str) -> Optional[ManifestContent]:
    """Read ``path`` and return its parsed JSON object, or its raw text if not JSON.

    Returns:
        None when the file cannot be read. A missing file is only logged at
        DEBUG; other I/O errors are logged as warnings.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as fh:
            contents = fh.read()
    except FileNotFoundError:
        logger.debug("No file found at given path: %s", path)
        return None
    except OSError as e:
        logger.warning("Encountered error while reading file %s: %s", path, e)
        return None

    try:
        data = json.loads(contents)
    except json.JSONDecodeError:
        logger.debug("Could not parse file contents at %s as JSON", path)
        return contents
    # Scalar JSON documents (e.g. a bare 1.2) are plain version text
    if isinstance(data, (dict, list)):
        return data
    return contents


def find_additional_file(
    specs: Sequence[AdditionalFileSpec],
) -> Optional[Tuple[AdditionalFileSpec, ManifestContent]]:
    """Return the first readable additional file with its content."""
    for spec in specs:
        content = read_version_file(spec.path)
        if content is not None:
            logger.debug("Found additional file at %s", spec.path)
            return spec, content
    return None


def iter_ancestors(directory: str) -> List[str]:
    """Return ``directory`` followed by each parent up to the filesystem root."""
    current = os.path.abspath(directory)
    chain = [current]
    parent = os.path.dirname(current)
    while parent != current:
        chain.append(parent)
        current = parent
        parent = os.path.dirname(current)
    return chain


def find_anchor_directory(start_directory: str) -> str:
    """Return the directory the manifest walk starts from.

    When ``start_directory`` is inside ``node_modules`` the walk starts at the
    parent of the nearest ``node_modules`` so the consuming project's manifest
    is found instead of an installed dependency's.
    """
    for directory in iter_ancestors(start_directory):
        if os.path.basename(directory) == Constants.DEPENDENCY_ROOT_DIR:
            return os.path.dirname(directory)
    return os.path.abspath(start_directory)


def find_package_manifest(start_directory: str) -> Optional[Tuple[str, ManifestContent]]:
    """Walk up from the anchor of ``start_directory`` to the first package manifest.

    At each level the file names are tried in ``Constants.PACKAGE_FILE_NAMES``
    order and the first readable one ends the walk.

    Returns:
        ``(path, content)`` of the manifest, or None if the root was reached.
    """
    anchor = find_anchor_directory(start_directory)
    if is_debug_enabled(logger):
        logger.debug(
            "Walking up for package manifest",
            extra=extra_context(
                event="manifest_walk",
                component="file",
                start_directory=start_directory,
                anchor_directory=anchor,
            ),
        )
    for directory in iter_ancestors(anchor):
        for file_name in Constants.PACKAGE_FILE_NAMES:
            package_path = os.path.join(directory, file_name)
            content = read_version_file(package_path)
            if content is not None:
                logger.debug("Found package file at %s", package_path)
                return package_path, content
    return None


def version_from_content(content: ManifestContent, prop: str, source_path: str) -> Optional[str]:
    """Extract a version string from file content.

    Text is returned verbatim, without trimming. JSON content is resolved
    with the dot-path ``prop``. Numbers are returned as strings; booleans
    (including ``false``), mappings and lists are not versions and give None,
    so resolution moves on to the next source.
    """
    if isinstance(content, str):
        return content

    value = resolve_dot_path(prop, content)
    if value is None:
        logger.debug("Value was undefined at object path '%s' in %s", prop, source_path)
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    logger.debug("Value at object path '%s' in %s is not a version: %r", prop, source_path, value)
    return None


def parse_file_version(opts: Optional[FileOptions] = None, start_directory: Optional[str] = None) -> Optional[str]:
    """Resolve a version from additional files or the nearest npm package manifest.

    Args:
        opts: File options.
        start_directory: Where the manifest walk starts. Falls back to
            ``opts.start_directory`` and then to the current working directory.

    Returns:
        The version found, or None.
    """
    opts = opts or FileOptions()
    if not opts.enable:
        return None

    found = find_additional_file(opts.additional_file_specs())
    if found is not None:
        spec, content = found
        return version_from_content(content, spec.prop, spec.path)

    if not opts.npm_package:
        return None

    start = start_directory or opts.start_directory or os.getcwd()
    manifest = find_package_manifest(start)
    if manifest is None:
        logger.debug("No package file found above %s", start)
        return None
    package_path, content = manifest
    return version_from_content(content, Constants.DEFAULT_VERSION_PROP, package_path)
