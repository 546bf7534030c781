"""Environment variable version source."""

from __future__ import annotations

import logging
import os
from typing import Optional

from ..models import EnvOptions

logger = logging.getLogger(__name__)


def parse_env_version(opts: Optional[EnvOptions] = None) -> Optional[str]:
    """Return the first non-blank value among the configured variable names, trimmed.

    Args:
        opts: Environment options; a bare string ``name`` is treated as a
            single-item list.

    Returns:
        The trimmed value, or None when disabled or when every variable is
        unset or whitespace-only.
    """
    opts = opts or EnvOptions()
    if not opts.enable:
        return None

    names = [opts.name] if isinstance(opts.name, str) else list(opts.name)
    for name in names:
        value = os.environ.get(name)
        if value is not None and value.strip() != "":
            return value.strip()
        logger.debug("No non-empty value exists for ENV '%s'", name)
    return None
