"""Placeholder substitution for commit-based version templates."""

from typing import Mapping, Optional, Union

from .models import CommitMetadata

# Substitution order matters when a value itself contains a placeholder.
PLACEHOLDERS = ("branch", "shortHash", "hash", "tag")


def render_template(template: str, commit: Union[CommitMetadata, Mapping[str, Optional[str]]]) -> str:
    """Interpolate ``{branch}``, ``{shortHash}``, ``{hash}`` and ``{tag}`` into ``template``.

    Only the first occurrence of each placeholder is replaced. Missing values
    render as an empty string and unknown ``{tokens}`` are left as they are.
    """
    values = commit.to_dict() if isinstance(commit, CommitMetadata) else commit
    rendered = template
    for name in PLACEHOLDERS:
        token = "{" + name + "}"
        if token in rendered:
            value = values.get(name)
            rendered = rendered.replace(token, "" if value is None else str(value), 1)
    return rendered
