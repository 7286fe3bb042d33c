"""Relative path helpers."""

import re

_EDGE_PATTERN = re.compile(r"^[/\s]+|[/\s]+$")


def sanitize_rel_path(path: object) -> str:
    """Strip leading and trailing slashes and whitespace from a relative path.

    Non-string input yields an empty string.
    """
    if not isinstance(path, str):
        return ""
    return _EDGE_PATTERN.sub("", path)
