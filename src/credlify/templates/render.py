"""Placeholder substitution for template text."""

import re
from collections.abc import Mapping

PLACEHOLDER_PATTERN = re.compile(r"%%\[([A-Za-z0-9._-]+)\]%%")


def render_placeholders(template: str, values: Mapping[str, str]) -> str:
    """Replace ``%%[name]%%`` tokens with values keyed by name.

    Names are case sensitive and may contain letters, digits, underscores,
    hyphens and periods. Tokens without a matching key are left as-is so
    templates may reference fields that are not defined yet.

    Substitution is a single pass: a value that itself contains token syntax
    is inserted literally and is not expanded until the text is rendered
    again.
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in values:
            return str(values[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, template)


def find_placeholders(template: str) -> list[str]:
    """Return placeholder names in order of first appearance."""
    seen: dict[str, None] = {}
    for match in PLACEHOLDER_PATTERN.finditer(template):
        seen.setdefault(match.group(1), None)
    return list(seen)
