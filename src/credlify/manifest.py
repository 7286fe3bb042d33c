"""package.json reading."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

MANIFEST_FILENAME = "package.json"


class ManifestError(Exception):
    """Raised when package.json cannot be read or parsed."""


class ManifestNotFoundError(ManifestError):
    """Raised when the working directory is not an initialized npm package."""

    def __init__(self, root: Path) -> None:
        self.root = root
        super().__init__(
            f"No {MANIFEST_FILENAME} in '{root}', run 'npm init' first"
        )


@dataclass(frozen=True)
class PackageManifest:
    """Fields of package.json that credlify uses."""

    name: str = ""
    description: str = ""
    license: Any = None  # SPDX string, legacy {"type": ...} object, or None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PackageManifest:
        """Create from parsed package.json. Non-string name/description become ""."""
        name = data.get("name")
        description = data.get("description")
        return cls(
            name=name if isinstance(name, str) else "",
            description=description if isinstance(description, str) else "",
            license=data.get("license"),
        )


def get_manifest_path(root: Path) -> Path:
    return root / MANIFEST_FILENAME


def manifest_exists(root: Path) -> bool:
    """Check if package.json exists in the project root."""
    return get_manifest_path(root).is_file()


def read_manifest(root: Path) -> PackageManifest:
    """Read package.json from the project root.

    Raises ManifestNotFoundError if it is missing and ManifestError if it is
    not a JSON object.
    """
    path = get_manifest_path(root)
    if not path.is_file():
        raise ManifestNotFoundError(root)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ManifestError(f"Could not read '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"'{path}' does not contain a JSON object")

    return PackageManifest.from_dict(data)
