"""Template descriptor definitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class TemplateKind(Enum):
    """How a template file is materialized into the project."""

    NORMAL = "normal"  # written at its own name
    CAPTURED = "captured"  # held in memory, written to a structural path
    STRUCTURE_DEPENDENT = "structure-dependent"  # written with marker stripped


@dataclass(frozen=True)
class TemplateDescriptor:
    """A template file bundled with credlify.

    The kind is assigned once when the catalog is built; downstream code
    switches on it instead of inspecting the file name again.
    """

    name: str  # file name inside the template directory
    kind: TemplateKind
    destination_name: str  # name with any marker prefix removed
    source: Path

    @property
    def is_captured(self) -> bool:
        return self.kind is TemplateKind.CAPTURED
