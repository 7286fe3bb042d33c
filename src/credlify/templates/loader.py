"""Template discovery and classification."""

from __future__ import annotations

from pathlib import Path

from credlify.templates.base import TemplateDescriptor, TemplateKind

# File name prefix that marks captured (double) and renamed (single) templates
MARKER = "_"

# Rendered and parsed for the project path layout, also written to the project
CONFIG_TEMPLATE = "config.json"

SERVER_TASK_SNIPPET = "server_task.js"


class TemplateDirectoryError(Exception):
    """Raised when the bundled template directory cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Template directory '{path}' is unreadable: {reason}")


def get_package_templates_path() -> Path:
    """Get path to package-bundled templates."""
    return Path(__file__).parent / "default"


def get_snippets_path() -> Path:
    """Get path to package-bundled code snippets."""
    return Path(__file__).parent / "snippets"


def classify_template(name: str) -> tuple[TemplateKind, str]:
    """Classify a template file name.

    Returns the kind and the destination name:
    ``__index.html`` -> (CAPTURED, "index.html"),
    ``_.gitignore`` -> (STRUCTURE_DEPENDENT, ".gitignore"),
    ``gulpfile.babel.js`` -> (NORMAL, "gulpfile.babel.js").
    """
    double = MARKER * 2
    if name.startswith(double) and len(name) > len(double):
        return TemplateKind.CAPTURED, name[len(double):]
    if name.startswith(MARKER) and len(name) > len(MARKER):
        return TemplateKind.STRUCTURE_DEPENDENT, name[len(MARKER):]
    return TemplateKind.NORMAL, name


def list_templates(directory: Path | None = None) -> list[TemplateDescriptor]:
    """List and classify the direct file entries of the template directory.

    Raises TemplateDirectoryError if the directory cannot be read.
    """
    base = directory if directory is not None else get_package_templates_path()

    try:
        entries = sorted(base.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise TemplateDirectoryError(base, e.strerror or str(e)) from e

    templates: list[TemplateDescriptor] = []
    for entry in entries:
        if not entry.is_file():
            continue
        kind, destination_name = classify_template(entry.name)
        templates.append(
            TemplateDescriptor(
                name=entry.name,
                kind=kind,
                destination_name=destination_name,
                source=entry,
            )
        )

    return templates


def read_template(descriptor: TemplateDescriptor) -> str:
    """Read a template's raw text."""
    return descriptor.source.read_text(encoding="utf-8")


def read_config_template(directory: Path | None = None) -> str:
    """Read the raw config template text."""
    base = directory if directory is not None else get_package_templates_path()
    return (base / CONFIG_TEMPLATE).read_text(encoding="utf-8")


def read_snippet(name: str) -> str:
    """Read a bundled code snippet."""
    return (get_snippets_path() / name).read_text(encoding="utf-8")
