"""Scaffold pipeline exceptions."""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base exception for scaffold failures."""


class PreflightError(ScaffoldError):
    """Raised when a precondition fails before anything is written."""


class ConflictError(PreflightError):
    """Raised when template destinations already exist in the project."""

    def __init__(self, conflicts: list[Path]) -> None:
        self.conflicts = conflicts
        listing = "\n".join(path.name for path in conflicts)
        super().__init__(
            f"The following files already exist:\n\n{listing}\n\n"
            "Exiting to avoid breaking anything"
        )


class ExistingProjectError(PreflightError):
    """Raised when the source or destination root directory already exists."""

    def __init__(self, label: str, path: Path) -> None:
        self.label = label
        self.path = path
        super().__init__(
            f"{label} directory '{path}' already exists, exiting to avoid "
            "breaking anything"
        )


class StructureError(ScaffoldError):
    """Raised when one or more project directories could not be created."""

    def __init__(self, message: str, errors: list[OSError] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)


class MaterializeError(ScaffoldError):
    """Raised when the template set is misconfigured."""


class InstallError(ScaffoldError):
    """Raised when the package manager cannot be started."""


class StageFailedError(ScaffoldError):
    """Raised by the pipeline when a stage fails; later stages do not run."""

    def __init__(self, stage: str, cause: BaseException) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"Stage '{stage}' failed: {cause}")
