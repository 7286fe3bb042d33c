"""Project directory structure creation."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from credlify.config.schema import ProjectConfig
from credlify.console import console
from credlify.scaffold.errors import ExistingProjectError, StructureError

logger = logging.getLogger(__name__)

DIR_MODE = 0o755

# Placeholder module directory inside the script source, importable as "app"
APP_MODULE_PATH = Path("node_modules") / "app"


async def _make_dirs(paths: list[Path], errors: list[OSError]) -> list[Path]:
    """Create directories concurrently, collecting failures into errors."""
    results = await asyncio.gather(
        *(asyncio.to_thread(os.makedirs, path, DIR_MODE, True) for path in paths),
        return_exceptions=True,
    )

    created: list[Path] = []
    for path, result in zip(paths, results):
        if isinstance(result, OSError):
            errors.append(result)
        elif isinstance(result, BaseException):
            raise result
        else:
            created.append(path)
    return created


async def build_structure(root: Path, config: ProjectConfig) -> list[Path]:
    """Create the source/destination roots and their typed subdirectories.

    Refuses to start if either root already exists. Every directory is
    attempted even if a sibling fails; directories that were created are left
    in place when StructureError is raised.

    Returns the created directories.
    """
    if config.is_empty:
        raise StructureError("Project config has no path layout")

    src_dir = root / config.src_root
    dest_dir = root / config.dest_root

    if src_dir.exists():
        raise ExistingProjectError("Source", src_dir)
    if dest_dir.exists():
        raise ExistingProjectError("Destination", dest_dir)

    console.print("Creating source/destination directories...")

    errors: list[OSError] = []
    created = await _make_dirs([src_dir, dest_dir], errors)
    created += await _make_dirs(
        [
            root / config.src_js / APP_MODULE_PATH,
            root / config.src_sass,
            root / config.dest_js,
            root / config.dest_sass,
        ],
        errors,
    )

    if errors:
        for error in errors:
            logger.warning("Directory creation failed: %s", error)
            console.print(f"[red]{error}[/red]")
        raise StructureError(
            f"{len(errors)} director{'y' if len(errors) == 1 else 'ies'} "
            "could not be created",
            errors,
        )

    return created
