"""Checks run before the project is modified."""

import os
from pathlib import Path

from credlify.console import console
from credlify.manifest import MANIFEST_FILENAME, ManifestNotFoundError, manifest_exists
from credlify.scaffold.errors import ConflictError
from credlify.templates.base import TemplateDescriptor


def find_conflicts(root: Path, catalog: list[TemplateDescriptor]) -> list[Path]:
    """Return destination paths of root-level templates that already exist.

    Captured templates land inside the new source/destination roots, which
    are guarded separately when the structure is built.
    """
    conflicts: list[Path] = []
    for descriptor in catalog:
        if descriptor.is_captured:
            continue
        destination = root / descriptor.destination_name
        # lexists also reports dangling symlinks
        if os.path.lexists(destination):
            conflicts.append(destination)
    return conflicts


def run_preflight(root: Path, catalog: list[TemplateDescriptor]) -> None:
    """Raise if the project cannot be scaffolded safely.

    Raises ManifestNotFoundError if package.json is missing and
    ConflictError listing every conflicting file at once.
    """
    if not manifest_exists(root):
        raise ManifestNotFoundError(root)

    conflicts = find_conflicts(root, catalog)
    if conflicts:
        raise ConflictError(conflicts)


def check_manifest(root: Path) -> bool:
    """Check that the project is an initialized npm package."""
    if manifest_exists(root):
        console.print(f"[green]✓[/green] Found {MANIFEST_FILENAME}")
        return True
    console.print(
        f"[red]✗[/red] No {MANIFEST_FILENAME}, run [cyan]npm init[/cyan] first"
    )
    return False


def check_conflicts(root: Path, catalog: list[TemplateDescriptor]) -> bool:
    """Check that no template would overwrite an existing file."""
    conflicts = find_conflicts(root, catalog)
    if not conflicts:
        console.print(f"[green]✓[/green] No conflicts with {len(catalog)} templates")
        return True

    console.print("[red]✗[/red] The following files already exist:")
    for path in conflicts:
        console.print(f"    {path}")
    return False


def run_all_checks(root: Path, catalog: list[TemplateDescriptor]) -> bool:
    """Run all preflight checks, reporting each one."""
    console.print("[bold]Running preflight checks...[/bold]\n")

    results = [check_manifest(root), check_conflicts(root, catalog)]
    all_passed = all(results)

    if all_passed:
        console.print("\n[bold green]All preflight checks passed![/bold green]")
    else:
        console.print("\n[bold red]Some preflight checks failed.[/bold red]")

    return all_passed
