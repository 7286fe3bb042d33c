"""Template file materialization."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from pathlib import Path

from credlify.config.schema import ProjectConfig, UserInput
from credlify.console import console
from credlify.licenses import LICENSE_LIST_URL, LicenseLookupError, fetch_license_text
from credlify.scaffold.errors import MaterializeError
from credlify.scaffold.structure import APP_MODULE_PATH
from credlify.templates.base import TemplateDescriptor
from credlify.templates.loader import read_template
from credlify.templates.render import render_placeholders

logger = logging.getLogger(__name__)

FILE_MODE = 0o644

SCRIPT_ENTRY = "index.js"
STYLE_ENTRY = "index.scss"
GITKEEP = ".gitkeep"
INDEX_HTML = "index.html"

LicenseLookup = Callable[[str], Awaitable[str]]


@dataclass(frozen=True)
class ItemError:
    """A single file that could not be read or written."""

    path: Path
    message: str


@dataclass
class MaterializeReport:
    """Outcome of the file stage."""

    written: list[Path] = field(default_factory=list)
    errors: list[ItemError] = field(default_factory=list)
    captured: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def write_exclusive(path: Path, content: str) -> None:
    """Write a file, failing with FileExistsError if it already exists.

    Content is encoded before the file is created, so an encoding error
    leaves nothing on disk. A failed write removes the partial file.
    """
    data = content.encode("utf-8")
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, FILE_MODE)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
    except OSError:
        path.unlink(missing_ok=True)
        raise


def _describe_write_error(path: Path, error: Exception) -> str:
    if isinstance(error, FileExistsError):
        return f"File at '{path}' already exists"
    return f"Could not create file at '{path}'"


async def _write_all(
    jobs: list[tuple[Path, str]], report: MaterializeReport
) -> None:
    """Write files concurrently, recording each failure without stopping."""
    results = await asyncio.gather(
        *(asyncio.to_thread(write_exclusive, path, content) for path, content in jobs),
        return_exceptions=True,
    )

    for (path, _content), result in zip(jobs, results):
        if isinstance(result, (OSError, ValueError)):
            message = _describe_write_error(path, result)
            logger.warning("%s: %s", message, result)
            console.print(f"[red]{message}[/red]")
            report.errors.append(ItemError(path, message))
        elif isinstance(result, BaseException):
            raise result
        else:
            report.written.append(path)


async def resolve_license_text(
    user_input: UserInput, license_lookup: LicenseLookup
) -> UserInput:
    """Attach full license text, or an empty text with a warning."""
    if not user_input.license:
        return replace(user_input, license_text="")

    text = ""
    try:
        text = await license_lookup(user_input.license)
    except LicenseLookupError as e:
        logger.warning("License lookup failed: %s", e)

    if not text:
        console.print(
            "\n[yellow]No valid OSI license ID found in package.json; "
            "an empty license file was generated[/yellow]\n"
            f"[dim]See {LICENSE_LIST_URL}[/dim]\n"
        )
    return replace(user_input, license_text=text)


async def materialize_files(
    root: Path,
    user_input: UserInput,
    config: ProjectConfig,
    catalog: list[TemplateDescriptor],
    structure_created: bool,
    license_lookup: LicenseLookup = fetch_license_text,
) -> MaterializeReport:
    """Render every template and write it into the project.

    Captured templates are kept in the report's captured map. When the
    directory structure was created, the script and stylesheet entry points,
    the app module .gitkeep and the root index.html are written as well.
    Individual read and write failures are recorded in the report.

    Raises MaterializeError if a captured template needed for the structure
    files is missing from the catalog.
    """
    console.print("Creating build pipeline files...")

    user_input = await resolve_license_text(user_input, license_lookup)
    values = user_input.placeholder_values()
    report = MaterializeReport()

    raw_results = await asyncio.gather(
        *(asyncio.to_thread(read_template, descriptor) for descriptor in catalog),
        return_exceptions=True,
    )

    jobs: list[tuple[Path, str]] = []
    for descriptor, raw in zip(catalog, raw_results):
        # UnicodeDecodeError is a ValueError
        if isinstance(raw, (OSError, ValueError)):
            message = f"Template file '{descriptor.name}' could not be copied"
            logger.warning("%s: %s", message, raw)
            console.print(f"[red]{message}[/red]")
            report.errors.append(ItemError(descriptor.source, message))
            continue
        if isinstance(raw, BaseException):
            raise raw

        rendered = render_placeholders(raw, values)
        if descriptor.is_captured:
            report.captured[descriptor.destination_name] = rendered
        else:
            jobs.append((root / descriptor.destination_name, rendered))

    await _write_all(jobs, report)

    if structure_created:
        missing = [
            name for name in (GITKEEP, INDEX_HTML) if name not in report.captured
        ]
        if missing:
            raise MaterializeError(
                "Captured templates missing from catalog: " + ", ".join(missing)
            )

        src_js = root / config.src_js
        await _write_all(
            [
                (src_js / SCRIPT_ENTRY, ""),
                (root / config.src_sass / STYLE_ENTRY, ""),
                (src_js / APP_MODULE_PATH / GITKEEP, report.captured[GITKEEP]),
                (root / config.dest_root / INDEX_HTML, report.captured[INDEX_HTML]),
            ],
            report,
        )

    return report
