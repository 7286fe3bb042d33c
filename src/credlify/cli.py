"""Command-line interface for credlify."""

import asyncio
import logging
from pathlib import Path

import click
from rich.table import Table

from credlify import __version__
from credlify.config.loader import load_settings
from credlify.config.schema import ScaffoldSettings
from credlify.config.wizard import prompt_user_input, show_answers
from credlify.console import console
from credlify.manifest import ManifestError, ManifestNotFoundError, read_manifest
from credlify.scaffold import (
    ConflictError,
    ScaffoldPipeline,
    StageFailedError,
    run_all_checks,
)
from credlify.templates import (
    TemplateDescriptor,
    TemplateDirectoryError,
    list_templates,
    read_template,
)
from credlify.templates.render import find_placeholders

logger = logging.getLogger(__name__)


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"credlify [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


def _load_catalog() -> list[TemplateDescriptor]:
    """Load the bundled templates, exiting if the package is broken."""
    try:
        return list_templates()
    except TemplateDirectoryError as e:
        console.print(f"[red]{e}[/red]")
        console.print("[dim]Reinstall credlify to restore its templates.[/dim]")
        raise SystemExit(1) from e


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """credlify - scaffold a gulp/webpack build pipeline into an npm package."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s - %(message)s",
        )

    if ctx.invoked_subcommand is None:
        console.print("[bold]credlify[/bold] - build pipeline scaffolding")
        console.print("\nRun [cyan]credlify --help[/cyan] for available commands.")


@main.command()
@click.option(
    "--dirs/--no-dirs",
    default=True,
    help="Create source/destination directories (default: create).",
)
@click.option(
    "--files/--no-files",
    default=True,
    help="Create build pipeline files from templates (default: create).",
)
@click.option(
    "--deps/--no-deps",
    default=True,
    help="Install build dependencies (default: install).",
)
@click.option(
    "--package-manager",
    envvar="CREDLIFY_PACKAGE_MANAGER",
    help="Package manager executable (default: npm).",
)
@click.option(
    "--yes",
    "-y",
    "assume_defaults",
    is_flag=True,
    default=False,
    help="Accept default answers without prompting.",
)
@click.pass_context
def init(
    ctx: click.Context,
    dirs: bool,
    files: bool,
    deps: bool,
    package_manager: str | None,
    assume_defaults: bool,
) -> None:
    """Scaffold the build pipeline into the current npm package.

    Creates the source/destination directory tree, writes the build pipeline
    files and installs the build dependencies. Existing files are never
    overwritten; the command refuses to run if any would be.

    Settings are read from ~/.credlify/config.yaml and ./.credlify.yaml;
    options given on the command line take precedence.
    """
    root = Path.cwd()
    settings = load_settings(root)

    def _from_cli(param_name: str) -> bool:
        """Check if a parameter was explicitly set on the command line."""
        source = ctx.get_parameter_source(param_name)
        return source in (
            click.core.ParameterSource.COMMANDLINE,
            click.core.ParameterSource.ENVIRONMENT,
        )

    overrides = ScaffoldSettings(
        dirs=dirs if _from_cli("dirs") else None,
        files=files if _from_cli("files") else None,
        deps=deps if _from_cli("deps") else None,
        package_manager=package_manager,
    )
    settings = settings.merge(overrides)

    catalog = _load_catalog()
    pipeline = ScaffoldPipeline(root, settings, catalog)

    try:
        pipeline.preflight()
    except ManifestNotFoundError as e:
        logger.debug("Preflight failed: %s", e)
        console.print("[red]This isn't an npm package, run 'npm init' first[/red]")
        raise SystemExit(1) from e
    except ConflictError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1) from e

    try:
        manifest = read_manifest(root)
    except ManifestError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1) from e

    user_input = prompt_user_input(settings, manifest, assume_defaults=assume_defaults)
    show_answers(user_input)

    try:
        result = asyncio.run(pipeline.run(user_input))
    except StageFailedError as e:
        raise SystemExit(1) from e

    if result.files is not None:
        console.print(
            f"\n[green]Created {len(result.files.written)} files[/green]"
        )
        if result.files.errors:
            console.print(
                f"[yellow]{len(result.files.errors)} files could not be "
                "created[/yellow]"
            )

    exit_code = result.install_exit_code or 0
    if exit_code:
        console.print(
            f"[yellow]Package manager exited with code {exit_code}[/yellow]"
        )
        raise SystemExit(exit_code)

    console.print("\n[bold green]Build pipeline ready.[/bold green]")


@main.command()
def check() -> None:
    """Check the current directory can be scaffolded (package.json, conflicts)."""
    catalog = _load_catalog()
    if not run_all_checks(Path.cwd(), catalog):
        raise SystemExit(1)


@main.command()
def templates() -> None:
    """List the bundled templates and where each one is written."""
    catalog = _load_catalog()

    table = Table(title="Templates")
    table.add_column("Template", style="cyan", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Destination")
    table.add_column("Placeholders", style="dim")

    for descriptor in catalog:
        destination = (
            "(structure)" if descriptor.is_captured else descriptor.destination_name
        )
        try:
            placeholders = ", ".join(find_placeholders(read_template(descriptor)))
        except (OSError, ValueError) as e:
            logger.warning("Could not read template %s: %s", descriptor.source, e)
            placeholders = "[red]unreadable[/red]"
        table.add_row(
            descriptor.name, descriptor.kind.value, destination, placeholders
        )

    console.print(table)
