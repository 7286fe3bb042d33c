"""Interactive collection of scaffold answers."""

from dataclasses import replace

import click

from credlify.config.schema import (
    DEFAULT_SETTINGS,
    INVALID_PATH_PATTERN,
    ScaffoldSettings,
    ServerTask,
    UserInput,
    is_valid_rel_path,
)
from credlify.console import console
from credlify.licenses import infer_nearest_license
from credlify.manifest import PackageManifest
from credlify.paths import sanitize_rel_path
from credlify.templates.loader import SERVER_TASK_SNIPPET, read_snippet
from credlify.templates.render import render_placeholders

SERVER_IMPORT = 'import liveServer from "live-server";'
SERVER_TASK_NAME = ", server"

# (field, prompt text) in prompt order
PATH_PROMPTS: tuple[tuple[str, str], ...] = (
    ("src", "Source directory (relative to project root)"),
    ("dest", "Destination directory (relative to project root)"),
    ("src_js", "JavaScript source directory (relative to source)"),
    ("dest_js", "JavaScript bundle destination directory (relative to destination)"),
    ("src_sass", "SASS source directory (relative to source)"),
    ("dest_sass", "Stylesheet bundle destination directory (relative to destination)"),
)


def _path_value(value: object) -> str:
    """Sanitize and validate a prompted path, re-prompting on error."""
    path = sanitize_rel_path(value)
    if not path:
        raise click.BadParameter("Path may not be empty")
    if INVALID_PATH_PATTERN.search(path):
        raise click.BadParameter(
            'Path may not contain any of the following characters: '
            '\\:*?"<>| or newlines'
        )
    if not is_valid_rel_path(path):
        raise click.BadParameter("Path may not leave the project directory")
    return path


def prompt_user_input(
    settings: ScaffoldSettings,
    manifest: PackageManifest,
    assume_defaults: bool = False,
) -> UserInput:
    """Collect answers for a scaffold run.

    Args:
        settings: Merged settings; path and server_task fields are defaults.
        manifest: package.json fields for the app name, description and license.
        assume_defaults: If True, use the defaults without prompting.

    Returns a UserInput with the live server task resolved.
    """
    answers: dict[str, str] = {}
    for name, text in PATH_PROMPTS:
        default = getattr(settings, name) or getattr(DEFAULT_SETTINGS, name)
        if assume_defaults:
            answers[name] = _path_value(default)
        else:
            answers[name] = click.prompt(text, default=default, value_proc=_path_value)

    server_default = (
        settings.server_task
        if settings.server_task is not None
        else bool(DEFAULT_SETTINGS.server_task)
    )
    if assume_defaults:
        server_task = server_default
    else:
        server_task = click.confirm(
            "Add optional live server gulp task?", default=server_default
        )

    user_input = UserInput(
        **answers,
        server_task=server_task,
        app_name=manifest.name,
        description=manifest.description,
        license=infer_nearest_license(manifest),
    )
    return resolve_server_task(user_input)


def resolve_server_task(user_input: UserInput) -> UserInput:
    """Attach the rendered live server task when it was requested."""
    if not user_input.server_task:
        return replace(user_input, server=ServerTask())

    code = render_placeholders(
        read_snippet(SERVER_TASK_SNIPPET), user_input.placeholder_values()
    )
    return replace(
        user_input,
        server=ServerTask(
            code=code,
            import_line=SERVER_IMPORT,
            task_name=SERVER_TASK_NAME,
        ),
    )


def show_answers(user_input: UserInput) -> None:
    """Display the collected answers."""
    console.print("\n[bold]Project Configuration:[/bold]")
    for name, _text in PATH_PROMPTS:
        console.print(f"  {name}: {getattr(user_input, name)}")
    console.print(f"  server_task: {'yes' if user_input.server_task else 'no'}")
    console.print(f"  license: {user_input.license or '(none)'}")
