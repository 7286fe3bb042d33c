"""Scaffold pipeline: preflight, structure, files, dependencies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from credlify.config.resolver import resolve_config
from credlify.config.schema import ScaffoldSettings, UserInput
from credlify.console import console
from credlify.licenses import fetch_license_text
from credlify.scaffold.errors import ScaffoldError, StageFailedError
from credlify.scaffold.files import LicenseLookup, MaterializeReport, materialize_files
from credlify.scaffold.installer import DEPENDENCY_GROUPS, install_dependencies
from credlify.scaffold.preflight import run_preflight
from credlify.scaffold.structure import build_structure
from credlify.templates.base import TemplateDescriptor

logger = logging.getLogger(__name__)


class Stage(Enum):
    """Skippable pipeline stages, in execution order."""

    STRUCTURE = "structure"
    FILES = "files"
    DEPS = "deps"


SKIP_MESSAGES: dict[Stage, str] = {
    Stage.STRUCTURE: "Skipped project structure generation",
    Stage.FILES: "Skipped template file creation",
    Stage.DEPS: "Skipped dependency installation",
}

FAILURE_MESSAGES: dict[Stage, str] = {
    Stage.STRUCTURE: "Project structure generation failed",
    Stage.FILES: "Template file creation failed",
    Stage.DEPS: "Dependency installation failed",
}

# ScaffoldSettings field that enables each stage
STAGE_TOGGLES: dict[Stage, str] = {
    Stage.STRUCTURE: "dirs",
    Stage.FILES: "files",
    Stage.DEPS: "deps",
}


@dataclass
class ScaffoldResult:
    """What a completed pipeline run produced."""

    directories: list[Path] = field(default_factory=list)
    files: MaterializeReport | None = None
    install_exit_code: int | None = None  # None when the stage was skipped

    @property
    def structure_created(self) -> bool:
        return bool(self.directories)


class ScaffoldPipeline:
    """Runs the scaffold stages against one project root.

    Failures of individual files or directories are reported inside a stage;
    a stage that fails as a whole stops the pipeline with StageFailedError.
    Work done by earlier stages is left in place.
    """

    def __init__(
        self,
        root: Path,
        settings: ScaffoldSettings,
        catalog: list[TemplateDescriptor],
        license_lookup: LicenseLookup = fetch_license_text,
    ) -> None:
        self.root = root
        self.settings = settings
        self.catalog = catalog
        self._license_lookup = license_lookup

    def preflight(self) -> None:
        """Raise ManifestNotFoundError or ConflictError before any mutation."""
        run_preflight(self.root, self.catalog)

    def _enabled(self, stage: Stage) -> bool:
        enabled = getattr(self.settings, STAGE_TOGGLES[stage])
        # Unset toggles run the stage
        return enabled is None or bool(enabled)

    def _fail(self, stage: Stage, error: Exception) -> StageFailedError:
        logger.error("%s: %s", FAILURE_MESSAGES[stage], error)
        console.print(f"[red]{error}[/red]")
        console.print(f"[bold red]{FAILURE_MESSAGES[stage]}[/bold red]")
        return StageFailedError(stage.value, error)

    async def run(self, user_input: UserInput) -> ScaffoldResult:
        """Run structure, files and dependency stages in order.

        Raises StageFailedError when a stage fails; later stages do not run.
        """
        result = ScaffoldResult()
        config = resolve_config(user_input)

        if self._enabled(Stage.STRUCTURE):
            try:
                result.directories = await build_structure(self.root, config)
            except (ScaffoldError, OSError) as e:
                raise self._fail(Stage.STRUCTURE, e) from e
        else:
            console.print(SKIP_MESSAGES[Stage.STRUCTURE])

        if self._enabled(Stage.FILES):
            try:
                result.files = await materialize_files(
                    self.root,
                    user_input,
                    config,
                    self.catalog,
                    structure_created=result.structure_created,
                    license_lookup=self._license_lookup,
                )
            except (ScaffoldError, OSError) as e:
                raise self._fail(Stage.FILES, e) from e
        else:
            console.print(SKIP_MESSAGES[Stage.FILES])

        if self._enabled(Stage.DEPS):
            try:
                result.install_exit_code = await install_dependencies(
                    DEPENDENCY_GROUPS, self.settings.package_manager
                )
            except (ScaffoldError, OSError) as e:
                raise self._fail(Stage.DEPS, e) from e
        else:
            console.print(SKIP_MESSAGES[Stage.DEPS])

        return result
