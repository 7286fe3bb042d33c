"""Tests for the scaffold pipeline."""

from dataclasses import replace
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from credlify.config.schema import DEFAULT_SETTINGS, ScaffoldSettings, UserInput
from credlify.scaffold.errors import MaterializeError, StageFailedError
from credlify.scaffold.pipeline import ScaffoldPipeline
from credlify.templates.base import TemplateDescriptor


def _pipeline(
    root: Path,
    catalog: list[TemplateDescriptor],
    license_lookup,
    **settings: object,
) -> ScaffoldPipeline:
    merged = DEFAULT_SETTINGS.merge(ScaffoldSettings(**settings))
    return ScaffoldPipeline(root, merged, catalog, license_lookup=license_lookup)


class TestScaffoldPipeline:
    """Tests for ScaffoldPipeline.run."""

    @pytest.mark.asyncio
    async def test_end_to_end(
        self,
        project_root: Path,
        user_input: UserInput,
        catalog: list[TemplateDescriptor],
        license_lookup,
    ) -> None:
        """Test a full run against an empty initialized package."""
        pipeline = _pipeline(project_root, catalog, license_lookup)
        pipeline.preflight()

        with patch(
            "credlify.scaffold.pipeline.install_dependencies",
            new=AsyncMock(return_value=0),
        ) as mock_install:
            result = await pipeline.run(user_input)

        assert (project_root / "source/scripts/node_modules/app/.gitkeep").is_file()
        assert (project_root / "build/index.html").is_file()
        assert (project_root / "gulpfile.babel.js").is_file()
        assert result.structure_created
        assert result.files is not None and result.files.ok
        assert result.install_exit_code == 0
        mock_install.assert_awaited_once()

        # Only config.json from the templates; no temporary config copies
        assert [p.name for p in project_root.glob("config*")] == ["config.json"]

    @pytest.mark.asyncio
    async def test_skipped_stages(
        self,
        project_root: Path,
        user_input: UserInput,
        catalog: list[TemplateDescriptor],
        license_lookup,
    ) -> None:
        """Test that disabled stages are skipped and later stages still run."""
        pipeline = _pipeline(
            project_root, catalog, license_lookup, dirs=False, deps=False
        )

        with patch(
            "credlify.scaffold.pipeline.install_dependencies", new=AsyncMock()
        ) as mock_install:
            result = await pipeline.run(user_input)

        mock_install.assert_not_awaited()
        assert not (project_root / "source").exists()
        assert (project_root / "gulpfile.babel.js").is_file()
        assert not result.structure_created
        assert result.install_exit_code is None

    @pytest.mark.asyncio
    async def test_structure_failure_stops_pipeline(
        self,
        project_root: Path,
        user_input: UserInput,
        catalog: list[TemplateDescriptor],
        license_lookup,
    ) -> None:
        """Test that later stages do not run after the structure stage fails."""
        (project_root / "source").mkdir()
        pipeline = _pipeline(project_root, catalog, license_lookup)

        with patch(
            "credlify.scaffold.pipeline.install_dependencies", new=AsyncMock()
        ) as mock_install:
            with pytest.raises(StageFailedError) as exc_info:
                await pipeline.run(user_input)

        assert exc_info.value.stage == "structure"
        assert not (project_root / "gulpfile.babel.js").exists()
        mock_install.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_deps_failure_keeps_files(
        self,
        project_root: Path,
        user_input: UserInput,
        catalog: list[TemplateDescriptor],
        license_lookup,
    ) -> None:
        """Test that a failed install leaves earlier stages' work in place."""
        pipeline = _pipeline(
            project_root,
            catalog,
            license_lookup,
            package_manager="credlify-no-such-npm",
        )

        with pytest.raises(StageFailedError) as exc_info:
            await pipeline.run(user_input)

        assert exc_info.value.stage == "deps"
        assert (project_root / "build/index.html").is_file()

    @pytest.mark.asyncio
    async def test_file_errors_do_not_stop_pipeline(
        self,
        project_root: Path,
        user_input: UserInput,
        catalog: list[TemplateDescriptor],
        license_lookup,
    ) -> None:
        """Test that per-file errors are reported and installation proceeds."""
        (project_root / "webpack.config.js").write_text("// mine")
        pipeline = _pipeline(project_root, catalog, license_lookup)

        with patch(
            "credlify.scaffold.pipeline.install_dependencies",
            new=AsyncMock(return_value=0),
        ) as mock_install:
            result = await pipeline.run(user_input)

        assert result.files is not None
        assert len(result.files.errors) == 1
        mock_install.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_file_stage_failure_stops_pipeline(
        self,
        project_root: Path,
        user_input: UserInput,
        catalog: list[TemplateDescriptor],
        license_lookup,
    ) -> None:
        """Test that installation does not run after the file stage fails."""
        without_index = [d for d in catalog if d.name != "__index.html"]
        pipeline = _pipeline(project_root, without_index, license_lookup)

        with patch(
            "credlify.scaffold.pipeline.install_dependencies", new=AsyncMock()
        ) as mock_install:
            with pytest.raises(StageFailedError) as exc_info:
                await pipeline.run(user_input)

        assert exc_info.value.stage == "files"
        assert isinstance(exc_info.value.__cause__, MaterializeError)
        mock_install.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unencodable_answer_does_not_abort(
        self,
        project_root: Path,
        user_input: UserInput,
        catalog: list[TemplateDescriptor],
        license_lookup,
    ) -> None:
        """Test that a lone surrogate in an answer is one file error, not a crash."""
        pipeline = _pipeline(project_root, catalog, license_lookup)

        with patch(
            "credlify.scaffold.pipeline.install_dependencies",
            new=AsyncMock(return_value=0),
        ) as mock_install:
            result = await pipeline.run(
                replace(user_input, description="bad \ud800 text")
            )

        assert result.files is not None
        assert len(result.files.errors) == 1
        assert not (project_root / "build/index.html").exists()
        mock_install.assert_awaited_once()
