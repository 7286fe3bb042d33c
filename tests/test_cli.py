"""Tests for the CLI."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from credlify import __version__
from credlify.cli import main


@pytest.fixture
def isolated_home(tmp_path: Path):
    """Keep the user's global settings out of CLI runs."""
    with patch(
        "credlify.config.loader.get_home_settings_path",
        return_value=tmp_path / "home" / "config.yaml",
    ):
        yield


def _write_manifest(path: Path, **fields: str) -> None:
    data = {"name": "demo-app", "description": "A demo app"}
    data.update(fields)
    (path / "package.json").write_text(json.dumps(data))


def test_cli_help() -> None:
    """Test that --help exits cleanly."""
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "credlify" in result.output.lower()


def test_cli_version() -> None:
    """Test that --version shows the version."""
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_templates_command() -> None:
    """Test that templates lists the bundled catalog."""
    runner = CliRunner()
    result = runner.invoke(main, ["templates"])
    assert result.exit_code == 0
    assert "gulpfile.babel.js" in result.output
    assert "captured" in result.output


def test_templates_command_unreadable_template() -> None:
    """Test that one unreadable template does not break the listing."""
    runner = CliRunner()
    with patch(
        "credlify.cli.read_template", side_effect=OSError("permission denied")
    ):
        result = runner.invoke(main, ["templates"])
    assert result.exit_code == 0
    assert "gulpfile.babel.js" in result.output
    assert "unreadable" in result.output


class TestInitCommand:
    """Tests for the init command."""

    def test_init_help(self) -> None:
        """Test that init --help shows help."""
        runner = CliRunner()
        result = runner.invoke(main, ["init", "--help"])
        assert result.exit_code == 0
        assert "--no-deps" in result.output

    def test_init_requires_manifest(self, tmp_path: Path, isolated_home) -> None:
        """Test that init refuses to run outside an npm package."""
        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(main, ["init", "-y"])

        assert result.exit_code == 1
        assert "npm init" in result.output

    def test_init_refuses_conflicts(self, tmp_path: Path, isolated_home) -> None:
        """Test that existing files abort the run before any prompt."""
        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
            _write_manifest(Path(cwd))
            Path(cwd, "webpack.config.js").write_text("// mine")
            Path(cwd, "LICENSE").write_text("mine")
            result = runner.invoke(main, ["init"])

            assert not Path(cwd, "src").exists()

        assert result.exit_code == 1
        assert "webpack.config.js" in result.output
        assert "LICENSE" in result.output

    def test_init_with_defaults(self, tmp_path: Path, isolated_home) -> None:
        """Test a non-interactive run without dependency installation."""
        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
            _write_manifest(Path(cwd))
            result = runner.invoke(main, ["init", "-y", "--no-deps"])

            assert Path(cwd, "src/js/node_modules/app/.gitkeep").is_file()
            assert Path(cwd, "dist/index.html").is_file()
            assert Path(cwd, "gulpfile.babel.js").is_file()

        assert result.exit_code == 0, result.output
        assert "Skipped dependency installation" in result.output

    def test_init_prompts(self, tmp_path: Path, isolated_home) -> None:
        """Test that answers typed at the prompts shape the project."""
        runner = CliRunner()
        answers = "source\nbuild\nscripts\n\n\n\nn\n"
        with runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
            _write_manifest(Path(cwd))
            result = runner.invoke(main, ["init", "--no-deps"], input=answers)

            assert Path(cwd, "source/scripts/node_modules/app").is_dir()
            assert Path(cwd, "build/index.html").is_file()
            gulpfile = Path(cwd, "gulpfile.babel.js").read_text()

        assert result.exit_code == 0, result.output
        assert "liveServer" not in gulpfile

    def test_init_local_settings_skip_stage(
        self, tmp_path: Path, isolated_home
    ) -> None:
        """Test that .credlify.yaml toggles stages and CLI flags override it."""
        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
            _write_manifest(Path(cwd))
            Path(cwd, ".credlify.yaml").write_text("dirs: false\ndeps: true\n")
            result = runner.invoke(main, ["init", "-y", "--no-deps"])

            assert not Path(cwd, "src").exists()
            assert Path(cwd, "config.json").is_file()

        assert result.exit_code == 0, result.output
        assert "Skipped project structure generation" in result.output

    def test_init_exit_code_from_installer(
        self, tmp_path: Path, isolated_home
    ) -> None:
        """Test that the installer's final exit code becomes the exit status."""
        runner = CliRunner()
        with (
            runner.isolated_filesystem(temp_dir=tmp_path) as cwd,
            patch(
                "credlify.scaffold.pipeline.install_dependencies",
                new=AsyncMock(return_value=3),
            ),
        ):
            _write_manifest(Path(cwd))
            result = runner.invoke(main, ["init", "-y"])

        assert result.exit_code == 3

    def test_init_stage_failure_exits(self, tmp_path: Path, isolated_home) -> None:
        """Test that an existing source directory stops the run with status 1."""
        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
            _write_manifest(Path(cwd))
            Path(cwd, "src").mkdir()
            result = runner.invoke(main, ["init", "-y", "--no-deps"])

            assert not Path(cwd, "gulpfile.babel.js").exists()

        assert result.exit_code == 1
        assert "Project structure generation failed" in result.output
