"""Shared fixtures for credlify tests."""

import json
from pathlib import Path

import pytest

from credlify.config.schema import ProjectConfig, UserInput
from credlify.templates import list_templates
from credlify.templates.base import TemplateDescriptor


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """An initialized npm package directory."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "package.json").write_text(
        json.dumps(
            {
                "name": "demo-app",
                "description": "A demo app",
                "license": "MIT",
            }
        )
    )
    return root


@pytest.fixture
def user_input() -> UserInput:
    """Answers matching the source/build/scripts layout."""
    return UserInput(
        src="source",
        dest="build",
        src_js="scripts",
        dest_js="assets/js",
        src_sass="styles",
        dest_sass="assets/css",
        app_name="demo-app",
        description="A demo app",
        license="MIT",
    )


@pytest.fixture
def project_config() -> ProjectConfig:
    """Path layout resolved from the user_input fixture."""
    return ProjectConfig(
        src_root="source",
        dest_root="build",
        src_js="source/scripts",
        src_sass="source/styles",
        dest_js="build/assets/js",
        dest_sass="build/assets/css",
    )


@pytest.fixture
def catalog() -> list[TemplateDescriptor]:
    """The bundled template catalog."""
    return list_templates()


@pytest.fixture
def license_lookup():
    """License lookup that never touches the network."""

    async def _lookup(identifier: str) -> str:
        return f"{identifier} License\n\nPermission is hereby granted..."

    return _lookup
