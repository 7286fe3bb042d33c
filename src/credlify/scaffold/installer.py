"""Build-tool dependency installation through the package manager."""

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass

from credlify.console import console
from credlify.scaffold.errors import InstallError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyGroup:
    """Packages installed together with one persistence flag."""

    name: str
    save_flag: str  # "--save" | "--save-dev"
    packages: tuple[str, ...]


RUNTIME_DEPENDENCIES = DependencyGroup(
    name="dependencies",
    save_flag="--save",
    packages=("@babel/runtime",),
)

DEV_DEPENDENCIES = DependencyGroup(
    name="devDependencies",
    save_flag="--save-dev",
    packages=(
        "@babel/core",
        "@babel/plugin-proposal-class-properties",
        "@babel/plugin-proposal-export-default-from",
        "@babel/plugin-proposal-object-rest-spread",
        "@babel/plugin-syntax-dynamic-import",
        "@babel/plugin-transform-async-to-generator",
        "@babel/plugin-transform-runtime",
        "@babel/preset-env",
        "@babel/register",
        "babel-loader",
        "babel-minify-webpack-plugin",
        "del",
        "gulp",
        "gulp-clean-css",
        "gulp-load-plugins",
        "gulp-plumber",
        "gulp-sass",
        "gulp-sourcemaps",
        "live-server",
        "minimist",
        "minimist-options",
        "webpack",
        "webpack-stream",
    ),
)

# Installed in this order
DEPENDENCY_GROUPS: tuple[DependencyGroup, ...] = (
    RUNTIME_DEPENDENCIES,
    DEV_DEPENDENCIES,
)


def default_package_manager() -> str:
    """Return the npm executable name for this platform."""
    return "npm.cmd" if sys.platform == "win32" else "npm"


def build_install_command(package_manager: str, group: DependencyGroup) -> list[str]:
    """Build the install command for one dependency group."""
    return [package_manager, "install", group.save_flag, *group.packages]


async def install_dependencies(
    groups: tuple[DependencyGroup, ...] = DEPENDENCY_GROUPS,
    package_manager: str | None = None,
) -> int:
    """Install each dependency group with one package manager call.

    Groups run one after another; the next starts only after the previous
    process exits. The process shares this terminal so installer output is
    visible. A non-zero exit code does not stop later groups.

    Returns the exit code of the last group (0 if there was nothing to
    install). Raises InstallError if the package manager cannot be started.
    """
    console.print("Installing dependencies...")

    executable = package_manager or default_package_manager()
    exit_code = 0

    for group in groups:
        if not group.packages:
            continue

        command = build_install_command(executable, group)
        logger.debug("Running %s", " ".join(command))

        try:
            process = await asyncio.create_subprocess_exec(*command)
        except OSError as e:
            raise InstallError(
                f"Could not run package manager '{executable}': {e}"
            ) from e

        exit_code = await process.wait()
        if exit_code != 0:
            logger.warning(
                "Installing %s exited with code %d", group.name, exit_code
            )

    return exit_code
