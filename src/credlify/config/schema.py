"""Configuration schema: settings, user input and project path layout."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from typing import Any

from credlify.paths import sanitize_rel_path

# Characters a user-supplied relative path may not contain
INVALID_PATH_PATTERN = re.compile(r'[\\:*?"<>|\n]')


def is_valid_rel_path(path: str) -> bool:
    """Check that a sanitized path is non-empty, relative and traversal-free."""
    if not path or path != sanitize_rel_path(path):
        return False
    if INVALID_PATH_PATTERN.search(path):
        return False
    return ".." not in path.split("/")


@dataclass
class ScaffoldSettings:
    """credlify settings schema.

    Stage toggles and the package manager correspond to `credlify init`
    options; the path and server_task fields are default prompt answers.
    None values indicate "not set" and will use defaults or be inherited.
    """

    # Stage toggles
    dirs: bool | None = None
    files: bool | None = None
    deps: bool | None = None

    # Package manager executable (npm by default)
    package_manager: str | None = None

    # Default prompt answers
    src: str | None = None
    dest: str | None = None
    src_js: str | None = None
    dest_js: str | None = None
    src_sass: str | None = None
    dest_sass: str | None = None
    server_task: bool | None = None

    def merge(self, other: ScaffoldSettings) -> ScaffoldSettings:
        """Merge another settings object into this one.

        Values from `other` take precedence when they are not None.
        Returns a new ScaffoldSettings instance.
        """
        merged: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(other, f.name)
            merged[f.name] = value if value is not None else getattr(self, f.name)
        return ScaffoldSettings(**merged)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScaffoldSettings:
        """Create settings from a dictionary.

        Unknown keys are ignored. Paths are sanitized and dropped when empty.
        """

        def _bool(key: str) -> bool | None:
            raw = data.get(key)
            return bool(raw) if raw is not None else None

        def _path(key: str) -> str | None:
            value = sanitize_rel_path(data.get(key))
            return value or None

        package_manager = data.get("package_manager")
        if not isinstance(package_manager, str) or not package_manager.strip():
            package_manager = None

        return cls(
            dirs=_bool("dirs"),
            files=_bool("files"),
            deps=_bool("deps"),
            package_manager=package_manager,
            src=_path("src"),
            dest=_path("dest"),
            src_js=_path("src_js"),
            dest_js=_path("dest_js"),
            src_sass=_path("src_sass"),
            dest_sass=_path("dest_sass"),
            server_task=_bool("server_task"),
        )


# Default settings (used when not specified anywhere)
DEFAULT_SETTINGS = ScaffoldSettings(
    dirs=True,
    files=True,
    deps=True,
    src="src",
    dest="dist",
    src_js="js",
    dest_js="assets/js",
    src_sass="sass",
    dest_sass="assets/css",
    server_task=True,
)


@dataclass(frozen=True)
class ServerTask:
    """Optional live server gulp task, empty when disabled."""

    code: str = ""
    import_line: str = ""
    task_name: str = ""  # appended to the default task's parallel list


@dataclass(frozen=True)
class UserInput:
    """Answers collected for one scaffold run.

    license_text and server are derived after collection and attached with
    dataclasses.replace.
    """

    src: str
    dest: str
    src_js: str
    dest_js: str
    src_sass: str
    dest_sass: str
    server_task: bool = False
    app_name: str = ""
    description: str = ""
    license: str = ""
    license_text: str = ""
    server: ServerTask = field(default_factory=ServerTask)

    def placeholder_values(self) -> dict[str, str]:
        """Values for template placeholders, keyed by placeholder name."""
        return {
            "src": self.src,
            "dest": self.dest,
            "src_js": self.src_js,
            "dest_js": self.dest_js,
            "src_sass": self.src_sass,
            "dest_sass": self.dest_sass,
            "app_name": self.app_name,
            "description": self.description,
            "license": self.license,
            "license_text": self.license_text,
            "server_task": self.server.code,
            "server_import": self.server.import_line,
            "server_task_name": self.server.task_name,
        }


@dataclass(frozen=True)
class ProjectConfig:
    """Project path layout, relative to the project root.

    An empty config (all fields "") stands for a failed resolution.
    """

    src_root: str = ""
    dest_root: str = ""
    src_js: str = ""
    src_sass: str = ""
    dest_js: str = ""
    dest_sass: str = ""

    @property
    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

    @classmethod
    def empty(cls) -> ProjectConfig:
        return cls()

    @classmethod
    def from_dict(cls, data: Any) -> ProjectConfig:
        """Create from parsed config template data.

        Expects ``{"path": {"src": {"root", "js", "sass"},
        "dest": {"root", "js", "sass"}}}``. Raises ValueError when the layout
        is missing a path or a path is not a safe relative path.
        """
        try:
            src = data["path"]["src"]
            dest = data["path"]["dest"]
            raw = {
                "src_root": src["root"],
                "src_js": src["js"],
                "src_sass": src["sass"],
                "dest_root": dest["root"],
                "dest_js": dest["js"],
                "dest_sass": dest["sass"],
            }
        except (KeyError, TypeError) as e:
            raise ValueError(f"Config is missing path entry: {e}") from e

        paths: dict[str, str] = {}
        for key, value in raw.items():
            path = sanitize_rel_path(value)
            if not is_valid_rel_path(path):
                raise ValueError(f"Config path '{key}' is invalid: {value!r}")
            paths[key] = path

        return cls(**paths)
