"""Project scaffolding: structure, template files and dependencies."""

from credlify.scaffold.errors import (
    ConflictError,
    ExistingProjectError,
    InstallError,
    MaterializeError,
    PreflightError,
    ScaffoldError,
    StageFailedError,
    StructureError,
)
from credlify.scaffold.files import ItemError, MaterializeReport, materialize_files
from credlify.scaffold.installer import (
    DEPENDENCY_GROUPS,
    DependencyGroup,
    install_dependencies,
)
from credlify.scaffold.pipeline import ScaffoldPipeline, ScaffoldResult, Stage
from credlify.scaffold.preflight import find_conflicts, run_all_checks, run_preflight
from credlify.scaffold.structure import build_structure

__all__ = [
    "ConflictError",
    "DEPENDENCY_GROUPS",
    "DependencyGroup",
    "ExistingProjectError",
    "InstallError",
    "ItemError",
    "MaterializeError",
    "MaterializeReport",
    "PreflightError",
    "ScaffoldError",
    "ScaffoldPipeline",
    "ScaffoldResult",
    "Stage",
    "StageFailedError",
    "StructureError",
    "build_structure",
    "find_conflicts",
    "install_dependencies",
    "materialize_files",
    "run_all_checks",
    "run_preflight",
]
