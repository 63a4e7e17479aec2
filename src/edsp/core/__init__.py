"""EDSP core: versions, relationship grammar and record types.

This package is intentionally standalone and must not import CLI/codecs
to avoid circular dependencies.
"""

from __future__ import annotations

from .model import (
    AnswerRecord,
    Autoremove,
    Install,
    Package,
    Progress,
    Remove,
    Request,
    Scenario,
    SolverError,
)
from .relations import (
    BadConstraintSpecError,
    BadVersionError,
    Dependency,
    DependencyError,
    EmptyPackageNameError,
    Relation,
    VersionSet,
    VersionSetError,
)
from .validate import ScenarioValidationError, validate_scenario
from .values import ArchQualifiedPackageName, format_bool, parse_bool
from .version import Version, VersionEpochError, compare_versions

__all__ = [
    "Version",
    "VersionEpochError",
    "compare_versions",
    "Relation",
    "VersionSet",
    "Dependency",
    "VersionSetError",
    "EmptyPackageNameError",
    "BadConstraintSpecError",
    "BadVersionError",
    "DependencyError",
    "ArchQualifiedPackageName",
    "parse_bool",
    "format_bool",
    "Request",
    "Package",
    "Scenario",
    "Install",
    "Remove",
    "Autoremove",
    "SolverError",
    "Progress",
    "AnswerRecord",
    "ScenarioValidationError",
    "validate_scenario",
]
