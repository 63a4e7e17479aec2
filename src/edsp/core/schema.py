"""Stanza schemas for EDSP records.

Single source of truth for how each record maps onto a stanza:

- which keys exist and in which order they are written
- which attribute each key fills and how its text is converted (value kind)
- which keys are required and which boolean defaults are left implicit

Both directions of the codec (`edsp.codecs.edsp`) are driven by these
tables, so reading and writing cannot drift apart.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable

from edsp.core.model import (
    Autoremove,
    Install,
    Package,
    Progress,
    Remove,
    Request,
    SolverError,
)
from edsp.core.relations import Dependency, VersionSet
from edsp.core.values import ArchQualifiedPackageName, format_bool, parse_bool
from edsp.core.version import Version

_INT_RE = re.compile(r"-?[0-9]+")


def _parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"expected an integer, got {text!r}")
    return int(text)


@dataclass(frozen=True)
class ValueKind:
    """Text conversion for one kind of field value.

    ``separator`` is None for scalar fields; list fields are split on it
    (``" "`` for whitespace-separated words, ``","`` for comma lists) and
    ``parse``/``format`` then apply per item.
    """

    parse: Callable[[str], Any]
    format: Callable[[Any], str]
    separator: str | None = None


VALUE_KINDS: dict[str, ValueKind] = {
    "str": ValueKind(str, str),
    "int": ValueKind(_parse_int, str),
    "bool": ValueKind(parse_bool, format_bool),
    "version": ValueKind(Version, str),
    "words": ValueKind(str, str, separator=" "),
    "packages": ValueKind(ArchQualifiedPackageName.parse, str, separator=" "),
    "dependencies": ValueKind(Dependency.parse, str, separator=","),
    "version_sets": ValueKind(VersionSet.parse, str, separator=","),
}


@dataclass(frozen=True)
class FieldSpec:
    key: str
    attr: str
    kind: str = "str"
    required: bool = False
    default: Any = None

    def __post_init__(self) -> None:
        if self.kind not in VALUE_KINDS:
            raise ValueError(f"FieldSpec {self.key}: unknown value kind {self.kind!r}")


def _flag(key: str, attr: str, default: bool = False) -> FieldSpec:
    return FieldSpec(key, attr, "bool", default=default)


def _action_fields(key: str, attr: str) -> tuple[FieldSpec, ...]:
    return (
        FieldSpec(key, attr, required=True),
        FieldSpec("Package", "package"),
        FieldSpec("Version", "version", "version"),
        FieldSpec("Architecture", "architecture"),
    )


# Stanza key order is the write order.
STANZA_SCHEMAS: dict[type, tuple[FieldSpec, ...]] = {
    Request: (
        FieldSpec("Request", "request", required=True),
        FieldSpec("Architecture", "architecture", required=True),
        FieldSpec("Architectures", "architectures", "words"),
        FieldSpec("Install", "install", "packages"),
        FieldSpec("Remove", "remove", "packages"),
        _flag("Upgrade-All", "upgrade_all"),
        _flag("Dist-Upgrade", "dist_upgrade"),
        _flag("Upgrade", "upgrade"),
        _flag("Autoremove", "autoremove"),
        _flag("Strict-Pinning", "strict_pinning", default=True),
        _flag("Forbid-New-Install", "forbid_new_install"),
        _flag("Forbid-Remove", "forbid_remove"),
        FieldSpec("Solver", "solver"),
    ),
    Package: (
        FieldSpec("Package", "package", required=True),
        FieldSpec("Version", "version", "version", required=True),
        FieldSpec("Architecture", "architecture", required=True),
        _flag("Installed", "installed"),
        _flag("Hold", "hold"),
        FieldSpec("APT-ID", "apt_id", required=True),
        FieldSpec("APT-Pin", "apt_pin", "int", required=True),
        _flag("APT-Candidate", "candidate"),
        _flag("APT-Automatic", "automatic"),
        _flag("Essential", "essential"),
        FieldSpec("Multi-Arch", "multi_arch"),
        FieldSpec("Source", "source"),
        FieldSpec("Source-Version", "source_version", "version"),
        FieldSpec("Depends", "depends", "dependencies"),
        FieldSpec("Pre-Depends", "pre_depends", "dependencies"),
        FieldSpec("Conflicts", "conflicts", "version_sets"),
        FieldSpec("Breaks", "breaks", "version_sets"),
        FieldSpec("Provides", "provides", "version_sets"),
    ),
    Install: _action_fields("Install", "install"),
    Remove: _action_fields("Remove", "remove"),
    Autoremove: _action_fields("Autoremove", "autoremove"),
    SolverError: (
        FieldSpec("Error", "error", required=True),
        FieldSpec("Message", "message", required=True),
    ),
    Progress: (
        FieldSpec("Progress", "progress", required=True),
        FieldSpec("Percentage", "percentage", "int"),
        FieldSpec("Message", "message"),
    ),
}

# Answer stanzas are told apart by their first key.
ANSWER_KINDS: dict[str, type] = {
    "install": Install,
    "remove": Remove,
    "autoremove": Autoremove,
    "error": SolverError,
    "progress": Progress,
}
