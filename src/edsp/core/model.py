"""EDSP records.

Input side (APT -> solver): one `Request` stanza followed by the package
universe (`Package` stanzas), together a `Scenario`.

Output side (solver -> APT): `Install`, `Remove`, `Autoremove` actions, a
`SolverError`, or `Progress` reports.

Records are frozen dataclasses. Sequence fields are normalized to tuples;
fields the schema does not know end up in ``extra`` (stanza order kept).
Stanza keys, kinds and defaults live in `edsp.core.schema`.

This module must not import codecs/cli.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from edsp.core.relations import Dependency, VersionSet
from edsp.core.values import ArchQualifiedPackageName
from edsp.core.version import Version


def _norm_str(value: Any, *, where: str) -> str:
    """Normalize a required string: strip and reject empty/whitespace."""
    if not isinstance(value, str):
        raise ValueError(f"{where}: expected str, got {type(value).__name__}")
    s = value.strip()
    if not s:
        raise ValueError(f"{where}: must be a non-empty string")
    return s


def _as_version(value: Any, *, where: str) -> Version:
    if isinstance(value, Version):
        return value
    if isinstance(value, str):
        return Version(value)
    raise ValueError(f"{where}: expected Version or str, got {type(value).__name__}")


def _as_tuple(value: Any, item_type: type, *, where: str) -> tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes)):
        raise ValueError(f"{where}: expected a list/tuple, got {type(value).__name__}")
    items = tuple(value)
    for i, item in enumerate(items):
        if not isinstance(item, item_type):
            raise ValueError(f"{where}[{i}]: expected {item_type.__name__}, got {type(item).__name__}")
    return items


def _set(obj: object, name: str, value: Any) -> None:
    object.__setattr__(obj, name, value)


# ----------------------------
# Scenario (APT -> solver)
# ----------------------------


@dataclass(frozen=True)
class Request:
    """The first stanza of a scenario: what APT asks the solver to do."""

    request: str
    architecture: str
    architectures: tuple[str, ...] = ()
    install: tuple[ArchQualifiedPackageName, ...] = ()
    remove: tuple[ArchQualifiedPackageName, ...] = ()
    upgrade_all: bool = False
    dist_upgrade: bool = False
    upgrade: bool = False
    autoremove: bool = False
    strict_pinning: bool = True
    forbid_new_install: bool = False
    forbid_remove: bool = False
    solver: str | None = None
    extra: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _set(self, "request", _norm_str(self.request, where="Request.request"))
        _set(self, "architecture", _norm_str(self.architecture, where="Request.architecture"))
        _set(self, "architectures", _as_tuple(self.architectures, str, where="Request.architectures"))
        _set(self, "install", _as_tuple(self.install, ArchQualifiedPackageName, where="Request.install"))
        _set(self, "remove", _as_tuple(self.remove, ArchQualifiedPackageName, where="Request.remove"))
        _set(self, "extra", dict(self.extra))


@dataclass(frozen=True)
class Package:
    """One package version of the universe."""

    package: str
    version: Version
    architecture: str
    apt_id: str
    apt_pin: int
    installed: bool = False
    hold: bool = False
    candidate: bool = False
    automatic: bool = False
    essential: bool = False
    multi_arch: str | None = None
    source: str | None = None
    source_version: Version | None = None
    depends: tuple[Dependency, ...] = ()
    pre_depends: tuple[Dependency, ...] = ()
    conflicts: tuple[VersionSet, ...] = ()
    breaks: tuple[VersionSet, ...] = ()
    provides: tuple[VersionSet, ...] = ()
    extra: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _set(self, "package", _norm_str(self.package, where="Package.package"))
        _set(self, "version", _as_version(self.version, where="Package.version"))
        _set(self, "architecture", _norm_str(self.architecture, where="Package.architecture"))
        _set(self, "apt_id", _norm_str(self.apt_id, where="Package.apt_id"))
        if isinstance(self.apt_pin, bool) or not isinstance(self.apt_pin, int):
            raise ValueError(f"Package.apt_pin: expected int, got {type(self.apt_pin).__name__}")
        if self.source_version is not None:
            _set(self, "source_version", _as_version(self.source_version, where="Package.source_version"))
        for name in ("depends", "pre_depends"):
            _set(self, name, _as_tuple(getattr(self, name), Dependency, where=f"Package.{name}"))
        for name in ("conflicts", "breaks", "provides"):
            _set(self, name, _as_tuple(getattr(self, name), VersionSet, where=f"Package.{name}"))
        _set(self, "extra", dict(self.extra))

    @property
    def arch_qualified_name(self) -> ArchQualifiedPackageName:
        return ArchQualifiedPackageName(self.package, self.architecture)


@dataclass(frozen=True)
class Scenario:
    """A request plus the universe of packages it refers to."""

    request: Request
    universe: tuple[Package, ...] = ()

    def __post_init__(self) -> None:
        _set(self, "universe", _as_tuple(self.universe, Package, where="Scenario.universe"))

    def by_id(self, apt_id: str) -> Package:
        """Return the package with the given ``APT-ID``; KeyError if absent."""
        for pkg in self.universe:
            if pkg.apt_id == apt_id:
                return pkg
        raise KeyError(apt_id)


# ----------------------------
# Answer (solver -> APT)
# ----------------------------


def _normalize_action(obj: Any, id_attr: str) -> None:
    name = type(obj).__name__
    _set(obj, id_attr, _norm_str(getattr(obj, id_attr), where=f"{name}.{id_attr}"))
    if obj.version is not None:
        _set(obj, "version", _as_version(obj.version, where=f"{name}.version"))
    _set(obj, "extra", dict(obj.extra))


@dataclass(frozen=True)
class Install:
    """Install the package with the given ``APT-ID``.

    ``package``/``version``/``architecture`` are optional, informational
    copies of the referenced package's fields.
    """

    install: str
    package: str | None = None
    version: Version | None = None
    architecture: str | None = None
    extra: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _normalize_action(self, "install")


@dataclass(frozen=True)
class Remove:
    remove: str
    package: str | None = None
    version: Version | None = None
    architecture: str | None = None
    extra: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _normalize_action(self, "remove")


@dataclass(frozen=True)
class Autoremove:
    autoremove: str
    package: str | None = None
    version: Version | None = None
    architecture: str | None = None
    extra: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _normalize_action(self, "autoremove")


@dataclass(frozen=True)
class SolverError:
    """Reported instead of a solution when the solver gives up."""

    error: str
    message: str
    extra: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _set(self, "error", _norm_str(self.error, where="SolverError.error"))
        if not isinstance(self.message, str):
            raise ValueError(f"SolverError.message: expected str, got {type(self.message).__name__}")
        _set(self, "extra", dict(self.extra))


@dataclass(frozen=True)
class Progress:
    progress: str
    percentage: int | None = None
    message: str | None = None
    extra: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _set(self, "progress", _norm_str(self.progress, where="Progress.progress"))
        if self.percentage is not None and not 0 <= self.percentage <= 100:
            raise ValueError(f"Progress.percentage: expected 0..100, got {self.percentage}")
        _set(self, "extra", dict(self.extra))


AnswerRecord = Union[Install, Remove, Autoremove, SolverError, Progress]
