"""Relationship fields: version sets and ``|`` alternations.

Grammar (one value of a ``Depends``/``Conflicts``/... field)::

    dependency   := version_set { "|" version_set }
    version_set  := package_name [ws] [ "(" [ws] relation [ws] version ")" [ws] ]
    package_name := 1+ characters, none of them whitespace, "(", "," or "|"
    relation     := "<<" | "<=" | "=" | ">=" | ">>"
    version      := 1+ characters up to the first ")", none of them ",", "|"
                    or a line break (trailing ws trimmed)

``str()`` of a parsed value is the canonical spelling, so canonical input
round-trips exactly: ``str(Dependency.parse(s)) == s``.

Comma-separated lists of these values belong to the stanza codec
(`edsp.codecs`), not to this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from edsp.core.version import Version, VersionEpochError

_WS = " \t"

# Separators of the enclosing field value: "," between list items, "|"
# between alternates.
_NAME_STOP = "(,|"
_VERSION_RESERVED = ",|\n"


class Relation(Enum):
    """Comparison operator of a version constraint (``a <relop> b``)."""

    EARLIER = "<<"
    EARLIER_EQUAL = "<="
    EQUAL = "="
    LATER_EQUAL = ">="
    LATER = ">>"

    @classmethod
    def from_token(cls, token: str) -> "Relation":
        try:
            return cls(token)
        except ValueError:
            raise ValueError(f"unknown relation {token!r}; expected one of {_RELATION_TOKENS}") from None

    def compare(self, a: Version, b: Version) -> bool:
        """Evaluate ``a <relop> b``."""
        res = a.compare(b)
        if self is Relation.EARLIER:
            return res < 0
        if self is Relation.EARLIER_EQUAL:
            return res <= 0
        if self is Relation.EQUAL:
            return res == 0
        if self is Relation.LATER_EQUAL:
            return res >= 0
        return res > 0

    def __str__(self) -> str:
        return self.value


_RELATION_TOKENS = ("<<", "<=", "=", ">=", ">>")


# ----------------------------
# Errors
# ----------------------------


class VersionSetError(ValueError):
    """Failure to parse a `VersionSet`; ``trace`` locates the failure."""

    label = "version set"

    def __init__(self, text: str, trace: str):
        self.text = text
        self.trace = trace
        super().__init__(f"Error parsing {self.label}:\n{trace}")


class EmptyPackageNameError(VersionSetError):
    label = "package name"


class BadConstraintSpecError(VersionSetError):
    label = "constraint spec"


class BadVersionError(VersionSetError):
    label = "version"

    def __init__(self, text: str, trace: str, inner: VersionEpochError):
        self.inner = inner
        super().__init__(text, f"{trace}\n{inner}")


class DependencyError(ValueError):
    """Failure to parse one clause of a `Dependency`.

    ``index`` is 0 for the mandatory first clause and 1..n for the alternates.
    """

    def __init__(self, index: int, error: VersionSetError):
        self.index = index
        self.error = error
        super().__init__(f"Error parsing alternate {index}: {error}")


# ----------------------------
# Scanning helpers
# ----------------------------


def _trace(text: str, pos: int, context: str, expected: str) -> str:
    return f"at column {pos + 1}, in {context}: expected {expected}\n{text}\n{' ' * pos}^"


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _WS:
        pos += 1
    return pos


def _take_package_name(text: str, pos: int) -> int:
    while pos < len(text) and not text[pos].isspace() and text[pos] not in _NAME_STOP:
        pos += 1
    return pos


def _take_relation(text: str, pos: int) -> tuple[Relation | None, int]:
    for token in _RELATION_TOKENS:
        if text.startswith(token, pos):
            return Relation(token), pos + len(token)
    return None, pos


def _bad_spec(text: str, pos: int, expected: str) -> BadConstraintSpecError:
    return BadConstraintSpecError(text, _trace(text, pos, "spec", expected))


def _parse_constraint(text: str, pos: int) -> tuple[Relation, Version]:
    if text[pos] != "(":
        raise _bad_spec(text, pos, "'('")
    pos = _skip_ws(text, pos + 1)

    relation, pos = _take_relation(text, pos)
    if relation is None:
        raise _bad_spec(text, pos, "a relation (one of " + ", ".join(_RELATION_TOKENS) + ")")
    pos = _skip_ws(text, pos)

    close = text.find(")", pos)
    if close == -1:
        raise _bad_spec(text, len(text), "')'")
    version_text = text[pos:close].rstrip(_WS)
    if not version_text:
        raise _bad_spec(text, pos, "a version")
    for i, c in enumerate(version_text):
        if c in _VERSION_RESERVED:
            raise _bad_spec(text, pos + i, "')'")

    end = _skip_ws(text, close + 1)
    if end != len(text):
        raise _bad_spec(text, end, "end of input")

    try:
        version = Version(version_text)
    except VersionEpochError as e:
        raise BadVersionError(text, _trace(text, pos, "version", "a valid version"), e) from e
    return relation, version


# ----------------------------
# Values
# ----------------------------


def _check_package_name(name: object, *, where: str) -> str:
    if not isinstance(name, str):
        raise ValueError(f"{where}: expected str, got {type(name).__name__}")
    if not name or _take_package_name(name, 0) != len(name):
        raise ValueError(f"{where}: invalid package name {name!r}")
    return name


def _check_constraint_version(text: str, *, where: str) -> None:
    # Must read back unchanged from "name (relop version)".
    if not text or text != text.strip(_WS) or any(c in _VERSION_RESERVED or c == ")" for c in text):
        raise ValueError(f"{where}: version {text!r} cannot be written in a relationship field")


@dataclass(frozen=True)
class VersionSet:
    """A package name with an optional ``(relation, version)`` constraint.

    Without a constraint the set holds every version of the package.
    """

    package: str
    constraint: tuple[Relation, Version] | None = None

    def __post_init__(self) -> None:
        _check_package_name(self.package, where="VersionSet.package")
        if self.constraint is not None:
            relation, version = self.constraint
            if not isinstance(relation, Relation) or not isinstance(version, Version):
                raise ValueError("VersionSet.constraint: expected (Relation, Version)")
            _check_constraint_version(str(version), where="VersionSet.constraint")
            object.__setattr__(self, "constraint", (relation, version))

    @classmethod
    def parse(cls, text: str) -> "VersionSet":
        end = _take_package_name(text, 0)
        if end == 0:
            raise EmptyPackageNameError(text, _trace(text, 0, "package name", "a package name"))
        package = text[:end]

        pos = _skip_ws(text, end)
        if pos == len(text):
            return cls(package)
        return cls(package, _parse_constraint(text, pos))

    @property
    def relation(self) -> Relation | None:
        return self.constraint[0] if self.constraint else None

    @property
    def version(self) -> Version | None:
        return self.constraint[1] if self.constraint else None

    def matches(self, version: Version | str) -> bool:
        """Whether ``version`` (of this package) lies in the set."""
        if self.constraint is None:
            return True
        relation, bound = self.constraint
        v = version if isinstance(version, Version) else Version(version)
        return relation.compare(v, bound)

    def __str__(self) -> str:
        if self.constraint is None:
            return self.package
        relation, version = self.constraint
        return f"{self.package} ({relation} {version})"


@dataclass(frozen=True)
class Dependency:
    """``first | alternate | ...``: satisfied by any one of its version sets."""

    first: VersionSet
    alternates: tuple[VersionSet, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.first, VersionSet):
            raise ValueError(f"Dependency.first: expected VersionSet, got {type(self.first).__name__}")
        alternates = tuple(self.alternates)
        for i, alt in enumerate(alternates):
            if not isinstance(alt, VersionSet):
                raise ValueError(f"Dependency.alternates[{i}]: expected VersionSet, got {type(alt).__name__}")
        object.__setattr__(self, "alternates", alternates)

    @classmethod
    def parse(cls, text: str) -> "Dependency":
        head, _, rest = text.partition("|")
        try:
            first = VersionSet.parse(head.strip())
        except VersionSetError as e:
            raise DependencyError(0, e) from e

        alternates: list[VersionSet] = []
        if rest:
            for i, piece in enumerate(rest.split("|"), start=1):
                try:
                    alternates.append(VersionSet.parse(piece.strip()))
                except VersionSetError as e:
                    raise DependencyError(i, e) from e
        return cls(first, tuple(alternates))

    @property
    def choices(self) -> tuple[VersionSet, ...]:
        return (self.first, *self.alternates)

    def __str__(self) -> str:
        return " | ".join(str(vs) for vs in self.choices)
