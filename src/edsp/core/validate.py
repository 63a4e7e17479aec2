"""Protocol-level validators for parsed scenarios.

Parsing (`edsp.codecs.edsp`) already enforces per-stanza shape: required
fields, value syntax. This module checks invariants that span stanzas:

- every ``APT-ID`` is unique within the universe
- at most one version per ``(package, architecture)`` is installed
- every ``Install``/``Remove`` entry of the request names a package of the
  universe (and its architecture, when qualified)

All violations are collected and reported together, in a deterministic order.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from edsp.core.model import Scenario
from edsp.core.values import ArchQualifiedPackageName


@dataclass(frozen=True)
class Violation:
    where: str
    message: str

    def __str__(self) -> str:
        return f"{self.where}: {self.message}"


class ScenarioValidationError(ValueError):
    """Raised by `validate_scenario` with every `Violation` it found.

    ``violations`` is sorted by ``(where, message)``; ``str()`` lists them one
    per line under a ``scenario validation failed:`` heading.
    """

    def __init__(self, violations: Iterable[Violation]):
        self.violations = sorted(violations, key=lambda item: (item.where, item.message))
        lines = [f"  - {item}" for item in self.violations] or ["  (no violations given)"]
        super().__init__("\n".join(["scenario validation failed:", *lines]))


def _check_unique_ids(scenario: Scenario, violations: list[Violation]) -> None:
    counts = Counter(pkg.apt_id for pkg in scenario.universe)
    for apt_id, n in sorted(counts.items()):
        if n > 1:
            violations.append(Violation("universe", f"APT-ID {apt_id!r} used by {n} packages"))


def _check_single_installed(scenario: Scenario, violations: list[Violation]) -> None:
    installed: dict[tuple[str, str], list[str]] = {}
    for pkg in scenario.universe:
        if pkg.installed:
            installed.setdefault((pkg.package, pkg.architecture), []).append(str(pkg.version))
    for (name, arch), versions in sorted(installed.items()):
        if len(versions) > 1:
            violations.append(
                Violation("universe", f"{name}:{arch}: {len(versions)} installed versions ({', '.join(versions)})")
            )


def _check_request_targets(scenario: Scenario, violations: list[Violation]) -> None:
    names = {pkg.package for pkg in scenario.universe}
    qualified = {pkg.arch_qualified_name for pkg in scenario.universe}

    for field_name, targets in (("Install", scenario.request.install), ("Remove", scenario.request.remove)):
        for target in targets:
            if target.architecture is None:
                found = target.name in names
            else:
                # Architecture "all" packages satisfy any qualifier.
                found = target in qualified or ArchQualifiedPackageName(target.name, "all") in qualified
            if not found:
                violations.append(Violation(f"request.{field_name}", f"{target} is not in the universe"))


def validate_scenario(scenario: Scenario) -> None:
    """Validate cross-stanza invariants of a scenario.

    Raises:
        ScenarioValidationError: listing every violation found.
    """
    if not isinstance(scenario, Scenario):
        raise TypeError(f"validate_scenario: expected Scenario, got {type(scenario).__name__}")

    violations: list[Violation] = []
    _check_unique_ids(scenario, violations)
    _check_single_installed(scenario, violations)
    _check_request_targets(scenario, violations)
    if violations:
        raise ScenarioValidationError(violations)
