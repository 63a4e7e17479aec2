"""apt-edsp: data model of APT's External Dependency Solver Protocol (EDSP).

Core value types are Debian versions (`Version`) and relationship fields
(`VersionSet`, `Dependency`); `edsp.codecs.edsp` reads scenarios written by
APT and writes solver answers back. Solving itself is out of scope.
"""

from __future__ import annotations

from edsp.core import Dependency, Relation, Version, VersionSet
from edsp.codecs.edsp import read_scenario, write_answer

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Version",
    "Relation",
    "VersionSet",
    "Dependency",
    "read_scenario",
    "write_answer",
]
