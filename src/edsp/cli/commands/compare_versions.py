"""`edsp compare-versions` command.

Evaluates ``A OP B`` with Debian version ordering, like
``dpkg --compare-versions``:

- OP is a relation token (``<< <= = >= >>``) or its word form
  (``lt le eq ge gt``)
- exit code 0 when the relation holds, 1 when it does not
- malformed versions or operators are usage errors (exit code 2)
"""

from __future__ import annotations

import typer

from edsp.core.relations import Relation
from edsp.core.version import Version, VersionEpochError

_WORD_OPERATORS: dict[str, Relation] = {
    "lt": Relation.EARLIER,
    "le": Relation.EARLIER_EQUAL,
    "eq": Relation.EQUAL,
    "ge": Relation.LATER_EQUAL,
    "gt": Relation.LATER,
}


def parse_operator(op: str) -> Relation:
    if op in _WORD_OPERATORS:
        return _WORD_OPERATORS[op]
    return Relation.from_token(op)


def register(app: typer.Typer) -> None:
    @app.command("compare-versions")
    def compare_versions(
        a: str = typer.Argument(..., help="Left-hand version."),
        op: str = typer.Argument(..., help="Relation: << <= = >= >> or lt le eq ge gt."),
        b: str = typer.Argument(..., help="Right-hand version."),
    ) -> None:
        """Exit 0 if `A OP B` holds under Debian version ordering, else 1."""
        try:
            relation = parse_operator(op)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="OP") from e
        try:
            va, vb = Version(a), Version(b)
        except VersionEpochError as e:
            raise typer.BadParameter(str(e)) from e

        if not relation.compare(va, vb):
            raise typer.Exit(code=1)
