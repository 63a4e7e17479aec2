"""`edsp parse-dep` command.

Parses one relationship value (``foo (>= 1.0) | bar``) and prints one line
per choice: ``package<TAB>relation<TAB>version`` (relation and version empty
when unconstrained). ``--canonical`` prints the re-formatted value instead.
"""

from __future__ import annotations

import typer

from edsp.core.relations import Dependency, DependencyError


def register(app: typer.Typer) -> None:
    @app.command("parse-dep")
    def parse_dep(
        expr: str = typer.Argument(..., help="Dependency expression, e.g. 'foo (>= 1.0) | bar'."),
        canonical: bool = typer.Option(False, "--canonical", help="Print the canonical spelling instead."),
    ) -> None:
        """Parse a dependency expression and print its choices."""
        try:
            dep = Dependency.parse(expr)
        except DependencyError as e:
            raise typer.BadParameter(str(e), param_hint="EXPR") from e

        if canonical:
            typer.echo(str(dep))
            return
        for vs in dep.choices:
            relation = str(vs.relation) if vs.relation else ""
            version = str(vs.version) if vs.version else ""
            typer.echo(f"{vs.package}\t{relation}\t{version}")
