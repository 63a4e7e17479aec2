"""`edsp validate` command.

Validates an EDSP scenario on disk (``-`` for stdin):
- parses every stanza via `edsp.codecs.edsp.read_scenario`
- checks cross-stanza invariants via `edsp.core.validate.validate_scenario`
"""

from __future__ import annotations

import sys

import typer

from edsp.codecs.edsp import read_scenario
from edsp.core.validate import validate_scenario


def register(app: typer.Typer) -> None:
    @app.command("validate")
    def validate(
        scenario_path: str = typer.Argument(..., help="Path to an EDSP scenario, or '-' for stdin."),
    ) -> None:
        """Validate an EDSP scenario."""
        try:
            scenario = read_scenario(sys.stdin if scenario_path == "-" else scenario_path)
            validate_scenario(scenario)
        except (OSError, ValueError) as e:
            raise typer.BadParameter(str(e), param_hint="SCENARIO") from e

        typer.echo("OK")
