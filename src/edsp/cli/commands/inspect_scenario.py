"""`edsp inspect` command.

Reads an EDSP scenario (``-`` for stdin) and prints:
- a short summary of the request stanza
- the universe as a canonical table (`edsp.core.tables.universe_table`)

``--csv`` writes the table to a file instead of printing it.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from edsp.codecs.edsp import read_scenario
from edsp.core.model import Request
from edsp.core.tables import universe_table


def _summary_lines(request: Request, n_packages: int, n_installed: int) -> list[str]:
    def names(items: tuple[object, ...]) -> str:
        return " ".join(str(i) for i in items) if items else "-"

    flags = [
        name
        for name, on in (
            ("upgrade-all", request.upgrade_all),
            ("dist-upgrade", request.dist_upgrade),
            ("upgrade", request.upgrade),
            ("autoremove", request.autoremove),
            ("forbid-new-install", request.forbid_new_install),
            ("forbid-remove", request.forbid_remove),
        )
        if on
    ]
    return [
        f"Request: {request.request}",
        f"Architecture: {request.architecture}",
        f"Install: {names(request.install)}",
        f"Remove: {names(request.remove)}",
        f"Flags: {' '.join(flags) if flags else '-'}",
        f"Packages: {n_packages} ({n_installed} installed)",
    ]


def register(app: typer.Typer) -> None:
    @app.command("inspect")
    def inspect(
        scenario_path: str = typer.Argument(..., help="Path to an EDSP scenario, or '-' for stdin."),
        csv: Optional[str] = typer.Option(None, "--csv", help="Write the universe table to this CSV path."),
        installed_only: bool = typer.Option(False, "--installed-only", help="Only list installed packages."),
    ) -> None:
        """Summarize an EDSP scenario and list its package universe."""
        try:
            scenario = read_scenario(sys.stdin if scenario_path == "-" else scenario_path)
        except (OSError, ValueError) as e:
            raise typer.BadParameter(str(e), param_hint="SCENARIO") from e

        n_installed = sum(1 for p in scenario.universe if p.installed)
        for line in _summary_lines(scenario.request, len(scenario.universe), n_installed):
            typer.echo(line)

        df = universe_table(scenario.universe)
        if installed_only:
            df = df[df["installed"]].reset_index(drop=True)

        if csv:
            out_path = Path(csv)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(out_path, index=False)
            typer.echo(str(out_path))
        elif not df.empty:
            typer.echo("")
            typer.echo(df.to_string(index=False))
