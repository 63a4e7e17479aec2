"""EDSP CLI entrypoint.

Thin Typer application over the library: compare versions, parse relationship
fields, and inspect/validate scenario files written by APT.
"""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    name="edsp",
    add_completion=False,
    no_args_is_help=True,
    help="Inspect APT External Dependency Solver Protocol (EDSP) data.",
)


@app.callback()
def _callback(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="EDSP_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """EDSP CLI."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"unknown log level {log_level!r}", param_hint="--log-level")
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.command("version")
def version() -> None:
    """Print the installed apt-edsp version."""
    from edsp import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `edsp --help` is fast.
    """
    from edsp.cli.commands import compare_versions as compare_versions_cmd
    from edsp.cli.commands import inspect_scenario as inspect_scenario_cmd
    from edsp.cli.commands import parse_dep as parse_dep_cmd
    from edsp.cli.commands import validate_scenario as validate_scenario_cmd

    compare_versions_cmd.register(app)
    parse_dep_cmd.register(app)
    inspect_scenario_cmd.register(app)
    validate_scenario_cmd.register(app)


_register_commands()
