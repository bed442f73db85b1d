"""Root ``lineup`` command.

Global flags become a LineupSettings instance, which AppContext carries
to every subcommand.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from lineup import __version__
from lineup.commands import register_commands
from lineup.commands._context import AppContext
from lineup.config.settings import LineupSettings


def _settings(
    config_path: str | None, root: Path | None, label: str | None, **flags: Any
) -> LineupSettings:
    if label is not None:
        flags["registry"] = {"label": label}
    try:
        return LineupSettings.from_cli(config_path=config_path, root=root, **flags)
    except ValidationError as exc:
        errors = "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors())
        raise click.ClickException(f"Invalid settings: {errors}") from exc


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="lineup")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print identifiers or totals only.")
@click.option("-v", "--verbose", is_flag=True, help="Show details and debug logging.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option("-c", "--config", "config_path", default=None, help="Path to a lineup.toml.")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory searched for lineup.toml and used for relative paths.",
)
@click.option("--label", default=None, help="Season or service-day label for this run.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    root: Path | None,
    label: str | None,
) -> None:
    """Build teams and pizzas under their category rules."""
    ctx.obj = AppContext(
        _settings(
            config_path,
            root,
            label,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
