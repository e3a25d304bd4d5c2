# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from tracklines import configuration
from tracklines.repository.configuration import CONFIGURATION_REPO
from tracklines.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _enabled(value: bool) -> str:
    return "✓ Enabled" if value else "✗ Disabled"


def _config_table(title: Optional[str] = None) -> Table:
    config = CONFIGURATION_REPO.get_config()

    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "data_path",
        config["data_path"]
        if config["data_path"]
        else f"None ({configuration.DATA_PATH})",
    )
    table.add_row(
        "remote_url",
        config["remote_url"] if config["remote_url"] else "None (local file)",
    )
    table.add_row("request_timeout", str(config.get("request_timeout")))
    table.add_row("log_level", config["log_level"])
    table.add_row("show_header", _enabled(config["show_header"]))
    table.add_row("chart_days", str(config["chart_days"]))
    table.add_row(
        "random_colour_for_trackables",
        _enabled(config["random_colour_for_trackables"]),
    )
    table.add_row("new_entries_at_head", _enabled(config["new_entries_at_head"]))
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    console = Console()
    console.print(_config_table())

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory for the user data file (None = platform data directory)",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to None (use the platform data directory)",
        ),
    ] = False,
    remote_url: Annotated[
        Optional[str],
        typer.Option(
            "--remote-url",
            help="Server to load and save user data through, instead of the local file",
        ),
    ] = None,
    remove_remote_url: Annotated[
        bool,
        typer.Option("--remove-remote-url", help="Go back to the local file"),
    ] = False,
    request_timeout: Annotated[
        Optional[float],
        typer.Option("--request-timeout", help="Seconds to wait for the server"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help=", ".join(LOG_LEVELS)),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the header above views",
        ),
    ] = None,
    chart_days: Annotated[
        Optional[int],
        typer.Option("--chart-days", help="Number of days drawn by chart show"),
    ] = None,
    random_colour_for_trackables: Annotated[
        Optional[bool],
        typer.Option(
            "--random-colour-for-trackables/--no-random-colour-for-trackables",
            help="Enable/disable random colours for new trackables",
        ),
    ] = None,
    new_entries_at_head: Annotated[
        Optional[bool],
        typer.Option(
            "--new-entries-at-head/--new-entries-at-tail",
            help="Where entries added to a chart go",
        ),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    if log_level is not None:
        log_level = log_level.upper()
        if log_level not in LOG_LEVELS:
            typer.echo(
                f"Invalid log level: {log_level}. Valid options: {', '.join(LOG_LEVELS)}"
            )
            raise typer.Exit(1)
    if chart_days is not None and chart_days < 1:
        typer.echo("chart_days must be at least 1")
        raise typer.Exit(1)
    if request_timeout is not None and request_timeout <= 0:
        typer.echo("request_timeout must be greater than zero")
        raise typer.Exit(1)

    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        remote_url=remote_url,
        remove_remote_url=remove_remote_url,
        request_timeout=request_timeout,
        log_level=log_level,
        show_header=show_header,
        chart_days=chart_days,
        random_colour_for_trackables=random_colour_for_trackables,
        new_entries_at_head=new_entries_at_head,
    )
    CONFIGURATION_REPO.flush()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_config_table("Updated Configuration"))
