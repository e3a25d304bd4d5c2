# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from tracklines.colour import COLOURS
from tracklines.model.ids import ChartableId, TrackableId
from tracklines.repository.configuration import CONFIGURATION_REPO
from tracklines.repository.user_data import USER_DATA_REPO
from tracklines.service import user_data as user_data_service
from tracklines.service.chartable import parse_multiplier
from tracklines.terminal.custom_typer import AliasedTyperGroup
from tracklines.terminal.errors import reported_errors
from tracklines.time import day_range, today
from tracklines.view.views import chartable as chartable_report
from tracklines.view.views import trackable as trackable_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _show(chartable_id: ChartableId) -> None:
    user_data = USER_DATA_REPO.get_user_data()
    chartable = user_data_service.get_chartable(user_data, chartable_id)
    days = day_range(today(), CONFIGURATION_REPO.get_config()["chart_days"])
    chartable_report.single_chartable_view(
        chartable_id, chartable, user_data["trackables"]["items"], days
    )


# ─────────────────────────────────────────────────────────────
# Chartable Management
# ─────────────────────────────────────────────────────────────


@app.command("add, a")
def add(
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    trackables: Annotated[
        Optional[list[int]],
        typer.Option(
            "--trackable", "-t", help="trackable to sum with multiplier 1 (repeatable)"
        ),
    ] = None,
) -> None:
    """Create a new chartable."""
    with reported_errors():
        user_data = USER_DATA_REPO.get_user_data()
        user_data, chartable_id = user_data_service.add_chartable(user_data)
        if name is not None:
            user_data = user_data_service.set_chartable_name(
                user_data, chartable_id, name
            )
        for trackable_id in trackables or []:
            user_data = user_data_service.add_chartable_trackable(
                user_data, chartable_id, TrackableId(trackable_id)
            )
        USER_DATA_REPO.commit(user_data)
        _show(chartable_id)


@app.command("list, ls")
def list_chartables() -> None:
    """List all chartables."""
    with reported_errors():
        user_data = USER_DATA_REPO.get_user_data()
    chartable_report.chartables_view(
        "chartables",
        user_data["chartables"]["items"],
        user_data["trackables"]["items"],
    )


@app.command("show, s", no_args_is_help=True)
def show(id: int) -> None:
    """Show a chartable, what it sums and its recent values."""
    with reported_errors():
        _show(ChartableId(id))


@app.command("name, n", no_args_is_help=True)
def name(id: int, name: str) -> None:
    with reported_errors():
        user_data = user_data_service.set_chartable_name(
            USER_DATA_REPO.get_user_data(), ChartableId(id), name
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartableId(id))


@app.command("colour, col", no_args_is_help=True)
def colour(
    id: int,
    colour: Annotated[
        Optional[str], typer.Argument(help=", ".join(COLOURS))
    ] = None,
    clear: Annotated[
        bool,
        typer.Option("--clear", help="Go back to the first trackable's colour"),
    ] = False,
) -> None:
    """
    Set the colour of a chartable summing more than one trackable.

    A chartable with a single trackable is always drawn in that trackable's colour.
    """
    if colour is None and not clear:
        typer.echo("Give a colour, or --clear to remove it.")
        raise typer.Exit(1)

    with reported_errors():
        user_data = user_data_service.set_chartable_colour(
            USER_DATA_REPO.get_user_data(),
            ChartableId(id),
            None if clear else colour,
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartableId(id))


@app.command("invert, i", no_args_is_help=True)
def invert(
    id: int,
    inverted: Annotated[bool, typer.Option("--on/--off")] = True,
) -> None:
    """Draw the chartable upside down, reflected about its highest value."""
    with reported_errors():
        user_data = user_data_service.set_chartable_inverted(
            USER_DATA_REPO.get_user_data(), ChartableId(id), inverted
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartableId(id))


@app.command("add-trackable, at", no_args_is_help=True)
def add_trackable(
    id: int,
    trackable_id: Annotated[
        Optional[int],
        typer.Argument(help="leave out to list the trackables that can be added"),
    ] = None,
    multiplier: Annotated[str, typer.Option("--multiplier", "-m")] = "1",
) -> None:
    """Add a trackable to the chartable's sum."""
    with reported_errors():
        user_data = USER_DATA_REPO.get_user_data()
        if trackable_id is None:
            trackable_report.trackables_view(
                "available trackables",
                user_data_service.available_sum_trackables(user_data, ChartableId(id)),
            )
            return

        user_data = user_data_service.add_chartable_trackable(
            user_data,
            ChartableId(id),
            TrackableId(trackable_id),
            parse_multiplier(multiplier),
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartableId(id))


@app.command("replace-trackable, rt", no_args_is_help=True)
def replace_trackable(id: int, old_trackable_id: int, new_trackable_id: int) -> None:
    """Swap one summed trackable for another, keeping its multiplier."""
    with reported_errors():
        user_data = user_data_service.replace_chartable_trackable(
            USER_DATA_REPO.get_user_data(),
            ChartableId(id),
            TrackableId(old_trackable_id),
            TrackableId(new_trackable_id),
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartableId(id))


@app.command("remove-trackable, rm", no_args_is_help=True)
def remove_trackable(id: int, trackable_id: int) -> None:
    with reported_errors():
        user_data = user_data_service.delete_chartable_trackable(
            USER_DATA_REPO.get_user_data(), ChartableId(id), TrackableId(trackable_id)
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartableId(id))


@app.command("multiplier, m", no_args_is_help=True)
def multiplier(id: int, trackable_id: int, multiplier: str) -> None:
    """Set the weight of a summed trackable. It must be greater than zero."""
    with reported_errors():
        user_data = user_data_service.set_chartable_multiplier(
            USER_DATA_REPO.get_user_data(),
            ChartableId(id),
            TrackableId(trackable_id),
            parse_multiplier(multiplier),
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartableId(id))


@app.command("delete, del", no_args_is_help=True)
def delete(id: int) -> None:
    """Delete a chartable that is not on any chart."""
    with reported_errors():
        user_data = user_data_service.delete_chartable(
            USER_DATA_REPO.get_user_data(), ChartableId(id)
        )
        USER_DATA_REPO.commit(user_data)
    typer.echo(f"Deleted chartable {id}")
