# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from tracklines.model.chart_editor import EditorState
from tracklines.model.ids import ChartableId, ChartId, TrackableId
from tracklines.repository.configuration import CONFIGURATION_REPO
from tracklines.repository.user_data import USER_DATA_REPO
from tracklines.service import chart_editor
from tracklines.service import user_data as user_data_service
from tracklines.service.chartable import parse_multiplier
from tracklines.service.line_chart import display_name
from tracklines.service.render import (
    build_datasets,
    empty_view_state,
    hover,
    nearest_point_hit,
    select,
)
from tracklines.terminal.custom_typer import AliasedTyperGroup
from tracklines.terminal.errors import reported_errors
from tracklines.terminal.parse import parse_day, parse_entry_key
from tracklines.time import day_range, today
from tracklines.view.views import chartable as chartable_report
from tracklines.view.views import line_chart as line_chart_report
from tracklines.view.views import trackable as trackable_report
from tracklines.view.views.header import header

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _show(
    chart_id: ChartId,
    days: Optional[int] = None,
    hovered: Optional[str] = None,
    selected: Optional[str] = None,
    day: Optional[str] = None,
) -> None:
    user_data = USER_DATA_REPO.get_user_data()
    line_chart = user_data_service.get_line_chart(user_data, chart_id)

    view_state = empty_view_state()
    if hovered is not None:
        view_state = hover(view_state, parse_entry_key(hovered))
    if selected is not None:
        view_state = select(view_state, parse_entry_key(selected))

    if days is None:
        days = CONFIGURATION_REPO.get_config()["chart_days"]
    datasets = build_datasets(user_data, chart_id, view_state)

    header("chart")
    line_chart_report.TerminalLineChartRenderer().render(
        display_name(line_chart),
        datasets,
        day_range(today(), days),
        line_chart["fill_lines"],
    )
    line_chart_report.chart_entries_view(line_chart, datasets)

    hit_day = parse_day(day)
    if hit_day is not None:
        line_chart_report.nearest_point_view(
            datasets, nearest_point_hit(datasets, hit_day)
        )


def _at_head() -> bool:
    return CONFIGURATION_REPO.get_config()["new_entries_at_head"]


# ─────────────────────────────────────────────────────────────
# Chart Management
# ─────────────────────────────────────────────────────────────


@app.command("add, a")
def add(
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    fill_lines: Annotated[
        bool, typer.Option("--fill/--no-fill", help="Fill the area under lines")
    ] = True,
) -> None:
    """Create a new, empty chart."""
    with reported_errors():
        user_data, chart_id = user_data_service.add_line_chart(
            USER_DATA_REPO.get_user_data()
        )
        if name is not None:
            user_data = user_data_service.set_line_chart_name(user_data, chart_id, name)
        if not fill_lines:
            user_data = user_data_service.set_line_chart_fill_lines(
                user_data, chart_id, False
            )
        USER_DATA_REPO.commit(user_data)
        _show(chart_id)


@app.command("list, ls")
def list_charts() -> None:
    """List all charts."""
    with reported_errors():
        user_data = USER_DATA_REPO.get_user_data()
    line_chart_report.line_charts_view("charts", user_data["line_charts"]["items"])


@app.command("show, s", no_args_is_help=True)
def show(
    id: int,
    days: Annotated[
        Optional[int], typer.Option("--days", help="How many days to draw")
    ] = None,
    hovered: Annotated[
        Optional[str],
        typer.Option("--hover", help="Entry key to highlight, e.g. c3 or t12"),
    ] = None,
    selected: Annotated[
        Optional[str],
        typer.Option("--select", help="Entry key to select, e.g. c3 or t12"),
    ] = None,
    day: Annotated[
        Optional[str],
        typer.Option(
            "--day", "-d", help="Report the values at the answered day nearest to this"
        ),
    ] = None,
) -> None:
    """Draw a chart."""
    if days is not None and days < 1:
        raise typer.BadParameter("--days must be at least 1")
    with reported_errors():
        _show(ChartId(id), days, hovered, selected, day)


@app.command("name, n", no_args_is_help=True)
def name(id: int, name: str) -> None:
    with reported_errors():
        user_data = user_data_service.set_line_chart_name(
            USER_DATA_REPO.get_user_data(), ChartId(id), name
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartId(id))


@app.command("fill, f", no_args_is_help=True)
def fill(
    id: int,
    fill_lines: Annotated[bool, typer.Option("--on/--off")] = True,
) -> None:
    """Switch filling the area under the chart's lines on or off."""
    with reported_errors():
        user_data = user_data_service.set_line_chart_fill_lines(
            USER_DATA_REPO.get_user_data(), ChartId(id), fill_lines
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartId(id))


@app.command("add-entry, ae", no_args_is_help=True)
def add_entry(
    id: int,
    chartable_id: Annotated[
        Optional[int], typer.Option("--chartable", "-c", help="Chartable to add")
    ] = None,
    trackable_id: Annotated[
        Optional[int],
        typer.Option("--trackable", "-t", help="Trackable to add directly"),
    ] = None,
    new: Annotated[
        bool, typer.Option("--new", help="Add a new, empty chartable")
    ] = False,
    list_available: Annotated[
        bool,
        typer.Option("--list", "-l", help="List what can be added and stop"),
    ] = False,
) -> None:
    """
    Add an entry to a chart.

    Without options, the first chartable not yet on the chart is added, or a
    new chartable when every chartable is already there.
    """
    if sum([chartable_id is not None, trackable_id is not None, new]) > 1:
        typer.echo("Choose at most one of --chartable, --trackable and --new.")
        raise typer.Exit(1)

    with reported_errors():
        user_data = USER_DATA_REPO.get_user_data()
        chart_id = ChartId(id)

        if list_available:
            chartable_report.chartables_view(
                "available chartables",
                user_data_service.available_chart_chartables(user_data, chart_id),
                user_data["trackables"]["items"],
            )
            trackable_report.trackables_view(
                "available trackables",
                user_data_service.available_chart_trackables(user_data, chart_id),
            )
            return

        editor: EditorState = chart_editor.start_adding(user_data, chart_id)
        if chartable_id is not None:
            editor = chart_editor.select_candidate(
                editor, ("chartable", ChartableId(chartable_id))
            )
        elif trackable_id is not None:
            editor = chart_editor.select_candidate(
                editor, ("trackable", TrackableId(trackable_id))
            )
        elif new:
            editor = chart_editor.select_candidate(editor, None)

        editor, user_data = chart_editor.confirm_adding(
            editor, user_data, chart_id, _at_head()
        )
        USER_DATA_REPO.commit(user_data)
        _show(chart_id)


@app.command("remove, rm", no_args_is_help=True)
def remove(
    id: int,
    key: Annotated[str, typer.Argument(help="Entry key, e.g. c3 or t12")],
) -> None:
    """Remove an entry from this chart. The chartable or trackable itself is kept."""
    entry_key = parse_entry_key(key)
    with reported_errors():
        editor = chart_editor.toggle_editing(chart_editor.not_editing(), entry_key)
        _, user_data = chart_editor.delete_entry(
            editor, USER_DATA_REPO.get_user_data(), ChartId(id), entry_key
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartId(id))


@app.command("up, u", no_args_is_help=True)
def up(
    id: int,
    key: Annotated[str, typer.Argument(help="Entry key, e.g. c3 or t12")],
) -> None:
    """Move an entry one place up. The first entry stays where it is."""
    entry_key = parse_entry_key(key)
    with reported_errors():
        _, user_data = chart_editor.move_entry_up(
            chart_editor.not_editing(),
            USER_DATA_REPO.get_user_data(),
            ChartId(id),
            entry_key,
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartId(id))


@app.command("down, d", no_args_is_help=True)
def down(
    id: int,
    key: Annotated[str, typer.Argument(help="Entry key, e.g. c3 or t12")],
) -> None:
    """Move an entry one place down. The last entry stays where it is."""
    entry_key = parse_entry_key(key)
    with reported_errors():
        _, user_data = chart_editor.move_entry_down(
            chart_editor.not_editing(),
            USER_DATA_REPO.get_user_data(),
            ChartId(id),
            entry_key,
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartId(id))


@app.command("toggle, tg", no_args_is_help=True)
def toggle(
    id: int,
    key: Annotated[str, typer.Argument(help="Entry key, e.g. c3 or t12")],
) -> None:
    """Show or hide an entry."""
    entry_key = parse_entry_key(key)
    with reported_errors():
        user_data = user_data_service.toggle_line_chart_entry_visible(
            USER_DATA_REPO.get_user_data(), ChartId(id), entry_key
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartId(id))


@app.command("multiplier, m", no_args_is_help=True)
def multiplier(id: int, trackable_id: int, multiplier: str) -> None:
    """Set the weight of a trackable shown directly on the chart."""
    with reported_errors():
        user_data = user_data_service.set_line_chart_trackable_multiplier(
            USER_DATA_REPO.get_user_data(),
            ChartId(id),
            TrackableId(trackable_id),
            parse_multiplier(multiplier),
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartId(id))


@app.command("invert, i", no_args_is_help=True)
def invert(
    id: int,
    trackable_id: int,
    inverted: Annotated[bool, typer.Option("--on/--off")] = True,
) -> None:
    """Invert a trackable shown directly on the chart."""
    with reported_errors():
        user_data = user_data_service.set_line_chart_trackable_inverted(
            USER_DATA_REPO.get_user_data(),
            ChartId(id),
            TrackableId(trackable_id),
            inverted,
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartId(id))


@app.command("to-chartable, tc", no_args_is_help=True)
def to_chartable(id: int, trackable_id: int) -> None:
    """Replace a trackable entry with a new chartable summing just that trackable."""
    with reported_errors():
        user_data, chartable_id = user_data_service.convert_line_chart_entry_to_chartable(
            USER_DATA_REPO.get_user_data(), ChartId(id), TrackableId(trackable_id)
        )
        USER_DATA_REPO.commit(user_data)
        typer.echo(f"Created chartable {chartable_id}")
        _show(ChartId(id))


@app.command("to-trackable, tt", no_args_is_help=True)
def to_trackable(id: int, chartable_id: int) -> None:
    """Show a single-trackable chartable's trackable directly instead."""
    with reported_errors():
        user_data = user_data_service.convert_line_chart_entry_to_trackable(
            USER_DATA_REPO.get_user_data(), ChartId(id), ChartableId(chartable_id)
        )
        USER_DATA_REPO.commit(user_data)
        _show(ChartId(id))


@app.command("delete, del", no_args_is_help=True)
def delete(id: int) -> None:
    """Delete a chart. Its chartables and trackables are kept."""
    with reported_errors():
        user_data = user_data_service.delete_line_chart(
            USER_DATA_REPO.get_user_data(), ChartId(id)
        )
        USER_DATA_REPO.commit(user_data)
    typer.echo(f"Deleted chart {id}")
