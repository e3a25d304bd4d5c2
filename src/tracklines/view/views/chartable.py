# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tracklines import ordered
from tracklines.colour import rich_style
from tracklines.model.chartable import Chartable
from tracklines.model.ids import ChartableId, Day, TrackableId
from tracklines.model.trackable import Trackable
from tracklines.service.chartable import (
    colour_editable,
    compute_series,
    display_name,
    resolve_colour,
)
from tracklines.service.render import MISSING_NAME
from tracklines.service.trackable import display_question, format_number
from tracklines.time import day_to_display_str
from tracklines.view.views.header import header


def chartables_view(
    report_name: str,
    chartables: list[tuple[ChartableId, Chartable]],
    trackables: list[tuple[TrackableId, Trackable]],
) -> None:
    """Display list of chartables in a table, each in its resolved colour."""
    header(report_name)

    chartables_table = Table(box=box.SIMPLE)
    chartables_table.add_column("id")
    chartables_table.add_column("name")
    chartables_table.add_column("trackables", justify="right")
    chartables_table.add_column("inverted")

    for chartable_id, chartable in chartables:
        style = rich_style(resolve_colour(chartable, trackables))
        row = [
            str(chartable_id),
            escape(display_name(chartable)),
            str(len(chartable["sum"])),
            "yes" if chartable["inverted"] else "",
        ]
        chartables_table.add_row(*[f"[{style}]{value}[/{style}]" for value in row])

    console = Console()
    console.print(chartables_table)


def single_chartable_view(
    chartable_id: ChartableId,
    chartable: Chartable,
    trackables: list[tuple[TrackableId, Trackable]],
    days: list[Day],
) -> None:
    header("chartable")

    colour = resolve_colour(chartable, trackables)
    style = rich_style(colour)
    if chartable["colour"] is not None and colour_editable(chartable):
        colour_str = f"[{style}]{colour}[/{style}]"
    else:
        colour_str = f"[{style}]{colour}[/{style}] (derived)"

    chartable_table = Table(box=box.SIMPLE)
    chartable_table.add_column("property")
    chartable_table.add_column("value")
    chartable_table.add_row("id", str(chartable_id))
    chartable_table.add_row("name", escape(display_name(chartable)))
    chartable_table.add_row("colour", colour_str)
    chartable_table.add_row("inverted", "yes" if chartable["inverted"] else "no")

    console = Console()
    console.print(chartable_table)

    sum_table = Table(box=box.SIMPLE, title="sum")
    sum_table.add_column("trackable")
    sum_table.add_column("question")
    sum_table.add_column("multiplier", justify="right")
    for trackable_id, multiplier in chartable["sum"]:
        trackable = ordered.get(trackables, trackable_id)
        question = MISSING_NAME if trackable is None else display_question(trackable)
        sum_table.add_row(str(trackable_id), escape(question), format_number(multiplier))
    console.print(sum_table)

    series = compute_series(chartable, trackables)
    shown_days = [day for day in days if day in series]
    if len(shown_days) > 0:
        series_table = Table(box=box.SIMPLE, title="series")
        series_table.add_column("day")
        series_table.add_column("value", justify="right")
        for day in reversed(shown_days):
            series_table.add_row(day_to_display_str(day), format_number(series[day]))
        console.print(series_table)
