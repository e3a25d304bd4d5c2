# SPDX-License-Identifier: MIT

from typing import cast

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tracklines.colour import rich_style
from tracklines.model.ids import Day, TrackableId
from tracklines.model.trackable import IconData, ScaleData, Trackable
from tracklines.service.trackable import (
    display_question,
    format_answer,
    out_of_range_days,
)
from tracklines.time import day_to_display_str
from tracklines.view.views.header import header


def _range_str(trackable: Trackable) -> str:
    data = trackable["data"]
    if data["type"] == "scale":
        scale = cast(ScaleData, data)
        return f"{scale['min']}..{scale['max']}"
    if data["type"] == "icon":
        return ", ".join(
            f"{index}:{choice}"
            for index, choice in enumerate(cast(IconData, data)["choices"])
        )
    return ""


def trackables_view(
    report_name: str,
    trackables: list[tuple[TrackableId, Trackable]],
    use_colour: bool = True,
) -> None:
    """Display list of trackables in a table."""
    header(report_name)

    trackables_table = Table(box=box.SIMPLE)
    trackables_table.add_column("id")
    trackables_table.add_column("question")
    trackables_table.add_column("type")
    trackables_table.add_column("choices")
    trackables_table.add_column("answers", justify="right")

    for trackable_id, trackable in trackables:
        row = [
            str(trackable_id),
            escape(display_question(trackable)),
            trackable["data"]["type"],
            _range_str(trackable),
            str(len(trackable["data"]["answers"])),
        ]
        if use_colour:
            style = rich_style(trackable["colour"])
            row = [f"[{style}]{value}[/{style}]" for value in row]
        trackables_table.add_row(*row)

    console = Console()
    console.print(trackables_table)


def single_trackable_view(
    trackable_id: TrackableId,
    trackable: Trackable,
    days: list[Day],
) -> None:
    """
    Display one trackable with its answers for the given days.

    Scale answers that fall outside the current range are listed in a warning
    below the table; they are kept until the range is widened again.
    """
    header("trackable")

    trackable_table = Table(box=box.SIMPLE)
    trackable_table.add_column("property")
    trackable_table.add_column("value")

    style = rich_style(trackable["colour"])
    trackable_table.add_row("id", str(trackable_id))
    trackable_table.add_row("question", escape(display_question(trackable)))
    trackable_table.add_row("colour", f"[{style}]{trackable['colour']}[/{style}]")
    trackable_table.add_row("type", trackable["data"]["type"])
    if trackable["data"]["type"] == "scale":
        trackable_table.add_row("range", _range_str(trackable))
    if trackable["data"]["type"] == "icon":
        trackable_table.add_row("choices", _range_str(trackable))
    trackable_table.add_row("answers", str(len(trackable["data"]["answers"])))

    console = Console()
    console.print(trackable_table)

    if len(days) > 0:
        answers_table = Table(box=box.SIMPLE)
        answers_table.add_column("day")
        answers_table.add_column("answer")
        for day in reversed(days):
            answers_table.add_row(day_to_display_str(day), format_answer(trackable, day))
        console.print(answers_table)

    out_of_range = out_of_range_days(trackable)
    if len(out_of_range) > 0:
        console.print(
            f"[yellow]{len(out_of_range)} answer(s) outside the scale range: "
            + ", ".join(day_to_display_str(day) for day in out_of_range)
            + "[/yellow]"
        )
