# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from tracklines.colour import DIMMED_STYLE
from tracklines.model.chart_view import ChartDataset
from tracklines.model.ids import ChartId, Day
from tracklines.model.line_chart import LineChart
from tracklines.service.line_chart import display_name, entry_pairs, format_entry_key
from tracklines.service.trackable import format_number
from tracklines.time import day_to_display_str, day_to_str
from tracklines.view.views.header import header

# Glyphs from lowest to highest value
FILL_GLYPHS = "▁▂▃▄▅▆▇█"
LINE_GLYPHS = "⎽⎼─⎻⎺"
NO_POINT_GLYPH = " "

NAME_COLUMN_WIDTH = 24


def value_range(
    datasets: list[ChartDataset], days: list[Day]
) -> Optional[tuple[float, float]]:
    """Lowest and highest value shown by the visible datasets in the window."""
    window = set(days)
    values = [
        value
        for dataset in datasets
        if dataset["visible"]
        for day, value in dataset["series"].items()
        if day in window
    ]
    if len(values) == 0:
        return None
    return min(values), max(values)


def glyph_for(value: float, low: float, high: float, fill_lines: bool) -> str:
    glyphs = FILL_GLYPHS if fill_lines else LINE_GLYPHS
    if high <= low:
        return glyphs[len(glyphs) // 2]
    level = round((value - low) / (high - low) * (len(glyphs) - 1))
    return glyphs[max(0, min(len(glyphs) - 1, level))]


def build_chart_row(
    dataset: ChartDataset,
    days: list[Day],
    window_range: Optional[tuple[float, float]],
    fill_lines: bool,
    name_width: int = NAME_COLUMN_WIDTH,
) -> Text:
    """
    One line of the chart: the dataset's name followed by one glyph per day.

    Days without a point are left blank. Hidden datasets keep their row so
    the chart does not jump around, but draw no points.
    """
    row = Text()
    style = dataset["display_colour"]

    name = dataset["name"]
    if len(name) > name_width:
        name = name[: name_width - 3] + "..."
    else:
        name = name.ljust(name_width)
    row.append(name, style=style)

    for i, day in enumerate(days):
        # Shade alternate weeks so days are easier to count
        bg_style = " on grey23" if (len(days) - 1 - i) // 7 % 2 == 1 else ""

        value = dataset["series"].get(day)
        if value is None or window_range is None or not dataset["visible"]:
            row.append(NO_POINT_GLYPH, style=bg_style.strip())
            continue
        low, high = window_range
        row.append(glyph_for(value, low, high, fill_lines), style=style + bg_style)

    if not dataset["visible"]:
        row.append("  hidden", style=DIMMED_STYLE)
    else:
        last_value = next(
            (dataset["series"][day] for day in reversed(days) if day in dataset["series"]),
            None,
        )
        if last_value is not None:
            row.append(f"  {format_number(last_value)}", style=style)
    return row


class TerminalLineChartRenderer:
    """Draws a chart as rows of glyphs, one row per dataset, in the terminal."""

    def __init__(
        self, console: Optional[Console] = None, name_width: int = NAME_COLUMN_WIDTH
    ) -> None:
        self.console = console if console is not None else Console()
        self.name_width = name_width

    def render(
        self,
        name: str,
        datasets: list[ChartDataset],
        days: list[Day],
        fill_lines: bool,
    ) -> None:
        self.console.print()
        self.console.print(Text(name, style="bold"))

        if len(datasets) == 0:
            self.console.print(Text("(no entries)", style=DIMMED_STYLE))
            return

        window_range = value_range(datasets, days)
        for dataset in datasets:
            self.console.print(
                build_chart_row(
                    dataset, days, window_range, fill_lines, self.name_width
                ),
                no_wrap=True,
                overflow="crop",
            )

        if len(days) > 0:
            axis = Text(" " * self.name_width)
            first, last = day_to_str(days[0]), day_to_str(days[-1])
            gap = len(days) - len(first) - len(last)
            if gap > 0:
                axis.append(first + " " * gap + last, style=DIMMED_STYLE)
            else:
                axis.append(f"{first} .. {last}", style=DIMMED_STYLE)
            self.console.print(axis, no_wrap=True, overflow="crop")

        if window_range is not None:
            low, high = window_range
            self.console.print(
                Text(
                    f"{' ' * self.name_width}range {format_number(low)} .. {format_number(high)}",
                    style=DIMMED_STYLE,
                )
            )


def line_charts_view(
    report_name: str, line_charts: list[tuple[ChartId, LineChart]]
) -> None:
    header(report_name)

    charts_table = Table(box=box.SIMPLE)
    charts_table.add_column("id")
    charts_table.add_column("name")
    charts_table.add_column("entries", justify="right")
    charts_table.add_column("fill")

    for chart_id, line_chart in line_charts:
        charts_table.add_row(
            str(chart_id),
            escape(display_name(line_chart)),
            str(len(line_chart["entries"])),
            "yes" if line_chart["fill_lines"] else "no",
        )

    console = Console()
    console.print(charts_table)


def chart_entries_view(line_chart: LineChart, datasets: list[ChartDataset]) -> None:
    """Table of a chart's entries, in draw order, with the key used to edit each one."""
    names = {dataset["key"]: dataset for dataset in datasets}

    entries_table = Table(box=box.SIMPLE)
    entries_table.add_column("key")
    entries_table.add_column("name")
    entries_table.add_column("visible")
    entries_table.add_column("multiplier", justify="right")
    entries_table.add_column("inverted")

    for key, entry in entry_pairs(line_chart):
        dataset = names.get(key)
        name = dataset["name"] if dataset is not None else ""
        style = dataset["display_colour"] if dataset is not None else DIMMED_STYLE
        data = entry["data"]
        multiplier = ""
        inverted = ""
        if data["kind"] == "trackable":
            multiplier = format_number(data["multiplier"])
            inverted = "yes" if data["inverted"] else ""
        entries_table.add_row(
            format_entry_key(key),
            f"[{style}]{escape(name)}[/{style}]",
            "yes" if entry["visible"] else "no",
            multiplier,
            inverted,
        )

    console = Console()
    console.print(entries_table)


def nearest_point_view(datasets: list[ChartDataset], day: Optional[Day]) -> None:
    """Show the values every selectable dataset has on the hit day."""
    console = Console()
    if day is None:
        console.print("No points to pick from.")
        return

    console.print(f"Nearest point: [bold]{day_to_display_str(day)}[/bold]")
    for dataset in datasets:
        if not dataset["selectable"] or day not in dataset["series"]:
            continue
        style = dataset["display_colour"]
        console.print(
            f"  [{style}]{escape(dataset['name'])}[/{style}]: "
            f"{format_number(dataset['series'][day])}"
        )
