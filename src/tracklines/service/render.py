# SPDX-License-Identifier: MIT

import logging
from typing import Optional, Protocol

from tracklines import ordered
from tracklines.colour import DEFAULT_COLOUR, DIMMED_STYLE, Colour, rich_style
from tracklines.model.chart_view import ChartDataset, ChartViewState
from tracklines.model.ids import ChartId, Day
from tracklines.model.line_chart import ChartData, ChartDataKey
from tracklines.model.user_data import UserData
from tracklines.service import chartable as chartable_service
from tracklines.service import line_chart as line_chart_service
from tracklines.service import trackable as trackable_service
from tracklines.service.user_data import get_line_chart

logger = logging.getLogger(__name__)

MISSING_NAME = "[missing]"


class ChartRenderer(Protocol):
    """Anything that can draw a line chart from prepared datasets."""

    def render(
        self,
        name: str,
        datasets: list[ChartDataset],
        days: list[Day],
        fill_lines: bool,
    ) -> None: ...


def empty_view_state() -> ChartViewState:
    return {"hovered": None, "selected": None}


def hover(view_state: ChartViewState, key: Optional[ChartDataKey]) -> ChartViewState:
    return {"hovered": key, "selected": view_state["selected"]}


def select(view_state: ChartViewState, key: Optional[ChartDataKey]) -> ChartViewState:
    """Select an entry, or clear the selection when it is selected again."""
    selected = None if view_state["selected"] == key else key
    return {"hovered": view_state["hovered"], "selected": selected}


def entry_display_name(user_data: UserData, data: ChartData) -> str:
    if data["kind"] == "chartable":
        chartable = ordered.get(user_data["chartables"]["items"], data["chartable_id"])
        if chartable is None:
            return MISSING_NAME
        return chartable_service.display_name(chartable)
    trackable = ordered.get(user_data["trackables"]["items"], data["trackable_id"])
    if trackable is None:
        return MISSING_NAME
    return trackable_service.display_question(trackable)


def compute_entry_series(user_data: UserData, data: ChartData) -> dict[Day, float]:
    """
    Series for one chart entry. A trackable entry behaves like a chartable
    summing just that trackable with the entry's multiplier and inversion.
    """
    trackables = user_data["trackables"]["items"]
    if data["kind"] == "chartable":
        chartable = ordered.get(user_data["chartables"]["items"], data["chartable_id"])
        if chartable is None:
            logger.warning("Chart refers to missing chartable %s", data["chartable_id"])
            return {}
        return chartable_service.compute_series(chartable, trackables)

    series = chartable_service.sum_series(
        [(data["trackable_id"], data["multiplier"])], trackables
    )
    if data["inverted"]:
        return chartable_service.invert_series(series)
    return series


def resolve_entry_colour(user_data: UserData, data: ChartData) -> Colour:
    trackables = user_data["trackables"]["items"]
    if data["kind"] == "chartable":
        chartable = ordered.get(user_data["chartables"]["items"], data["chartable_id"])
        if chartable is None:
            return DEFAULT_COLOUR
        return chartable_service.resolve_colour(chartable, trackables)
    trackable = ordered.get(trackables, data["trackable_id"])
    if trackable is None:
        logger.warning("Chart refers to missing trackable %s", data["trackable_id"])
        return DEFAULT_COLOUR
    return trackable["colour"]


def display_colour(
    colour: Colour,
    key: ChartDataKey,
    visible: bool,
    view_state: ChartViewState,
) -> str:
    """
    Style to draw an entry with. Hidden entries, and entries other than the
    one hovered or selected, are drawn dimmed; the stored colour is untouched.
    """
    if not visible:
        return DIMMED_STYLE
    if view_state["hovered"] is not None and view_state["hovered"] != key:
        return DIMMED_STYLE
    if view_state["selected"] is not None and view_state["selected"] != key:
        return DIMMED_STYLE
    return rich_style(colour)


def build_datasets(
    user_data: UserData,
    chart_id: ChartId,
    view_state: Optional[ChartViewState] = None,
) -> list[ChartDataset]:
    if view_state is None:
        view_state = empty_view_state()

    line_chart = get_line_chart(user_data, chart_id)
    datasets: list[ChartDataset] = []
    for key, entry in line_chart_service.entry_pairs(line_chart):
        colour = resolve_entry_colour(user_data, entry["data"])
        datasets.append(
            {
                "key": key,
                "name": entry_display_name(user_data, entry["data"]),
                "series": compute_entry_series(user_data, entry["data"]),
                "colour": colour,
                "display_colour": display_colour(
                    colour, key, entry["visible"], view_state
                ),
                "visible": entry["visible"],
                "selectable": entry["visible"],
            }
        )
    return datasets


def nearest_point_hit(datasets: list[ChartDataset], day: Day) -> Optional[Day]:
    """The answered day closest to `day` across selectable datasets; earlier wins ties."""
    days = {
        point_day
        for dataset in datasets
        if dataset["selectable"]
        for point_day in dataset["series"]
    }
    if len(days) == 0:
        return None
    return min(days, key=lambda point_day: (abs(point_day - day), point_day))
