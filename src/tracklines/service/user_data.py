# SPDX-License-Identifier: MIT

"""
Edits to the user's data.

Every edit takes the whole UserData and returns a new one; the value passed
in is never modified. An edit that is not allowed raises ValidationError (or
one of its subclasses) and produces nothing, so callers can keep showing the
data they had.

These functions are the only place references between trackables,
chartables and charts are created or removed, and they keep them intact:
a chartable can only sum trackables that exist and hold numbers, and nothing
that is still referenced can be deleted.
"""

import logging
from copy import deepcopy
from typing import Callable, Optional

from tracklines import ordered
from tracklines.colour import Colour, is_colour
from tracklines.error import (
    InUseError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from tracklines.model.chartable import Chartable
from tracklines.model.ids import ChartableId, ChartId, Day, TrackableId
from tracklines.model.line_chart import ChartDataKey, LineChart, TrackableEntryData
from tracklines.model.trackable import AnswerType, Trackable
from tracklines.model.user_data import UserData
from tracklines.service import chartable as chartable_service
from tracklines.service import line_chart as line_chart_service
from tracklines.service import trackable as trackable_service
from tracklines.template.chartable import get_chartable_template
from tracklines.template.line_chart import get_line_chart_template
from tracklines.template.trackable import get_trackable_template

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
# Lookup
# ─────────────────────────────────────────────────────────────


def get_trackable(user_data: UserData, trackable_id: TrackableId) -> Trackable:
    trackable = ordered.get(user_data["trackables"]["items"], trackable_id)
    if trackable is None:
        raise NotFoundError(f"Trackable {trackable_id} does not exist.")
    return deepcopy(trackable)


def get_chartable(user_data: UserData, chartable_id: ChartableId) -> Chartable:
    chartable = ordered.get(user_data["chartables"]["items"], chartable_id)
    if chartable is None:
        raise NotFoundError(f"Chartable {chartable_id} does not exist.")
    return deepcopy(chartable)


def get_line_chart(user_data: UserData, chart_id: ChartId) -> LineChart:
    line_chart = ordered.get(user_data["line_charts"]["items"], chart_id)
    if line_chart is None:
        raise NotFoundError(f"Chart {chart_id} does not exist.")
    return deepcopy(line_chart)


def chartables_using_trackable(
    user_data: UserData, trackable_id: TrackableId
) -> list[ChartableId]:
    return [
        chartable_id
        for chartable_id, chartable in user_data["chartables"]["items"]
        if ordered.contains(chartable["sum"], trackable_id)
    ]


def charts_using_trackable(
    user_data: UserData, trackable_id: TrackableId
) -> list[ChartId]:
    return [
        chart_id
        for chart_id, line_chart in user_data["line_charts"]["items"]
        if line_chart_service.references_trackable(line_chart, trackable_id)
    ]


def charts_using_chartable(
    user_data: UserData, chartable_id: ChartableId
) -> list[ChartId]:
    return [
        chart_id
        for chart_id, line_chart in user_data["line_charts"]["items"]
        if line_chart_service.references_chartable(line_chart, chartable_id)
    ]


def _format_ids(ids: list[ChartableId] | list[ChartId]) -> str:
    return ", ".join(str(id) for id in ids)


# ─────────────────────────────────────────────────────────────
# Trackables
# ─────────────────────────────────────────────────────────────


def add_trackable(
    user_data: UserData, colour: Optional[Colour] = None
) -> tuple[UserData, TrackableId]:
    """Add an empty yes/no trackable."""
    updated = deepcopy(user_data)
    trackable_id = TrackableId(updated["trackables"]["next_id"])
    updated["trackables"]["next_id"] += 1
    updated["trackables"]["items"] = ordered.insert(
        updated["trackables"]["items"], trackable_id, get_trackable_template(colour)
    )
    logger.debug("Added trackable %s", trackable_id)
    return updated, trackable_id


def _update_trackable(
    user_data: UserData,
    trackable_id: TrackableId,
    fn: Callable[[Trackable], Trackable],
) -> UserData:
    trackable = fn(get_trackable(user_data, trackable_id))
    updated = deepcopy(user_data)
    updated["trackables"]["items"] = ordered.replace(
        updated["trackables"]["items"], trackable_id, trackable
    )
    return updated


def delete_trackable(user_data: UserData, trackable_id: TrackableId) -> UserData:
    """Delete a trackable that has no answers and is not used anywhere."""
    trackable = get_trackable(user_data, trackable_id)
    if trackable_service.has_answers(trackable):
        raise InUseError(
            f"Trackable {trackable_id} has answers and cannot be deleted."
        )
    chartable_ids = chartables_using_trackable(user_data, trackable_id)
    if len(chartable_ids) > 0:
        raise InUseError(
            f"Trackable {trackable_id} is summed by chartable(s) {_format_ids(chartable_ids)}."
        )
    chart_ids = charts_using_trackable(user_data, trackable_id)
    if len(chart_ids) > 0:
        raise InUseError(
            f"Trackable {trackable_id} is shown on chart(s) {_format_ids(chart_ids)}."
        )

    updated = deepcopy(user_data)
    updated["trackables"]["items"] = ordered.delete(
        updated["trackables"]["items"], trackable_id
    )
    logger.debug("Deleted trackable %s", trackable_id)
    return updated


def set_trackable_question(
    user_data: UserData, trackable_id: TrackableId, question: str
) -> UserData:
    def set_question(trackable: Trackable) -> Trackable:
        trackable["question"] = question
        return trackable

    return _update_trackable(user_data, trackable_id, set_question)


def _validate_colour(colour: str) -> Colour:
    if not is_colour(colour):
        raise ValidationError(f"Unknown colour: {colour}.")
    return colour


def set_trackable_colour(
    user_data: UserData, trackable_id: TrackableId, colour: str
) -> UserData:
    valid_colour = _validate_colour(colour)

    def set_colour(trackable: Trackable) -> Trackable:
        trackable["colour"] = valid_colour
        return trackable

    return _update_trackable(user_data, trackable_id, set_colour)


def set_trackable_answer_type(
    user_data: UserData, trackable_id: TrackableId, answer_type: AnswerType
) -> UserData:
    """
    Convert a trackable's answers to another type. A trackable that feeds a
    chartable or a chart has to stay numeric.
    """
    if answer_type == "text":
        chartable_ids = chartables_using_trackable(user_data, trackable_id)
        chart_ids = charts_using_trackable(user_data, trackable_id)
        if len(chartable_ids) > 0 or len(chart_ids) > 0:
            raise InUseError(
                f"Trackable {trackable_id} is charted and cannot hold text answers."
            )
    return _update_trackable(
        user_data,
        trackable_id,
        lambda trackable: trackable_service.convert_answer_type(trackable, answer_type),
    )


def update_trackable_response(
    user_data: UserData, trackable_id: TrackableId, day: Day, raw: str
) -> UserData:
    return _update_trackable(
        user_data,
        trackable_id,
        lambda trackable: trackable_service.update_response(trackable, day, raw),
    )


def update_trackable_scale_from(
    user_data: UserData, trackable_id: TrackableId, min: int
) -> UserData:
    return _update_trackable(
        user_data,
        trackable_id,
        lambda trackable: trackable_service.update_scale_from(trackable, min),
    )


def update_trackable_scale_to(
    user_data: UserData, trackable_id: TrackableId, max: int
) -> UserData:
    return _update_trackable(
        user_data,
        trackable_id,
        lambda trackable: trackable_service.update_scale_to(trackable, max),
    )


def update_trackable_scale(
    user_data: UserData,
    trackable_id: TrackableId,
    min: Optional[int] = None,
    max: Optional[int] = None,
) -> UserData:
    return _update_trackable(
        user_data,
        trackable_id,
        lambda trackable: trackable_service.update_scale_bounds(trackable, min, max),
    )


def add_trackable_icon(
    user_data: UserData, trackable_id: TrackableId, choice: str
) -> UserData:
    return _update_trackable(
        user_data,
        trackable_id,
        lambda trackable: trackable_service.add_icon(trackable, choice),
    )


def set_trackable_icon(
    user_data: UserData, trackable_id: TrackableId, index: int, choice: str
) -> UserData:
    return _update_trackable(
        user_data,
        trackable_id,
        lambda trackable: trackable_service.set_icon(trackable, index, choice),
    )


def delete_trackable_icon(
    user_data: UserData, trackable_id: TrackableId, index: int
) -> UserData:
    return _update_trackable(
        user_data,
        trackable_id,
        lambda trackable: trackable_service.delete_icon(trackable, index),
    )


# ─────────────────────────────────────────────────────────────
# Chartables
# ─────────────────────────────────────────────────────────────


def add_chartable(user_data: UserData) -> tuple[UserData, ChartableId]:
    """Add an unnamed chartable with an empty sum."""
    updated = deepcopy(user_data)
    chartable_id = ChartableId(updated["chartables"]["next_id"])
    updated["chartables"]["next_id"] += 1
    updated["chartables"]["items"] = ordered.insert(
        updated["chartables"]["items"], chartable_id, get_chartable_template()
    )
    logger.debug("Added chartable %s", chartable_id)
    return updated, chartable_id


def _update_chartable(
    user_data: UserData,
    chartable_id: ChartableId,
    fn: Callable[[Chartable], Chartable],
) -> UserData:
    chartable = fn(get_chartable(user_data, chartable_id))
    updated = deepcopy(user_data)
    updated["chartables"]["items"] = ordered.replace(
        updated["chartables"]["items"], chartable_id, chartable
    )
    return updated


def delete_chartable(user_data: UserData, chartable_id: ChartableId) -> UserData:
    get_chartable(user_data, chartable_id)
    chart_ids = charts_using_chartable(user_data, chartable_id)
    if len(chart_ids) > 0:
        raise InUseError(
            f"Chartable {chartable_id} is shown on chart(s) {_format_ids(chart_ids)}."
        )

    updated = deepcopy(user_data)
    updated["chartables"]["items"] = ordered.delete(
        updated["chartables"]["items"], chartable_id
    )
    logger.debug("Deleted chartable %s", chartable_id)
    return updated


def set_chartable_name(
    user_data: UserData, chartable_id: ChartableId, name: str
) -> UserData:
    def set_name(chartable: Chartable) -> Chartable:
        chartable["name"] = name
        return chartable

    return _update_chartable(user_data, chartable_id, set_name)


def set_chartable_colour(
    user_data: UserData, chartable_id: ChartableId, colour: Optional[str]
) -> UserData:
    """
    Set or clear the chartable's own colour. Only a chartable summing more
    than one trackable can have one; otherwise it shows its trackable's colour.
    """
    valid_colour = _validate_colour(colour) if colour is not None else None

    def set_colour(chartable: Chartable) -> Chartable:
        if valid_colour is not None and not chartable_service.colour_editable(
            chartable
        ):
            raise ValidationError(
                "Only a chartable summing more than one trackable has its own colour."
            )
        chartable["colour"] = valid_colour
        return chartable

    return _update_chartable(user_data, chartable_id, set_colour)


def set_chartable_inverted(
    user_data: UserData, chartable_id: ChartableId, inverted: bool
) -> UserData:
    def set_inverted(chartable: Chartable) -> Chartable:
        chartable["inverted"] = inverted
        return chartable

    return _update_chartable(user_data, chartable_id, set_inverted)


def _require_summable(user_data: UserData, trackable_id: TrackableId) -> None:
    trackable = get_trackable(user_data, trackable_id)
    if not trackable_service.is_numeric(trackable):
        raise ValidationError(
            f"Trackable {trackable_id} holds text answers and cannot be charted."
        )


def add_chartable_trackable(
    user_data: UserData,
    chartable_id: ChartableId,
    trackable_id: TrackableId,
    multiplier: float = 1.0,
) -> UserData:
    _require_summable(user_data, trackable_id)
    chartable_service.validate_multiplier(multiplier)

    def add(chartable: Chartable) -> Chartable:
        if ordered.contains(chartable["sum"], trackable_id):
            raise ValidationError(
                f"Trackable {trackable_id} is already part of this chartable."
            )
        chartable["sum"] = ordered.insert(chartable["sum"], trackable_id, multiplier)
        return chartable

    return _update_chartable(user_data, chartable_id, add)


def replace_chartable_trackable(
    user_data: UserData,
    chartable_id: ChartableId,
    old_trackable_id: TrackableId,
    new_trackable_id: TrackableId,
) -> UserData:
    """Swap one summed trackable for another, keeping its multiplier and position."""
    _require_summable(user_data, new_trackable_id)

    def replace(chartable: Chartable) -> Chartable:
        multiplier = ordered.get(chartable["sum"], old_trackable_id)
        if multiplier is None:
            raise NotFoundError(
                f"Trackable {old_trackable_id} is not part of this chartable."
            )
        if new_trackable_id != old_trackable_id and ordered.contains(
            chartable["sum"], new_trackable_id
        ):
            raise ValidationError(
                f"Trackable {new_trackable_id} is already part of this chartable."
            )
        chartable["sum"] = ordered.replace_key(
            chartable["sum"], old_trackable_id, new_trackable_id, multiplier
        )
        return chartable

    return _update_chartable(user_data, chartable_id, replace)


def delete_chartable_trackable(
    user_data: UserData, chartable_id: ChartableId, trackable_id: TrackableId
) -> UserData:
    def delete(chartable: Chartable) -> Chartable:
        if not ordered.contains(chartable["sum"], trackable_id):
            raise NotFoundError(
                f"Trackable {trackable_id} is not part of this chartable."
            )
        chartable["sum"] = ordered.delete(chartable["sum"], trackable_id)
        return chartable

    return _update_chartable(user_data, chartable_id, delete)


def set_chartable_multiplier(
    user_data: UserData,
    chartable_id: ChartableId,
    trackable_id: TrackableId,
    multiplier: float,
) -> UserData:
    chartable_service.validate_multiplier(multiplier)

    def set_multiplier(chartable: Chartable) -> Chartable:
        if not ordered.contains(chartable["sum"], trackable_id):
            raise NotFoundError(
                f"Trackable {trackable_id} is not part of this chartable."
            )
        chartable["sum"] = ordered.replace(chartable["sum"], trackable_id, multiplier)
        return chartable

    return _update_chartable(user_data, chartable_id, set_multiplier)


# ─────────────────────────────────────────────────────────────
# Charts
# ─────────────────────────────────────────────────────────────


def add_line_chart(user_data: UserData) -> tuple[UserData, ChartId]:
    updated = deepcopy(user_data)
    chart_id = ChartId(updated["line_charts"]["next_id"])
    updated["line_charts"]["next_id"] += 1
    updated["line_charts"]["items"] = ordered.insert(
        updated["line_charts"]["items"], chart_id, get_line_chart_template()
    )
    logger.debug("Added chart %s", chart_id)
    return updated, chart_id


def _update_line_chart(
    user_data: UserData,
    chart_id: ChartId,
    fn: Callable[[LineChart], LineChart],
) -> UserData:
    line_chart = fn(get_line_chart(user_data, chart_id))
    updated = deepcopy(user_data)
    updated["line_charts"]["items"] = ordered.replace(
        updated["line_charts"]["items"], chart_id, line_chart
    )
    return updated


def delete_line_chart(user_data: UserData, chart_id: ChartId) -> UserData:
    get_line_chart(user_data, chart_id)
    updated = deepcopy(user_data)
    updated["line_charts"]["items"] = ordered.delete(
        updated["line_charts"]["items"], chart_id
    )
    logger.debug("Deleted chart %s", chart_id)
    return updated


def set_line_chart_name(user_data: UserData, chart_id: ChartId, name: str) -> UserData:
    def set_name(line_chart: LineChart) -> LineChart:
        line_chart["name"] = name
        return line_chart

    return _update_line_chart(user_data, chart_id, set_name)


def set_line_chart_fill_lines(
    user_data: UserData, chart_id: ChartId, fill_lines: bool
) -> UserData:
    def set_fill_lines(line_chart: LineChart) -> LineChart:
        line_chart["fill_lines"] = fill_lines
        return line_chart

    return _update_line_chart(user_data, chart_id, set_fill_lines)


def add_line_chart_chartable(
    user_data: UserData,
    chart_id: ChartId,
    chartable_id: ChartableId,
    at_head: bool = True,
) -> UserData:
    get_chartable(user_data, chartable_id)
    return _update_line_chart(
        user_data,
        chart_id,
        lambda line_chart: line_chart_service.add_entry(
            line_chart, line_chart_service.chartable_entry_data(chartable_id), at_head
        ),
    )


def add_line_chart_trackable(
    user_data: UserData,
    chart_id: ChartId,
    trackable_id: TrackableId,
    at_head: bool = True,
) -> UserData:
    _require_summable(user_data, trackable_id)
    return _update_line_chart(
        user_data,
        chart_id,
        lambda line_chart: line_chart_service.add_entry(
            line_chart, line_chart_service.trackable_entry_data(trackable_id), at_head
        ),
    )


def delete_line_chart_entry(
    user_data: UserData, chart_id: ChartId, key: ChartDataKey
) -> UserData:
    """Remove an entry from this chart only; the chartable or trackable stays."""
    return _update_line_chart(
        user_data,
        chart_id,
        lambda line_chart: line_chart_service.delete_entry(line_chart, key),
    )


def move_line_chart_entry_up(
    user_data: UserData, chart_id: ChartId, key: ChartDataKey
) -> UserData:
    return _update_line_chart(
        user_data,
        chart_id,
        lambda line_chart: line_chart_service.move_entry_up(line_chart, key),
    )


def move_line_chart_entry_down(
    user_data: UserData, chart_id: ChartId, key: ChartDataKey
) -> UserData:
    return _update_line_chart(
        user_data,
        chart_id,
        lambda line_chart: line_chart_service.move_entry_down(line_chart, key),
    )


def toggle_line_chart_entry_visible(
    user_data: UserData, chart_id: ChartId, key: ChartDataKey
) -> UserData:
    return _update_line_chart(
        user_data,
        chart_id,
        lambda line_chart: line_chart_service.toggle_visible(line_chart, key),
    )


def _get_trackable_entry(
    line_chart: LineChart, trackable_id: TrackableId
) -> TrackableEntryData:
    entry = line_chart_service.get_entry(line_chart, ("trackable", trackable_id))
    data = entry["data"]
    if data["kind"] != "trackable":
        raise NotFoundError(f"The chart has no trackable {trackable_id}.")
    return data


def set_line_chart_trackable_multiplier(
    user_data: UserData,
    chart_id: ChartId,
    trackable_id: TrackableId,
    multiplier: float,
) -> UserData:
    chartable_service.validate_multiplier(multiplier)

    def set_multiplier(line_chart: LineChart) -> LineChart:
        data = _get_trackable_entry(line_chart, trackable_id)
        data["multiplier"] = multiplier
        return line_chart_service.replace_entry_data(
            line_chart, ("trackable", trackable_id), data
        )

    return _update_line_chart(user_data, chart_id, set_multiplier)


def set_line_chart_trackable_inverted(
    user_data: UserData,
    chart_id: ChartId,
    trackable_id: TrackableId,
    inverted: bool,
) -> UserData:
    def set_inverted(line_chart: LineChart) -> LineChart:
        data = _get_trackable_entry(line_chart, trackable_id)
        data["inverted"] = inverted
        return line_chart_service.replace_entry_data(
            line_chart, ("trackable", trackable_id), data
        )

    return _update_line_chart(user_data, chart_id, set_inverted)


def convert_line_chart_entry_to_chartable(
    user_data: UserData, chart_id: ChartId, trackable_id: TrackableId
) -> tuple[UserData, ChartableId]:
    """
    Turn a trackable shown directly on a chart into a chartable holding that
    one weighted trackable, in the same place on the chart.
    """
    line_chart = get_line_chart(user_data, chart_id)
    data = _get_trackable_entry(line_chart, trackable_id)
    trackable = get_trackable(user_data, trackable_id)

    updated, chartable_id = add_chartable(user_data)
    updated = set_chartable_name(updated, chartable_id, trackable["question"])
    updated = add_chartable_trackable(
        updated, chartable_id, trackable_id, data["multiplier"]
    )
    updated = set_chartable_inverted(updated, chartable_id, data["inverted"])
    updated = _update_line_chart(
        updated,
        chart_id,
        lambda line_chart: line_chart_service.replace_entry_data(
            line_chart,
            ("trackable", trackable_id),
            line_chart_service.chartable_entry_data(chartable_id),
        ),
    )
    return updated, chartable_id


def convert_line_chart_entry_to_trackable(
    user_data: UserData, chart_id: ChartId, chartable_id: ChartableId
) -> UserData:
    """
    Show a single-trackable chartable's trackable directly instead, with the
    same multiplier and inversion. The chartable itself is kept.
    """
    line_chart = get_line_chart(user_data, chart_id)
    line_chart_service.get_entry(line_chart, ("chartable", chartable_id))
    chartable = get_chartable(user_data, chartable_id)
    if len(chartable["sum"]) != 1:
        raise ValidationError(
            "Only a chartable summing exactly one trackable can be shown as a trackable."
        )
    trackable_id, multiplier = chartable["sum"][0]
    return _update_line_chart(
        user_data,
        chart_id,
        lambda line_chart: line_chart_service.replace_entry_data(
            line_chart,
            ("chartable", chartable_id),
            line_chart_service.trackable_entry_data(
                trackable_id, multiplier, chartable["inverted"]
            ),
        ),
    )


# ─────────────────────────────────────────────────────────────
# Pickers
# ─────────────────────────────────────────────────────────────


def available_sum_trackables(
    user_data: UserData, chartable_id: ChartableId
) -> list[tuple[TrackableId, Trackable]]:
    """Numeric trackables not yet in the chartable's sum, sorted by question."""
    chartable = get_chartable(user_data, chartable_id)
    candidates = [
        (trackable_id, trackable)
        for trackable_id, trackable in user_data["trackables"]["items"]
        if trackable_service.is_numeric(trackable)
        and not ordered.contains(chartable["sum"], trackable_id)
    ]
    return deepcopy(
        sorted(
            candidates,
            key=lambda pair: chartable_service.sort_key(
                trackable_service.display_question(pair[1])
            ),
        )
    )


def available_chart_chartables(
    user_data: UserData, chart_id: ChartId
) -> list[tuple[ChartableId, Chartable]]:
    """Chartables not yet on the chart, sorted by name."""
    line_chart = get_line_chart(user_data, chart_id)
    candidates = [
        (chartable_id, chartable)
        for chartable_id, chartable in user_data["chartables"]["items"]
        if not line_chart_service.references_chartable(line_chart, chartable_id)
    ]
    return deepcopy(
        sorted(
            candidates,
            key=lambda pair: chartable_service.sort_key(
                chartable_service.display_name(pair[1])
            ),
        )
    )


def available_chart_trackables(
    user_data: UserData, chart_id: ChartId
) -> list[tuple[TrackableId, Trackable]]:
    """Numeric trackables not yet shown directly on the chart, sorted by question."""
    line_chart = get_line_chart(user_data, chart_id)
    candidates = [
        (trackable_id, trackable)
        for trackable_id, trackable in user_data["trackables"]["items"]
        if trackable_service.is_numeric(trackable)
        and not line_chart_service.references_trackable(line_chart, trackable_id)
    ]
    return deepcopy(
        sorted(
            candidates,
            key=lambda pair: chartable_service.sort_key(
                trackable_service.display_question(pair[1])
            ),
        )
    )


# ─────────────────────────────────────────────────────────────
# Integrity
# ─────────────────────────────────────────────────────────────


def check_integrity(user_data: UserData) -> list[ReferentialIntegrityError]:
    """List every reference to a trackable or chartable that does not exist."""
    trackable_ids = set(ordered.keys(user_data["trackables"]["items"]))
    chartable_ids = set(ordered.keys(user_data["chartables"]["items"]))
    violations: list[ReferentialIntegrityError] = []

    for chartable_id, chartable in user_data["chartables"]["items"]:
        for trackable_id in ordered.keys(chartable["sum"]):
            if trackable_id not in trackable_ids:
                violations.append(
                    ReferentialIntegrityError(
                        f"Chartable {chartable_id} sums missing trackable {trackable_id}."
                    )
                )

    for chart_id, line_chart in user_data["line_charts"]["items"]:
        for kind, id in ordered.keys(line_chart_service.entry_pairs(line_chart)):
            known = chartable_ids if kind == "chartable" else trackable_ids
            if id not in known:
                violations.append(
                    ReferentialIntegrityError(
                        f"Chart {chart_id} shows missing {kind} {id}."
                    )
                )

    return violations
