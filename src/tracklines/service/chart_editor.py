# SPDX-License-Identifier: MIT

"""
Editing state for one chart.

A chart is either being browsed, having an entry added, or having one of its
entries opened for editing. At most one entry is open at a time. Deleting or
reordering entries always leaves the chart in the browsing state.
"""

from typing import Optional

from tracklines import ordered
from tracklines.error import ValidationError
from tracklines.model.chart_editor import (
    AddingChartable,
    EditingChartable,
    EditorState,
    NotEditing,
)
from tracklines.model.ids import ChartableId, ChartId, TrackableId
from tracklines.model.line_chart import ChartDataKey
from tracklines.model.user_data import UserData
from tracklines.service import user_data as user_data_service


def not_editing() -> NotEditing:
    return {"state": "not_editing"}


def start_adding(user_data: UserData, chart_id: ChartId) -> AddingChartable:
    """
    Begin adding an entry. The first chartable that is not already on the
    chart is suggested; with none left, a new chartable is suggested.
    """
    available = user_data_service.available_chart_chartables(user_data, chart_id)
    candidate: Optional[ChartDataKey] = None
    if len(available) > 0:
        candidate = ("chartable", available[0][0])
    return {"state": "adding", "candidate": candidate}


def select_candidate(
    editor: EditorState, candidate: Optional[ChartDataKey]
) -> AddingChartable:
    if editor["state"] != "adding":
        raise ValidationError("Not adding an entry.")
    return {"state": "adding", "candidate": candidate}


def cancel_adding(editor: EditorState) -> NotEditing:
    return not_editing()


def confirm_adding(
    editor: EditorState,
    user_data: UserData,
    chart_id: ChartId,
    at_head: bool = True,
) -> tuple[NotEditing, UserData]:
    """Add the chosen candidate to the chart, visible, creating a chartable if none was chosen."""
    if editor["state"] != "adding":
        raise ValidationError("Not adding an entry.")

    candidate = editor["candidate"]
    if candidate is None:
        updated, chartable_id = user_data_service.add_chartable(user_data)
        updated = user_data_service.add_line_chart_chartable(
            updated, chart_id, chartable_id, at_head
        )
    elif candidate[0] == "chartable":
        updated = user_data_service.add_line_chart_chartable(
            user_data, chart_id, ChartableId(candidate[1]), at_head
        )
    else:
        updated = user_data_service.add_line_chart_trackable(
            user_data, chart_id, TrackableId(candidate[1]), at_head
        )
    return not_editing(), updated


def toggle_editing(editor: EditorState, key: ChartDataKey) -> EditingChartable | NotEditing:
    """Open an entry for editing, closing any other; close it if it is already open."""
    if editor["state"] == "adding":
        raise ValidationError("Finish or cancel adding an entry first.")
    if editor["state"] == "editing" and editor["key"] == key:
        return not_editing()
    return {"state": "editing", "key": key, "expanded_trackable": None}


def toggle_trackable_row(
    editor: EditorState, user_data: UserData, trackable_id: TrackableId
) -> EditingChartable:
    """Expand or collapse one summed trackable under the open chartable."""
    if editor["state"] != "editing":
        raise ValidationError("No chart entry is open for editing.")
    kind, entry_id = editor["key"]
    if kind != "chartable":
        raise ValidationError("Only chartable entries have trackable rows.")
    chartable = user_data_service.get_chartable(user_data, ChartableId(entry_id))
    if not ordered.contains(chartable["sum"], trackable_id):
        raise ValidationError(
            f"Trackable {trackable_id} is not summed by chartable {entry_id}."
        )
    expanded = None if editor["expanded_trackable"] == trackable_id else trackable_id
    return {"state": "editing", "key": editor["key"], "expanded_trackable": expanded}


def delete_entry(
    editor: EditorState, user_data: UserData, chart_id: ChartId, key: ChartDataKey
) -> tuple[NotEditing, UserData]:
    if editor["state"] != "editing" or editor["key"] != key:
        raise ValidationError("Open the entry for editing before removing it.")
    updated = user_data_service.delete_line_chart_entry(user_data, chart_id, key)
    return not_editing(), updated


def move_entry_up(
    editor: EditorState, user_data: UserData, chart_id: ChartId, key: ChartDataKey
) -> tuple[NotEditing, UserData]:
    if editor["state"] == "adding":
        raise ValidationError("Finish or cancel adding an entry first.")
    updated = user_data_service.move_line_chart_entry_up(user_data, chart_id, key)
    return not_editing(), updated


def move_entry_down(
    editor: EditorState, user_data: UserData, chart_id: ChartId, key: ChartDataKey
) -> tuple[NotEditing, UserData]:
    if editor["state"] == "adding":
        raise ValidationError("Finish or cancel adding an entry first.")
    updated = user_data_service.move_line_chart_entry_down(user_data, chart_id, key)
    return not_editing(), updated
