# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

from tracklines.model.ids import TrackableId
from tracklines.model.line_chart import ChartDataKey


class NotEditing(TypedDict):
    state: Literal["not_editing"]


class AddingChartable(TypedDict):
    state: Literal["adding"]
    candidate: Optional[ChartDataKey]  # None creates a new blank chartable


class EditingChartable(TypedDict):
    state: Literal["editing"]
    key: ChartDataKey
    expanded_trackable: Optional[TrackableId]


type EditorState = NotEditing | AddingChartable | EditingChartable
