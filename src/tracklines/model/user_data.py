# SPDX-License-Identifier: MIT

from typing import TypedDict

from tracklines.model.chartable import Chartable
from tracklines.model.ids import ChartableId, ChartId, TrackableId
from tracklines.model.line_chart import LineChart
from tracklines.model.trackable import Trackable


class IdStore[K: int, V](TypedDict):
    next_id: int  # ids are handed out monotonically and never reused
    items: list[tuple[K, V]]


class UserData(TypedDict):
    trackables: IdStore[TrackableId, Trackable]
    chartables: IdStore[ChartableId, Chartable]
    line_charts: IdStore[ChartId, LineChart]
