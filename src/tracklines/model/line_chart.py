# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

from tracklines.model.ids import ChartableId, TrackableId

ChartDataKind = Literal["chartable", "trackable"]

# Identity of an entry within a chart, e.g. ("chartable", 3)
type ChartDataKey = tuple[ChartDataKind, int]


class ChartableData(TypedDict):
    kind: Literal["chartable"]
    chartable_id: ChartableId


class TrackableEntryData(TypedDict):
    """A raw trackable plotted directly, with its own weighting."""

    kind: Literal["trackable"]
    trackable_id: TrackableId
    multiplier: float
    inverted: bool


type ChartData = ChartableData | TrackableEntryData


class ChartEntry(TypedDict):
    data: ChartData
    visible: bool


class LineChart(TypedDict):
    name: str
    fill_lines: bool
    entries: list[ChartEntry]  # draw order, each key at most once
