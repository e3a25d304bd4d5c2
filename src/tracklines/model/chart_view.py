# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from tracklines.colour import Colour
from tracklines.model.ids import Day
from tracklines.model.line_chart import ChartDataKey


class ChartViewState(TypedDict):
    hovered: Optional[ChartDataKey]
    selected: Optional[ChartDataKey]


class ChartDataset(TypedDict):
    """Everything a renderer needs to draw one line of a chart."""

    key: ChartDataKey
    name: str
    series: dict[Day, float]
    colour: Colour  # resolved colour, before any dimming
    display_colour: str  # rich style actually used to draw
    visible: bool
    selectable: bool
