# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from tracklines.colour import Colour
from tracklines.model.ids import TrackableId


class Chartable(TypedDict):
    name: str
    colour: Optional[Colour]  # None derives the colour from the summed trackables
    inverted: bool
    # Weighted sum; multipliers are always > 0, order is the UI order
    sum: list[tuple[TrackableId, float]]
