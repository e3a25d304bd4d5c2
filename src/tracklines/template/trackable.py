# SPDX-License-Identifier: MIT

from typing import Optional

from tracklines.colour import DEFAULT_COLOUR, Colour
from tracklines.model.trackable import (
    ICON_CATALOGUE,
    IconData,
    ScaleData,
    Trackable,
    YesNoData,
)

DEFAULT_SCALE_MIN = 1
DEFAULT_SCALE_MAX = 5


def get_trackable_template(colour: Optional[Colour] = None) -> Trackable:
    return {
        "question": "",
        "colour": colour if colour is not None else DEFAULT_COLOUR,
        "data": get_yes_no_template(),
    }


def get_yes_no_template() -> YesNoData:
    return {"type": "yes_no", "answers": {}}


def get_icon_template(choice_count: int = 1) -> IconData:
    return {
        "type": "icon",
        "choices": [
            ICON_CATALOGUE[index % len(ICON_CATALOGUE)]
            for index in range(max(1, choice_count))
        ],
        "answers": {},
    }


def get_scale_template(
    min: int = DEFAULT_SCALE_MIN, max: int = DEFAULT_SCALE_MAX
) -> ScaleData:
    return {"type": "scale", "min": min, "max": max, "answers": {}}
