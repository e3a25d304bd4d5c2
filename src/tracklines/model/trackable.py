# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

from tracklines.colour import Colour
from tracklines.model.ids import Day

AnswerType = Literal["yes_no", "icon", "scale", "int", "float", "text"]

# Icons a question can offer as answers, in the order they are suggested
ICON_CATALOGUE = [
    "circle",
    "star",
    "heart",
    "smile",
    "meh",
    "frown",
    "sun",
    "cloud",
    "rain",
    "bolt",
    "moon",
    "check",
    "cross",
]


class YesNoData(TypedDict):
    type: Literal["yes_no"]
    answers: dict[Day, bool]


class IconData(TypedDict):
    type: Literal["icon"]
    choices: list[str]  # index in this list is the stored answer
    answers: dict[Day, int]


class ScaleData(TypedDict):
    type: Literal["scale"]
    min: int  # inclusive
    max: int  # inclusive
    answers: dict[Day, int]


class IntData(TypedDict):
    type: Literal["int"]
    answers: dict[Day, int]


class FloatData(TypedDict):
    type: Literal["float"]
    answers: dict[Day, float]


class TextData(TypedDict):
    type: Literal["text"]
    answers: dict[Day, str]


type TrackableData = YesNoData | IconData | ScaleData | IntData | FloatData | TextData


class Trackable(TypedDict):
    question: str  # e.g., "How did you sleep?"
    colour: Colour
    data: TrackableData
