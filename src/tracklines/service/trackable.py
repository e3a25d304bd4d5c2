# SPDX-License-Identifier: MIT

import math
from copy import deepcopy
from typing import Any, Optional, Union, cast

from tracklines.error import InUseError, ValidationError
from tracklines.model.ids import Day
from tracklines.model.trackable import (
    ICON_CATALOGUE,
    AnswerType,
    IconData,
    ScaleData,
    Trackable,
    TrackableData,
)
from tracklines.template.trackable import (
    DEFAULT_SCALE_MAX,
    DEFAULT_SCALE_MIN,
    get_icon_template,
    get_scale_template,
)

NO_QUESTION = "[no question]"

ANSWER_TYPES: tuple[AnswerType, ...] = (
    "yes_no",
    "icon",
    "scale",
    "int",
    "float",
    "text",
)

YES_STRINGS = {"yes", "y", "true", "1"}
NO_STRINGS = {"no", "n", "false", "0"}

type AnswerValue = Union[bool, int, float, str]


def display_question(trackable: Trackable) -> str:
    if trackable["question"] == "":
        return NO_QUESTION
    return trackable["question"]


def is_numeric(trackable: Trackable) -> bool:
    """Whether the trackable can take part in a chartable sum."""
    return trackable["data"]["type"] != "text"


def has_answers(trackable: Trackable) -> bool:
    return len(trackable["data"]["answers"]) > 0


def get_numeric_series(trackable: Trackable) -> dict[Day, float]:
    """
    Answers as numbers, for aggregation.

    yes/no answers become 0 or 1, icon answers their index, scale, int and
    float answers their value. Text answers have no numeric meaning and are
    left out entirely.
    """
    return _numeric_answers(trackable["data"])


def _numeric_answers(data: TrackableData) -> dict[Day, float]:
    match data["type"]:
        case "yes_no":
            return {
                day: 1.0 if answer else 0.0 for day, answer in data["answers"].items()
            }
        case "icon" | "scale" | "int" | "float":
            return {day: float(answer) for day, answer in data["answers"].items()}
        case _:
            return {}


def parse_answer(data: TrackableData, raw: str) -> Optional[AnswerValue]:
    """
    Parse raw input for a trackable of the given data type.

    Returns None for empty input, which clears the day. Raises ValidationError
    for anything that is not a valid answer; values are never clamped.
    """
    text = raw.strip()
    if text == "":
        return None

    match data["type"]:
        case "yes_no":
            lowered = text.lower()
            if lowered in YES_STRINGS:
                return True
            if lowered in NO_STRINGS:
                return False
            raise ValidationError(f"Cannot parse '{raw}' as yes or no.")
        case "icon":
            choices = cast(IconData, data)["choices"]
            if text in choices:
                return choices.index(text)
            index = _parse_int(text, "icon")
            if not (0 <= index < len(choices)):
                raise ValidationError(
                    f"Icon {index} does not exist. Valid icons: 0-{len(choices) - 1}."
                )
            return index
        case "scale":
            scale = cast(ScaleData, data)
            value = _parse_int(text, "scale")
            if not (scale["min"] <= value <= scale["max"]):
                raise ValidationError(
                    f"Value {value} is outside the scale range "
                    f"({scale['min']}-{scale['max']})."
                )
            return value
        case "int":
            return _parse_int(text, "integer")
        case "float":
            try:
                number = float(text)
            except ValueError:
                raise ValidationError(f"Cannot parse '{raw}' as a number.")
            if not math.isfinite(number):
                raise ValidationError(f"'{raw}' is not a finite number.")
            return number
        case _:
            return text


def _parse_int(text: str, kind: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ValidationError(f"Cannot parse '{text}' as an integer for {kind} answers.")


def is_valid_response(trackable: Trackable, raw: str) -> bool:
    try:
        parse_answer(trackable["data"], raw)
    except ValidationError:
        return False
    return True


def update_response(trackable: Trackable, day: Day, raw: str) -> Trackable:
    """Set or clear the answer for one day. Invalid input leaves nothing changed."""
    value = parse_answer(trackable["data"], raw)

    updated = deepcopy(trackable)
    answers = cast(dict[Day, Any], updated["data"]["answers"])
    if value is None:
        answers.pop(day, None)
    else:
        answers[day] = value
    return updated


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_answer(trackable: Trackable, day: Day) -> str:
    data = trackable["data"]
    answer = cast(dict[Day, AnswerValue], data["answers"]).get(day)
    if answer is None:
        return ""
    return _answer_to_text(data, answer)


def _answer_to_text(data: TrackableData, answer: AnswerValue) -> str:
    match data["type"]:
        case "yes_no":
            return "yes" if answer else "no"
        case "icon":
            choices = cast(IconData, data)["choices"]
            index = cast(int, answer)
            if 0 <= index < len(choices):
                return choices[index]
            return str(index)
        case "scale" | "int" | "float":
            return format_number(cast(float, answer))
        case _:
            return str(answer)


def convert_answer_type(trackable: Trackable, answer_type: AnswerType) -> Trackable:
    """
    Change the answer type, carrying answers over where they make sense.

    Answers that cannot be represented are dropped, not refused:

    - text never becomes a number
    - fractional values never become integers
    - only 0 and 1 become yes/no
    - only indexes into the icon catalogue become icons
    """
    if answer_type not in ANSWER_TYPES:
        raise ValidationError(
            f"Invalid answer type: {answer_type}. Valid options: {', '.join(ANSWER_TYPES)}"
        )
    updated = deepcopy(trackable)
    updated["data"] = _convert_data(trackable["data"], answer_type)
    return updated


def dropped_answer_count(before: Trackable, after: Trackable) -> int:
    """How many answered days a conversion lost."""
    return len(set(before["data"]["answers"]) - set(after["data"]["answers"]))


def _convert_data(data: TrackableData, answer_type: AnswerType) -> TrackableData:
    if data["type"] == answer_type:
        return deepcopy(data)

    if answer_type == "text":
        return {
            "type": "text",
            "answers": {
                day: _answer_to_text(data, answer)
                for day, answer in cast(dict[Day, AnswerValue], data["answers"]).items()
            },
        }

    numbers = _numeric_answers(data)
    integral = {
        day: int(number) for day, number in numbers.items() if number.is_integer()
    }

    match answer_type:
        case "yes_no":
            return {
                "type": "yes_no",
                "answers": {
                    day: number == 1 for day, number in integral.items() if number in (0, 1)
                },
            }
        case "icon":
            # Only answers that index into the icon catalogue carry over
            kept = {
                day: number
                for day, number in integral.items()
                if 0 <= number < len(ICON_CATALOGUE)
            }
            minimum_choices = 2 if data["type"] == "yes_no" else 1
            icon = get_icon_template(
                max(minimum_choices, max(kept.values(), default=0) + 1)
            )
            icon["answers"] = kept
            return icon
        case "scale":
            if data["type"] == "yes_no":
                low, high = 0, 1
            elif data["type"] == "icon":
                low, high = 0, max(0, len(cast(IconData, data)["choices"]) - 1)
            else:
                low = min([DEFAULT_SCALE_MIN, *integral.values()])
                high = max([DEFAULT_SCALE_MAX, *integral.values()])
            scale = get_scale_template(low, high)
            scale["answers"] = {
                day: number for day, number in integral.items() if low <= number <= high
            }
            return scale
        case "int":
            return {"type": "int", "answers": integral}
        case _:
            return {"type": "float", "answers": numbers}


def _require_scale(trackable: Trackable) -> ScaleData:
    if trackable["data"]["type"] != "scale":
        raise ValidationError("Only scale trackables have bounds.")
    return cast(ScaleData, trackable["data"])


def _require_icon(trackable: Trackable) -> IconData:
    if trackable["data"]["type"] != "icon":
        raise ValidationError("Only icon trackables have icons.")
    return cast(IconData, trackable["data"])


def update_scale_from(trackable: Trackable, min: int) -> Trackable:
    """
    Change the lower scale bound. Answers that fall outside the new bounds are
    kept as they are; see out_of_range_days.
    """
    return update_scale_bounds(trackable, min=min)


def update_scale_to(trackable: Trackable, max: int) -> Trackable:
    return update_scale_bounds(trackable, max=max)


def update_scale_bounds(
    trackable: Trackable, min: Optional[int] = None, max: Optional[int] = None
) -> Trackable:
    """Change either or both bounds. Only the resulting pair is checked."""
    scale = _require_scale(trackable)
    low = scale["min"] if min is None else min
    high = scale["max"] if max is None else max
    if low > high:
        raise ValidationError(
            f"Scale minimum {low} is greater than the maximum {high}."
        )
    updated = deepcopy(trackable)
    cast(ScaleData, updated["data"])["min"] = low
    cast(ScaleData, updated["data"])["max"] = high
    return updated

def out_of_range_days(trackable: Trackable) -> list[Day]:
    if trackable["data"]["type"] != "scale":
        return []
    scale = cast(ScaleData, trackable["data"])
    return sorted(
        day
        for day, answer in scale["answers"].items()
        if not (scale["min"] <= answer <= scale["max"])
    )


def _validate_icon_choice(choice: str) -> None:
    if choice not in ICON_CATALOGUE:
        raise ValidationError(
            f"Unknown icon: {choice}. Valid options: {', '.join(ICON_CATALOGUE)}"
        )


def add_icon(trackable: Trackable, choice: str) -> Trackable:
    _require_icon(trackable)
    _validate_icon_choice(choice)
    updated = deepcopy(trackable)
    cast(IconData, updated["data"])["choices"].append(choice)
    return updated


def set_icon(trackable: Trackable, index: int, choice: str) -> Trackable:
    icon = _require_icon(trackable)
    _validate_icon_choice(choice)
    if not (0 <= index < len(icon["choices"])):
        raise ValidationError(f"Icon {index} does not exist.")
    updated = deepcopy(trackable)
    cast(IconData, updated["data"])["choices"][index] = choice
    return updated


def can_delete_icon(trackable: Trackable, index: int) -> bool:
    try:
        _check_icon_deletable(trackable, index)
    except ValidationError:
        return False
    return True


def _check_icon_deletable(trackable: Trackable, index: int) -> None:
    icon = _require_icon(trackable)
    if index != len(icon["choices"]) - 1:
        raise ValidationError("Only the last icon can be deleted.")
    if len(icon["choices"]) == 1:
        raise ValidationError("An icon trackable needs at least one icon.")
    if index in icon["answers"].values():
        raise InUseError(f"Icon {index} is used by existing answers.")


def delete_icon(trackable: Trackable, index: int) -> Trackable:
    """
    Remove the last icon. Refused when an answer uses it, since removing it
    would leave that answer pointing at nothing.
    """
    _check_icon_deletable(trackable, index)
    updated = deepcopy(trackable)
    cast(IconData, updated["data"])["choices"].pop()
    return updated
