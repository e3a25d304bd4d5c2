# SPDX-License-Identifier: MIT

import logging
import math

from tracklines import ordered
from tracklines.colour import DEFAULT_COLOUR, Colour
from tracklines.error import ValidationError
from tracklines.model.chartable import Chartable
from tracklines.model.ids import Day, TrackableId
from tracklines.model.trackable import Trackable
from tracklines.service.trackable import get_numeric_series

logger = logging.getLogger(__name__)

NO_NAME = "[no name]"

type TrackableItems = list[tuple[TrackableId, Trackable]]


def resolve_colour(chartable: Chartable, trackables: TrackableItems) -> Colour:
    """
    The colour a chartable is drawn in.

    A chartable summing a single trackable always takes that trackable's
    colour. With more members the chartable's own colour wins, falling back
    to the first member's colour. An empty sum is drawn in the neutral colour.
    """
    if len(chartable["sum"]) == 0:
        return DEFAULT_COLOUR

    if len(chartable["sum"]) > 1 and chartable["colour"] is not None:
        return chartable["colour"]

    first_id = chartable["sum"][0][0]
    first = ordered.get(trackables, first_id)
    if first is None:
        logger.warning(
            "Chartable '%s' refers to missing trackable %s",
            chartable["name"],
            first_id,
        )
        return DEFAULT_COLOUR
    return first["colour"]


def colour_editable(chartable: Chartable) -> bool:
    return len(chartable["sum"]) > 1


def compute_series(chartable: Chartable, trackables: TrackableItems) -> dict[Day, float]:
    """
    Day-by-day weighted sum of the chartable's trackables.

    Days are added up only over the trackables that were answered that day;
    a missing answer is not treated as zero. Inversion is applied to the
    summed series.
    """
    series = sum_series(chartable["sum"], trackables, chartable["name"])
    if chartable["inverted"]:
        return invert_series(series)
    return series


def sum_series(
    weighted: list[tuple[TrackableId, float]],
    trackables: TrackableItems,
    name: str = "",
) -> dict[Day, float]:
    series: dict[Day, float] = {}
    for trackable_id, multiplier in weighted:
        trackable = ordered.get(trackables, trackable_id)
        if trackable is None:
            logger.warning(
                "Skipping missing trackable %s in the sum of '%s'", trackable_id, name
            )
            continue
        for day, value in get_numeric_series(trackable).items():
            series[day] = series.get(day, 0.0) + value * multiplier
    return dict(sorted(series.items()))


def invert_series(series: dict[Day, float]) -> dict[Day, float]:
    """Reflect a series about its own maximum. An empty series stays empty."""
    if len(series) == 0:
        return {}
    maximum = max(series.values())
    return {day: maximum - value for day, value in series.items()}


def parse_multiplier(text: str) -> float:
    try:
        multiplier = float(text.strip())
    except ValueError:
        raise ValidationError(f"Cannot parse '{text}' as a multiplier.")
    validate_multiplier(multiplier)
    return multiplier


def validate_multiplier(multiplier: float) -> None:
    if not math.isfinite(multiplier):
        raise ValidationError(f"Multiplier must be a finite number. Got: {multiplier}")
    if multiplier <= 0:
        raise ValidationError(f"Multiplier must be greater than zero. Got: {multiplier}")


def is_valid_multiplier(text: str) -> bool:
    try:
        parse_multiplier(text)
    except ValidationError:
        return False
    return True


def display_name(chartable: Chartable) -> str:
    if chartable["name"] == "":
        return NO_NAME
    return chartable["name"]


def sort_key(name: str) -> str:
    return name.casefold()
