# SPDX-License-Identifier: MIT

import re
from typing import Optional

import typer

from tracklines.model.ids import Day
from tracklines.model.line_chart import ChartDataKey
from tracklines.service.line_chart import ENTRY_KEY_PREFIXES
from tracklines.time import day_from_str, today


def parse_day(day_param: Optional[str | int]) -> Optional[Day]:
    if day_param is None:
        return None

    day = str(day_param).strip()

    # Match YYYY-MM-DD format
    if re.match(r"^\d{4}-\d{2}-\d{2}$", day):
        try:
            return day_from_str(day)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", day):
        return today() + int(day)

    if day == "today" or day == "t":
        return today()
    if day == "yesterday" or day == "y":
        return today() - 1
    if day == "tomorrow" or day == "o":
        return today() + 1
    raise typer.BadParameter("Incorrect day format")


def parse_entry_key(key_param: str) -> ChartDataKey:
    """
    Parse a chart entry key such as "c3" (chartable 3) or "t12" (trackable 12).
    """
    match = re.match(r"^\s*([a-z])(\d+)\s*$", key_param.lower())
    if match:
        for kind, prefix in ENTRY_KEY_PREFIXES.items():
            if prefix == match.group(1):
                return (kind, int(match.group(2)))
    raise typer.BadParameter(
        f"Invalid entry key: '{key_param}' (expected e.g. 'c3' for a chartable "
        "or 't12' for a trackable)"
    )
