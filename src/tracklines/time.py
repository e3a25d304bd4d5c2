# SPDX-License-Identifier: MIT

import datetime
from typing import cast

import pendulum

from tracklines.model.ids import Day


def today() -> Day:
    return day_from_date(pendulum.today("local").date())


def day_from_date(date: datetime.date) -> Day:
    return date.toordinal()


def day_to_date(day: Day) -> pendulum.Date:
    date = datetime.date.fromordinal(day)
    return pendulum.date(date.year, date.month, date.day)


def day_from_str(date_str: str) -> Day:
    """Parse a 'YYYY-MM-DD' string to a day."""
    parsed = cast(pendulum.DateTime, pendulum.parse(date_str, tz="local"))
    return day_from_date(parsed.date())


def day_to_str(day: Day) -> str:
    return day_to_date(day).to_date_string()


def day_to_display_str(day: Day) -> str:
    return day_to_date(day).format("YYYY-MM-DD ddd")


def day_range(last_day: Day, days: int) -> list[Day]:
    """The `days` days ending with (and including) last_day, oldest first."""
    return list(range(last_day - days + 1, last_day + 1))
