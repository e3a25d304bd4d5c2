# SPDX-License-Identifier: MIT

from tracklines.model.chartable import Chartable


def get_chartable_template() -> Chartable:
    return {
        "name": "",
        "colour": None,
        "inverted": False,
        "sum": [],
    }
