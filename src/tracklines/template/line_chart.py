# SPDX-License-Identifier: MIT

from tracklines.model.line_chart import LineChart


def get_line_chart_template() -> LineChart:
    return {
        "name": "",
        "fill_lines": True,
        "entries": [],
    }
