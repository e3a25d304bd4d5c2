# SPDX-License-Identifier: MIT

from tracklines.configuration import Configuration

DEFAULT_CHART_DAYS = 28
DEFAULT_REQUEST_TIMEOUT = 10.0


def get_configuration_template() -> Configuration:
    return {
        "data_path": None,
        "remote_url": None,
        "request_timeout": DEFAULT_REQUEST_TIMEOUT,
        "log_level": "WARNING",
        "show_header": True,
        "chart_days": DEFAULT_CHART_DAYS,
        "random_colour_for_trackables": False,
        "new_entries_at_head": True,
    }
