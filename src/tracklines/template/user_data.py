# SPDX-License-Identifier: MIT

from tracklines.model.user_data import UserData


def get_user_data_template() -> UserData:
    return {
        "trackables": {"next_id": 1, "items": []},
        "chartables": {"next_id": 1, "items": []},
        "line_charts": {"next_id": 1, "items": []},
    }
