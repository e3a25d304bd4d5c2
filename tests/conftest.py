# SPDX-License-Identifier: MIT

from pathlib import Path

import pytest

from tracklines import configuration
from tracklines.model.ids import ChartableId, ChartId, TrackableId
from tracklines.model.user_data import UserData
from tracklines.repository.configuration import CONFIGURATION_REPO
from tracklines.repository.storage import FileDocumentStore
from tracklines.repository.user_data import USER_DATA_REPO
from tracklines.template.user_data import get_user_data_template

DAY_1 = 739000
DAY_2 = 739001

MOOD = TrackableId(1)
COFFEES = TrackableId(2)
ENERGY = ChartableId(1)
OVERVIEW = ChartId(1)


@pytest.fixture
def empty_user_data() -> UserData:
    return get_user_data_template()


@pytest.fixture
def user_data() -> UserData:
    """
    Mood (scale 0-10) answered on two days, Coffees (int) on one, and an
    Energy chartable summing Mood once and Coffees twice, shown on one chart.
    """
    return {
        "trackables": {
            "next_id": 3,
            "items": [
                (
                    MOOD,
                    {
                        "question": "Mood",
                        "colour": "blue",
                        "data": {
                            "type": "scale",
                            "min": 0,
                            "max": 10,
                            "answers": {DAY_1: 2, DAY_2: 5},
                        },
                    },
                ),
                (
                    COFFEES,
                    {
                        "question": "Coffees",
                        "colour": "red",
                        "data": {"type": "int", "answers": {DAY_1: 3}},
                    },
                ),
            ],
        },
        "chartables": {
            "next_id": 2,
            "items": [
                (
                    ENERGY,
                    {
                        "name": "Energy",
                        "colour": None,
                        "inverted": False,
                        "sum": [(MOOD, 1.0), (COFFEES, 2.0)],
                    },
                )
            ],
        },
        "line_charts": {
            "next_id": 2,
            "items": [
                (
                    OVERVIEW,
                    {
                        "name": "Overview",
                        "fill_lines": True,
                        "entries": [
                            {
                                "data": {"kind": "chartable", "chartable_id": ENERGY},
                                "visible": True,
                            }
                        ],
                    },
                )
            ],
        },
    }


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "user-data.json"


@pytest.fixture
def isolated_repos(tmp_path: Path, data_file: Path, monkeypatch: pytest.MonkeyPatch):
    """Point both repositories at files under tmp_path for the test's duration."""
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", tmp_path / "config.yaml")
    CONFIGURATION_REPO.reset()
    USER_DATA_REPO.use_store(FileDocumentStore(data_file))
    yield
    CONFIGURATION_REPO.reset()
    USER_DATA_REPO.use_store(FileDocumentStore(data_file))
