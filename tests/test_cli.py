# SPDX-License-Identifier: MIT

import json

import pytest
from typer.testing import CliRunner

from tracklines import configuration
from tracklines.terminal.app import app
from tracklines.time import today

runner = CliRunner()


def invoke(*args: str):
    return runner.invoke(app, ["--no-header", *args])


def stored(data_file):
    return json.loads(data_file.read_text())


@pytest.fixture
def tracked(isolated_repos, data_file):
    """Mood (int) answered today and Coffees (int), summed by an Energy chartable."""
    for question in ("Mood", "Coffees"):
        result = invoke("trackable", "add", "-q", question, "-t", "int")
        assert result.exit_code == 0, result.output
    assert invoke("tr", "answer", "1", "4").exit_code == 0
    result = invoke("chartable", "add", "-n", "Energy", "-t", "1", "-t", "2")
    assert result.exit_code == 0, result.output
    return data_file


class TestTrackableCommands:
    def test_add_and_answer(self, isolated_repos, data_file):
        result = invoke("trackable", "add", "-q", "Walked?")
        assert result.exit_code == 0, result.output

        result = invoke("tr", "an", "1", "yes")
        assert result.exit_code == 0, result.output

        trackable = stored(data_file)["trackables"]["items"][0][1]
        assert trackable["question"] == "Walked?"
        assert trackable["data"] == {"type": "yesNo", "answers": {str(today()): True}}

    def test_answer_for_yesterday(self, tracked):
        result = invoke("tr", "an", "2", "3", "--day", "y")
        assert result.exit_code == 0, result.output
        coffees = stored(tracked)["trackables"]["items"][1][1]
        assert coffees["data"]["answers"] == {str(today() - 1): 3}

    def test_invalid_answer_leaves_data_unchanged(self, tracked):
        before = tracked.read_text()
        result = invoke("tr", "an", "1", "lots")
        assert result.exit_code == 1
        assert tracked.read_text() == before

    def test_invalid_type_is_rejected(self, isolated_repos):
        result = invoke("tr", "add", "-t", "mood")
        assert result.exit_code == 1
        assert "Invalid answer type" in result.output

    def test_type_change_reports_dropped_answers(self, isolated_repos, data_file):
        assert invoke("tr", "add", "-q", "Weight", "-t", "float").exit_code == 0
        assert invoke("tr", "an", "1", "72.5").exit_code == 0
        assert invoke("tr", "an", "1", "70", "-d", "y").exit_code == 0

        result = invoke("tr", "type", "1", "int")
        assert result.exit_code == 0, result.output
        assert "Dropped 1 answer(s)" in result.output
        weight = stored(data_file)["trackables"]["items"][0][1]
        assert weight["data"] == {"type": "int", "answers": {str(today() - 1): 70}}

    def test_scale_range_can_move_up(self, isolated_repos, data_file):
        assert invoke("tr", "add", "-q", "Sleep", "-t", "scale").exit_code == 0
        result = invoke("tr", "sc", "1", "--min", "8", "--max", "10")
        assert result.exit_code == 0, result.output
        sleep = stored(data_file)["trackables"]["items"][0][1]
        assert (sleep["data"]["min"], sleep["data"]["max"]) == (8, 10)

    def test_delete_guard(self, tracked):
        result = invoke("tr", "del", "1")
        assert result.exit_code == 1
        assert "Deleted" not in result.output
        assert len(stored(tracked)["trackables"]["items"]) == 2

    def test_list(self, tracked):
        result = invoke("tr", "ls")
        assert result.exit_code == 0, result.output
        assert "Coffees" in result.output


class TestChartableCommands:
    def test_add_with_trackables(self, tracked):
        chartable = stored(tracked)["chartables"]["items"][0][1]
        assert chartable["name"] == "Energy"
        assert chartable["sum"] == [
            {"trackableId": 1, "multiplier": 1.0},
            {"trackableId": 2, "multiplier": 1.0},
        ]

    def test_multiplier_must_be_positive(self, tracked):
        before = tracked.read_text()
        result = invoke("ch", "m", "1", "2", "0")
        assert result.exit_code == 1
        assert tracked.read_text() == before

        result = invoke("ch", "m", "1", "2", "2.5")
        assert result.exit_code == 0, result.output
        assert stored(tracked)["chartables"]["items"][0][1]["sum"][1] == {
            "trackableId": 2,
            "multiplier": 2.5,
        }


class TestChartCommands:
    @pytest.fixture
    def charted(self, tracked):
        assert invoke("chart", "add", "-n", "Overview").exit_code == 0
        assert invoke("lc", "ae", "1", "-c", "1").exit_code == 0
        assert invoke("lc", "ae", "1", "-t", "2").exit_code == 0
        return tracked

    def test_entries_are_added_at_the_head(self, charted):
        chart = stored(charted)["lineCharts"]["items"][0][1]
        assert chart["chartables"] == [
            {"trackableId": 2, "multiplier": 1.0, "inverted": False, "visible": True},
            {"chartableId": 1, "visible": True},
        ]

    def test_show_reports_nearest_point(self, charted):
        result = invoke("lc", "s", "1", "--day", "today")
        assert result.exit_code == 0, result.output
        assert "Overview" in result.output
        assert "Nearest point" in result.output

    def test_remove_keeps_chartable(self, charted):
        result = invoke("lc", "rm", "1", "c1")
        assert result.exit_code == 0, result.output
        document = stored(charted)
        assert len(document["lineCharts"]["items"][0][1]["chartables"]) == 1
        assert len(document["chartables"]["items"]) == 1

    def test_chartable_on_chart_cannot_be_deleted(self, charted):
        assert invoke("ch", "del", "1").exit_code == 1

    def test_toggle_hides_entry(self, charted):
        assert invoke("lc", "tg", "1", "t2").exit_code == 0
        chart = stored(charted)["lineCharts"]["items"][0][1]
        assert chart["chartables"][0]["visible"] is False

    def test_bad_entry_key(self, charted):
        result = invoke("lc", "tg", "1", "x2")
        assert result.exit_code != 0


class TestConfigCommands:
    def test_set_and_view(self, isolated_repos):
        result = invoke("config", "set", "--chart-days", "7", "--new-entries-at-tail")
        assert result.exit_code == 0, result.output
        assert "chart_days: 7" in configuration.APP_CONFIG_PATH.read_text()

        result = invoke("c", "v")
        assert result.exit_code == 0, result.output

    def test_invalid_log_level(self, isolated_repos):
        result = invoke("c", "s", "--log-level", "chatty")
        assert result.exit_code == 1
        assert not configuration.APP_CONFIG_PATH.exists()
