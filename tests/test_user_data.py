# SPDX-License-Identifier: MIT

from copy import deepcopy

import pytest

from conftest import COFFEES, DAY_1, DAY_2, ENERGY, MOOD, OVERVIEW
from tracklines import ordered
from tracklines.error import InUseError, NotFoundError, ValidationError
from tracklines.model.ids import ChartableId, ChartId, TrackableId
from tracklines.service import user_data as service


class TestTrackables:
    def test_add_assigns_increasing_ids(self, empty_user_data):
        first, first_id = service.add_trackable(empty_user_data)
        second, second_id = service.add_trackable(first)
        assert (first_id, second_id) == (1, 2)
        assert ordered.keys(second["trackables"]["items"]) == [1, 2]
        assert service.get_trackable(second, second_id)["data"]["type"] == "yes_no"
        assert empty_user_data["trackables"]["items"] == []

    def test_ids_are_not_reused_after_delete(self, empty_user_data):
        user_data, trackable_id = service.add_trackable(empty_user_data)
        user_data = service.delete_trackable(user_data, trackable_id)
        _, next_id = service.add_trackable(user_data)
        assert next_id == trackable_id + 1

    def test_delete_refused_while_answered(self, user_data):
        user_data["chartables"]["items"] = []
        user_data["line_charts"]["items"] = []
        with pytest.raises(InUseError):
            service.delete_trackable(user_data, MOOD)

    def test_delete_refused_while_summed(self, user_data):
        user_data = service.update_trackable_response(user_data, COFFEES, DAY_1, "")
        with pytest.raises(InUseError, match="chartable"):
            service.delete_trackable(user_data, COFFEES)

    def test_delete_refused_while_charted(self, user_data):
        user_data = service.update_trackable_response(user_data, COFFEES, DAY_1, "")
        user_data = service.delete_chartable_trackable(user_data, ENERGY, COFFEES)
        user_data = service.add_line_chart_trackable(user_data, OVERVIEW, COFFEES)
        with pytest.raises(InUseError, match="chart"):
            service.delete_trackable(user_data, COFFEES)

        user_data = service.delete_line_chart_entry(
            user_data, OVERVIEW, ("trackable", COFFEES)
        )
        user_data = service.delete_trackable(user_data, COFFEES)
        assert not ordered.contains(user_data["trackables"]["items"], COFFEES)

    def test_unknown_trackable(self, user_data):
        with pytest.raises(NotFoundError):
            service.set_trackable_question(user_data, TrackableId(42), "Sleep?")

    def test_colour_is_validated(self, user_data):
        with pytest.raises(ValidationError):
            service.set_trackable_colour(user_data, MOOD, "octarine")
        updated = service.set_trackable_colour(user_data, MOOD, "teal")
        assert service.get_trackable(updated, MOOD)["colour"] == "teal"

    def test_charted_trackable_cannot_become_text(self, user_data):
        with pytest.raises(InUseError):
            service.set_trackable_answer_type(user_data, MOOD, "text")

    def test_scale_bounds(self, user_data):
        updated = service.update_trackable_scale_to(user_data, MOOD, 4)
        updated = service.update_trackable_scale_from(updated, MOOD, 1)
        data = service.get_trackable(updated, MOOD)["data"]
        assert (data["min"], data["max"]) == (1, 4)
        assert data["answers"] == {DAY_1: 2, DAY_2: 5}

        moved = service.update_trackable_scale(user_data, MOOD, min=20, max=30)
        data = service.get_trackable(moved, MOOD)["data"]
        assert (data["min"], data["max"]) == (20, 30)

    def test_response_updates_chartable_series(self, user_data):
        updated = service.update_trackable_response(user_data, COFFEES, DAY_1, "1")
        assert service.get_trackable(updated, COFFEES)["data"]["answers"] == {
            DAY_1: 1
        }
        assert service.get_trackable(user_data, COFFEES)["data"]["answers"] == {
            DAY_1: 3
        }


class TestChartables:
    def test_zero_multiplier_leaves_store_unchanged(self, user_data):
        before = deepcopy(user_data)
        with pytest.raises(ValidationError):
            service.set_chartable_multiplier(user_data, ENERGY, MOOD, 0.0)
        with pytest.raises(ValidationError):
            service.set_chartable_multiplier(user_data, ENERGY, MOOD, -1.0)
        assert user_data == before

    def test_set_multiplier(self, user_data):
        updated = service.set_chartable_multiplier(user_data, ENERGY, MOOD, 0.5)
        assert service.get_chartable(updated, ENERGY)["sum"] == [
            (MOOD, 0.5),
            (COFFEES, 2.0),
        ]

    def test_text_trackable_cannot_be_summed(self, user_data):
        user_data, notes = service.add_trackable(user_data)
        user_data = service.set_trackable_answer_type(user_data, notes, "text")
        with pytest.raises(ValidationError):
            service.add_chartable_trackable(user_data, ENERGY, notes)

    def test_trackable_summed_once(self, user_data):
        with pytest.raises(ValidationError):
            service.add_chartable_trackable(user_data, ENERGY, MOOD)

    def test_missing_trackable_cannot_be_summed(self, user_data):
        with pytest.raises(NotFoundError):
            service.add_chartable_trackable(user_data, ENERGY, TrackableId(42))

    def test_replace_keeps_position_and_multiplier(self, user_data):
        user_data, sleep = service.add_trackable(user_data)
        updated = service.replace_chartable_trackable(user_data, ENERGY, MOOD, sleep)
        assert service.get_chartable(updated, ENERGY)["sum"] == [
            (sleep, 1.0),
            (COFFEES, 2.0),
        ]

    def test_replace_with_existing_member_is_refused(self, user_data):
        with pytest.raises(ValidationError):
            service.replace_chartable_trackable(user_data, ENERGY, MOOD, COFFEES)

    def test_colour_needs_several_members(self, user_data):
        updated = service.set_chartable_colour(user_data, ENERGY, "green")
        assert service.get_chartable(updated, ENERGY)["colour"] == "green"

        single = service.delete_chartable_trackable(user_data, ENERGY, COFFEES)
        with pytest.raises(ValidationError):
            service.set_chartable_colour(single, ENERGY, "green")
        cleared = service.set_chartable_colour(single, ENERGY, None)
        assert service.get_chartable(cleared, ENERGY)["colour"] is None

    def test_delete_refused_while_charted(self, user_data):
        with pytest.raises(InUseError):
            service.delete_chartable(user_data, ENERGY)
        user_data = service.delete_line_chart(user_data, OVERVIEW)
        user_data = service.delete_chartable(user_data, ENERGY)
        assert user_data["chartables"]["items"] == []


class TestLineCharts:
    @pytest.fixture
    def chart_data(self, user_data):
        """Overview showing Coffees directly above Energy."""
        return service.add_line_chart_trackable(user_data, OVERVIEW, COFFEES)

    def keys(self, user_data):
        line_chart = service.get_line_chart(user_data, OVERVIEW)
        return [
            ("chartable", entry["data"]["chartable_id"])
            if entry["data"]["kind"] == "chartable"
            else ("trackable", entry["data"]["trackable_id"])
            for entry in line_chart["entries"]
        ]

    def test_new_entries_go_to_the_head(self, chart_data):
        assert self.keys(chart_data) == [("trackable", COFFEES), ("chartable", ENERGY)]

    def test_new_entries_can_go_to_the_tail(self, user_data):
        updated = service.add_line_chart_trackable(
            user_data, OVERVIEW, COFFEES, at_head=False
        )
        assert self.keys(updated) == [("chartable", ENERGY), ("trackable", COFFEES)]

    def test_entry_appears_once(self, user_data):
        with pytest.raises(ValidationError):
            service.add_line_chart_chartable(user_data, OVERVIEW, ENERGY)

    def test_reorder_boundaries_are_no_ops(self, chart_data):
        assert service.move_line_chart_entry_up(
            chart_data, OVERVIEW, ("trackable", COFFEES)
        ) == chart_data
        assert service.move_line_chart_entry_down(
            chart_data, OVERVIEW, ("chartable", ENERGY)
        ) == chart_data

    def test_reorder(self, chart_data):
        moved = service.move_line_chart_entry_down(
            chart_data, OVERVIEW, ("trackable", COFFEES)
        )
        assert self.keys(moved) == [("chartable", ENERGY), ("trackable", COFFEES)]

    def test_toggle_visible(self, user_data):
        hidden = service.toggle_line_chart_entry_visible(
            user_data, OVERVIEW, ("chartable", ENERGY)
        )
        assert service.get_line_chart(hidden, OVERVIEW)["entries"][0]["visible"] is False
        shown = service.toggle_line_chart_entry_visible(
            hidden, OVERVIEW, ("chartable", ENERGY)
        )
        assert shown == user_data

    def test_remove_entry_keeps_chartable(self, user_data):
        updated = service.delete_line_chart_entry(
            user_data, OVERVIEW, ("chartable", ENERGY)
        )
        assert service.get_line_chart(updated, OVERVIEW)["entries"] == []
        assert service.get_chartable(updated, ENERGY)["name"] == "Energy"

    def test_trackable_entry_multiplier_and_inversion(self, chart_data):
        with pytest.raises(ValidationError):
            service.set_line_chart_trackable_multiplier(chart_data, OVERVIEW, COFFEES, 0)
        updated = service.set_line_chart_trackable_multiplier(
            chart_data, OVERVIEW, COFFEES, 3.0
        )
        updated = service.set_line_chart_trackable_inverted(
            updated, OVERVIEW, COFFEES, True
        )
        entry = service.get_line_chart(updated, OVERVIEW)["entries"][0]
        assert entry["data"] == {
            "kind": "trackable",
            "trackable_id": COFFEES,
            "multiplier": 3.0,
            "inverted": True,
        }

    def test_convert_trackable_entry_to_chartable(self, chart_data):
        chart_data = service.set_line_chart_trackable_multiplier(
            chart_data, OVERVIEW, COFFEES, 2.0
        )
        updated, chartable_id = service.convert_line_chart_entry_to_chartable(
            chart_data, OVERVIEW, COFFEES
        )
        assert chartable_id == ChartableId(2)
        chartable = service.get_chartable(updated, chartable_id)
        assert chartable["name"] == "Coffees"
        assert chartable["sum"] == [(COFFEES, 2.0)]
        assert self.keys(updated) == [
            ("chartable", chartable_id),
            ("chartable", ENERGY),
        ]

    def test_convert_chartable_entry_to_trackable(self, user_data):
        with pytest.raises(ValidationError):
            service.convert_line_chart_entry_to_trackable(user_data, OVERVIEW, ENERGY)

        single = service.delete_chartable_trackable(user_data, ENERGY, COFFEES)
        single = service.set_chartable_inverted(single, ENERGY, True)
        updated = service.convert_line_chart_entry_to_trackable(single, OVERVIEW, ENERGY)
        entry = service.get_line_chart(updated, OVERVIEW)["entries"][0]
        assert entry["data"] == {
            "kind": "trackable",
            "trackable_id": MOOD,
            "multiplier": 1.0,
            "inverted": True,
        }
        assert entry["visible"] is True
        assert ordered.contains(updated["chartables"]["items"], ENERGY)

    def test_unknown_chart(self, user_data):
        with pytest.raises(NotFoundError):
            service.set_line_chart_name(user_data, ChartId(7), "Nope")


class TestPickers:
    def test_sum_candidates_exclude_members_and_text(self, user_data):
        user_data, sleep = service.add_trackable(user_data)
        user_data = service.set_trackable_question(user_data, sleep, "sleep")
        user_data, notes = service.add_trackable(user_data)
        user_data = service.set_trackable_answer_type(user_data, notes, "text")
        available = service.available_sum_trackables(user_data, ENERGY)
        assert [trackable_id for trackable_id, _ in available] == [sleep]

    def test_chart_candidates_sorted_case_insensitively(self, user_data):
        user_data, zebra = service.add_chartable(user_data)
        user_data = service.set_chartable_name(user_data, zebra, "zebra")
        user_data, apple = service.add_chartable(user_data)
        user_data = service.set_chartable_name(user_data, apple, "Apple")
        available = service.available_chart_chartables(user_data, OVERVIEW)
        assert [chartable_id for chartable_id, _ in available] == [apple, zebra]

        trackables = service.available_chart_trackables(user_data, OVERVIEW)
        assert [trackable_id for trackable_id, _ in trackables] == [COFFEES, MOOD]


class TestIntegrity:
    def test_clean_data_has_no_violations(self, user_data):
        assert service.check_integrity(user_data) == []

    def test_dangling_references_are_reported(self, user_data):
        user_data["trackables"]["items"] = ordered.delete(
            user_data["trackables"]["items"], COFFEES
        )
        user_data["chartables"]["items"] = []
        violations = service.check_integrity(user_data)
        assert len(violations) == 1
        assert "chartable 1" in str(violations[0])
