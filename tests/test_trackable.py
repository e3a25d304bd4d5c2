# SPDX-License-Identifier: MIT

import pytest

from conftest import DAY_1, DAY_2
from tracklines.error import InUseError, ValidationError
from tracklines.model.trackable import ICON_CATALOGUE, Trackable
from tracklines.service.trackable import (
    add_icon,
    can_delete_icon,
    convert_answer_type,
    delete_icon,
    dropped_answer_count,
    format_answer,
    get_numeric_series,
    is_valid_response,
    out_of_range_days,
    parse_answer,
    set_icon,
    update_response,
    update_scale_bounds,
    update_scale_from,
    update_scale_to,
)
from tracklines.template.trackable import (
    get_icon_template,
    get_scale_template,
    get_trackable_template,
)


def make_trackable(data) -> Trackable:
    trackable = get_trackable_template("green")
    trackable["data"] = data
    return trackable


class TestParseAnswer:
    def test_yes_no(self):
        data = {"type": "yes_no", "answers": {}}
        assert parse_answer(data, "Yes") is True
        assert parse_answer(data, "y") is True
        assert parse_answer(data, "false") is False
        assert parse_answer(data, "0") is False
        with pytest.raises(ValidationError):
            parse_answer(data, "maybe")

    def test_empty_input_clears(self):
        assert parse_answer({"type": "int", "answers": {}}, "   ") is None

    def test_icon_by_name_or_index(self):
        data = {"type": "icon", "choices": ["circle", "star"], "answers": {}}
        assert parse_answer(data, "star") == 1
        assert parse_answer(data, "0") == 0
        with pytest.raises(ValidationError):
            parse_answer(data, "2")

    def test_scale_is_never_clamped(self):
        data = get_scale_template(1, 5)
        assert parse_answer(data, "3") == 3
        with pytest.raises(ValidationError):
            parse_answer(data, "6")
        with pytest.raises(ValidationError):
            parse_answer(data, "0")
        with pytest.raises(ValidationError):
            parse_answer(data, "2.5")

    def test_float_must_be_finite(self):
        data = {"type": "float", "answers": {}}
        assert parse_answer(data, "2.25") == 2.25
        with pytest.raises(ValidationError):
            parse_answer(data, "nan")
        with pytest.raises(ValidationError):
            parse_answer(data, "inf")
        with pytest.raises(ValidationError):
            parse_answer(data, "lots")

    def test_int_and_text(self):
        assert parse_answer({"type": "int", "answers": {}}, "-4") == -4
        assert parse_answer({"type": "text", "answers": {}}, " slept well ") == "slept well"


class TestUpdateResponse:
    def test_sets_and_clears_a_day(self):
        trackable = make_trackable({"type": "yes_no", "answers": {}})
        answered = update_response(trackable, DAY_1, "yes")
        assert answered["data"]["answers"] == {DAY_1: True}

        cleared = update_response(answered, DAY_1, "")
        assert cleared["data"]["answers"] == {}
        assert answered["data"]["answers"] == {DAY_1: True}

    def test_invalid_input_leaves_trackable_unchanged(self):
        trackable = make_trackable(
            {"type": "scale", "min": 1, "max": 5, "answers": {DAY_1: 4}}
        )
        with pytest.raises(ValidationError):
            update_response(trackable, DAY_1, "9")
        assert trackable["data"]["answers"] == {DAY_1: 4}

    def test_is_valid_response(self):
        trackable = make_trackable({"type": "int", "answers": {}})
        assert is_valid_response(trackable, "12")
        assert is_valid_response(trackable, "")
        assert not is_valid_response(trackable, "twelve")


class TestNumericSeries:
    def test_yes_no_becomes_zero_or_one(self):
        trackable = make_trackable(
            {"type": "yes_no", "answers": {DAY_1: True, DAY_2: False}}
        )
        assert get_numeric_series(trackable) == {DAY_1: 1.0, DAY_2: 0.0}

    def test_icon_is_its_index(self):
        trackable = make_trackable(
            {"type": "icon", "choices": ["sun", "rain"], "answers": {DAY_1: 1}}
        )
        assert get_numeric_series(trackable) == {DAY_1: 1.0}

    def test_text_has_no_numeric_series(self):
        trackable = make_trackable({"type": "text", "answers": {DAY_1: "hello"}})
        assert get_numeric_series(trackable) == {}

    def test_format_answer(self):
        trackable = make_trackable(
            {"type": "icon", "choices": ["sun", "rain"], "answers": {DAY_1: 1}}
        )
        assert format_answer(trackable, DAY_1) == "rain"
        assert format_answer(trackable, DAY_2) == ""


class TestConvertAnswerType:
    def test_int_to_yes_no_keeps_only_zero_and_one(self):
        trackable = make_trackable({"type": "int", "answers": {DAY_1: 3, DAY_2: 0}})
        converted = convert_answer_type(trackable, "yes_no")
        assert converted["data"] == {"type": "yes_no", "answers": {DAY_2: False}}

    def test_yes_no_to_scale_is_zero_to_one(self):
        trackable = make_trackable(
            {"type": "yes_no", "answers": {DAY_1: True, DAY_2: False}}
        )
        converted = convert_answer_type(trackable, "scale")
        assert converted["data"] == {
            "type": "scale",
            "min": 0,
            "max": 1,
            "answers": {DAY_1: 1, DAY_2: 0},
        }

    def test_yes_no_to_icon_has_two_choices(self):
        trackable = make_trackable({"type": "yes_no", "answers": {DAY_1: True}})
        converted = convert_answer_type(trackable, "icon")
        assert len(converted["data"]["choices"]) == 2
        assert converted["data"]["answers"] == {DAY_1: 1}

    def test_int_to_icon_uses_answers_as_indexes(self):
        trackable = make_trackable({"type": "int", "answers": {DAY_1: 2, DAY_2: -1}})
        converted = convert_answer_type(trackable, "icon")
        assert len(converted["data"]["choices"]) == 3
        assert converted["data"]["answers"] == {DAY_1: 2}

    def test_icon_conversion_stops_at_the_catalogue(self):
        trackable = make_trackable(
            {"type": "int", "answers": {DAY_1: 1_000_000_000, DAY_2: 1}}
        )
        converted = convert_answer_type(trackable, "icon")
        assert converted["data"]["answers"] == {DAY_2: 1}
        assert len(converted["data"]["choices"]) == 2
        assert dropped_answer_count(trackable, converted) == 1

    def test_scale_to_icon(self):
        trackable = make_trackable(
            {"type": "scale", "min": 0, "max": 30, "answers": {DAY_1: 4, DAY_2: 20}}
        )
        converted = convert_answer_type(trackable, "icon")
        assert converted["data"]["answers"] == {DAY_1: 4}
        assert len(converted["data"]["choices"]) == 5
        assert len(converted["data"]["choices"]) <= len(ICON_CATALOGUE)

    def test_int_to_scale_widens_default_bounds(self):
        trackable = make_trackable({"type": "int", "answers": {DAY_1: 7, DAY_2: -1}})
        converted = convert_answer_type(trackable, "scale")
        assert converted["data"]["min"] == -1
        assert converted["data"]["max"] == 7
        assert converted["data"]["answers"] == {DAY_1: 7, DAY_2: -1}

    def test_float_to_int_drops_fractions(self):
        trackable = make_trackable(
            {"type": "float", "answers": {DAY_1: 2.5, DAY_2: 4.0}}
        )
        converted = convert_answer_type(trackable, "int")
        assert converted["data"] == {"type": "int", "answers": {DAY_2: 4}}

    def test_to_text_renders_answers(self):
        trackable = make_trackable(
            {"type": "yes_no", "answers": {DAY_1: True, DAY_2: False}}
        )
        converted = convert_answer_type(trackable, "text")
        assert converted["data"] == {
            "type": "text",
            "answers": {DAY_1: "yes", DAY_2: "no"},
        }

    def test_text_to_number_drops_answers(self):
        trackable = make_trackable({"type": "text", "answers": {DAY_1: "5"}})
        converted = convert_answer_type(trackable, "float")
        assert converted["data"] == {"type": "float", "answers": {}}

    def test_same_type_is_unchanged(self):
        trackable = make_trackable({"type": "int", "answers": {DAY_1: 3}})
        assert convert_answer_type(trackable, "int") == trackable

    def test_unknown_type_is_rejected(self):
        trackable = make_trackable({"type": "int", "answers": {}})
        with pytest.raises(ValidationError):
            convert_answer_type(trackable, "colour")  # type: ignore[arg-type]


class TestScaleBounds:
    def test_shrinking_keeps_out_of_range_answers(self):
        trackable = make_trackable(
            {"type": "scale", "min": 1, "max": 5, "answers": {DAY_1: 5, DAY_2: 2}}
        )
        shrunk = update_scale_to(trackable, 3)
        assert shrunk["data"]["max"] == 3
        assert shrunk["data"]["answers"] == {DAY_1: 5, DAY_2: 2}
        assert out_of_range_days(shrunk) == [DAY_1]

    def test_both_bounds_are_checked_together(self):
        trackable = make_trackable(get_scale_template(0, 5))
        moved = update_scale_bounds(trackable, min=8, max=10)
        assert (moved["data"]["min"], moved["data"]["max"]) == (8, 10)
        with pytest.raises(ValidationError):
            update_scale_bounds(trackable, min=8)

    def test_min_above_max_is_rejected(self):
        trackable = make_trackable(get_scale_template(1, 5))
        with pytest.raises(ValidationError):
            update_scale_from(trackable, 6)
        with pytest.raises(ValidationError):
            update_scale_to(trackable, 0)

    def test_only_scale_trackables_have_bounds(self):
        trackable = make_trackable({"type": "int", "answers": {}})
        with pytest.raises(ValidationError):
            update_scale_from(trackable, 0)


class TestIcons:
    @pytest.fixture
    def trackable(self) -> Trackable:
        data = get_icon_template(2)
        data["answers"] = {DAY_1: 0}
        return make_trackable(data)

    def test_add_icon_appends(self, trackable):
        updated = add_icon(trackable, "moon")
        assert updated["data"]["choices"][-1] == "moon"
        assert len(trackable["data"]["choices"]) == 2

    def test_unknown_icon_is_rejected(self, trackable):
        with pytest.raises(ValidationError):
            add_icon(trackable, "unicorn")
        with pytest.raises(ValidationError):
            set_icon(trackable, 0, "unicorn")

    def test_set_icon(self, trackable):
        assert set_icon(trackable, 1, "bolt")["data"]["choices"][1] == "bolt"
        with pytest.raises(ValidationError):
            set_icon(trackable, 5, "bolt")

    def test_only_the_unused_last_icon_can_be_deleted(self, trackable):
        assert can_delete_icon(trackable, 1)
        assert not can_delete_icon(trackable, 0)
        assert delete_icon(trackable, 1)["data"]["choices"] == [
            trackable["data"]["choices"][0]
        ]

    def test_icon_in_use_cannot_be_deleted(self, trackable):
        single = delete_icon(trackable, 1)
        with pytest.raises(ValidationError):
            delete_icon(single, 0)

        trackable["data"]["answers"] = {DAY_1: 1}
        with pytest.raises(InUseError):
            delete_icon(trackable, 1)
