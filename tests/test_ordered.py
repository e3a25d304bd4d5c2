# SPDX-License-Identifier: MIT

from tracklines import ordered

PAIRS = [("a", 1), ("b", 2), ("c", 3)]


class TestLookup:
    def test_get_and_contains(self):
        assert ordered.get(PAIRS, "b") == 2
        assert ordered.get(PAIRS, "z") is None
        assert ordered.contains(PAIRS, "c")
        assert not ordered.contains(PAIRS, "z")

    def test_index_of(self):
        assert ordered.index_of(PAIRS, "c") == 2
        assert ordered.index_of(PAIRS, "z") is None

    def test_keys_and_values_keep_order(self):
        assert ordered.keys(PAIRS) == ["a", "b", "c"]
        assert ordered.values(PAIRS) == [1, 2, 3]


class TestEdits:
    def test_insert_at_tail_and_head(self):
        assert ordered.insert(PAIRS, "d", 4) == PAIRS + [("d", 4)]
        assert ordered.insert(PAIRS, "d", 4, at_head=True) == [("d", 4)] + PAIRS

    def test_insert_existing_key_replaces_in_place(self):
        assert ordered.insert(PAIRS, "b", 9, at_head=True) == [
            ("a", 1),
            ("b", 9),
            ("c", 3),
        ]

    def test_replace_key_keeps_position(self):
        assert ordered.replace_key(PAIRS, "b", "x", 5) == [
            ("a", 1),
            ("x", 5),
            ("c", 3),
        ]

    def test_update(self):
        assert ordered.update(PAIRS, "c", lambda value: value * 10) == [
            ("a", 1),
            ("b", 2),
            ("c", 30),
        ]

    def test_delete(self):
        assert ordered.delete(PAIRS, "a") == [("b", 2), ("c", 3)]
        assert ordered.delete(PAIRS, "z") == PAIRS

    def test_edits_do_not_mutate_input(self):
        pairs = list(PAIRS)
        ordered.insert(pairs, "d", 4)
        ordered.delete(pairs, "a")
        ordered.move_up(pairs, "b")
        assert pairs == PAIRS


class TestReorder:
    def test_move_up(self):
        assert ordered.move_up(PAIRS, "b") == [("b", 2), ("a", 1), ("c", 3)]

    def test_move_down(self):
        assert ordered.move_down(PAIRS, "b") == [("a", 1), ("c", 3), ("b", 2)]

    def test_moving_past_the_ends_is_a_no_op(self):
        assert ordered.move_up(PAIRS, "a") == PAIRS
        assert ordered.move_down(PAIRS, "c") == PAIRS

    def test_moving_a_missing_key_is_a_no_op(self):
        assert ordered.move_up(PAIRS, "z") == PAIRS
        assert ordered.move_down(PAIRS, "z") == PAIRS
