# SPDX-License-Identifier: MIT

"""
Order-preserving association lists.

Stores, chartable sums and chart entries keep their items in a list of
(key, value) pairs rather than a dict because the order is what the user
sees and edits. Lookup is linear, which is fine for the handful of items a
person tracks.

None of these functions mutate their input; each returns a new list.
"""

from typing import Callable, Optional


def keys[K, V](pairs: list[tuple[K, V]]) -> list[K]:
    return [key for key, _ in pairs]


def values[K, V](pairs: list[tuple[K, V]]) -> list[V]:
    return [value for _, value in pairs]


def get[K, V](pairs: list[tuple[K, V]], key: K) -> Optional[V]:
    for pair_key, value in pairs:
        if pair_key == key:
            return value
    return None


def contains[K, V](pairs: list[tuple[K, V]], key: K) -> bool:
    return any(pair_key == key for pair_key, _ in pairs)


def index_of[K, V](pairs: list[tuple[K, V]], key: K) -> Optional[int]:
    for index, (pair_key, _) in enumerate(pairs):
        if pair_key == key:
            return index
    return None


def insert[K, V](
    pairs: list[tuple[K, V]], key: K, value: V, at_head: bool = False
) -> list[tuple[K, V]]:
    """
    Add a pair at the head or tail. An existing pair with the same key is
    replaced in place instead, so keys stay unique.
    """
    if contains(pairs, key):
        return replace(pairs, key, value)
    if at_head:
        return [(key, value)] + list(pairs)
    return list(pairs) + [(key, value)]


def replace[K, V](
    pairs: list[tuple[K, V]], key: K, value: V
) -> list[tuple[K, V]]:
    return [
        (pair_key, value if pair_key == key else pair_value)
        for pair_key, pair_value in pairs
    ]


def update[K, V](
    pairs: list[tuple[K, V]], key: K, fn: Callable[[V], V]
) -> list[tuple[K, V]]:
    return [
        (pair_key, fn(pair_value) if pair_key == key else pair_value)
        for pair_key, pair_value in pairs
    ]


def replace_key[K, V](
    pairs: list[tuple[K, V]], old_key: K, new_key: K, value: V
) -> list[tuple[K, V]]:
    """Swap the pair at old_key for (new_key, value), keeping its position."""
    return [
        (new_key, value) if pair_key == old_key else (pair_key, pair_value)
        for pair_key, pair_value in pairs
    ]


def delete[K, V](pairs: list[tuple[K, V]], key: K) -> list[tuple[K, V]]:
    return [(pair_key, value) for pair_key, value in pairs if pair_key != key]


def move_up[K, V](pairs: list[tuple[K, V]], key: K) -> list[tuple[K, V]]:
    index = index_of(pairs, key)
    result = list(pairs)
    if index is None or index == 0:
        return result
    result[index - 1], result[index] = result[index], result[index - 1]
    return result


def move_down[K, V](pairs: list[tuple[K, V]], key: K) -> list[tuple[K, V]]:
    index = index_of(pairs, key)
    result = list(pairs)
    if index is None or index == len(result) - 1:
        return result
    result[index], result[index + 1] = result[index + 1], result[index]
    return result
