# SPDX-License-Identifier: MIT

from copy import deepcopy

from tracklines import ordered
from tracklines.error import NotFoundError, ValidationError
from tracklines.model.ids import ChartableId, TrackableId
from tracklines.model.line_chart import (
    ChartableData,
    ChartData,
    ChartDataKey,
    ChartDataKind,
    ChartEntry,
    LineChart,
    TrackableEntryData,
)

NO_NAME = "[no name]"

# Short prefixes naming an entry on the command line, e.g. "c3" or "t12"
ENTRY_KEY_PREFIXES: dict[ChartDataKind, str] = {"chartable": "c", "trackable": "t"}


def format_entry_key(key: ChartDataKey) -> str:
    return f"{ENTRY_KEY_PREFIXES[key[0]]}{key[1]}"


def display_name(line_chart: LineChart) -> str:
    if line_chart["name"] == "":
        return NO_NAME
    return line_chart["name"]


def entry_key(data: ChartData) -> ChartDataKey:
    if data["kind"] == "chartable":
        return ("chartable", data["chartable_id"])
    return ("trackable", data["trackable_id"])


def chartable_entry_data(chartable_id: ChartableId) -> ChartableData:
    return {"kind": "chartable", "chartable_id": chartable_id}


def trackable_entry_data(
    trackable_id: TrackableId, multiplier: float = 1.0, inverted: bool = False
) -> TrackableEntryData:
    return {
        "kind": "trackable",
        "trackable_id": trackable_id,
        "multiplier": multiplier,
        "inverted": inverted,
    }


def entry_pairs(line_chart: LineChart) -> list[tuple[ChartDataKey, ChartEntry]]:
    return [(entry_key(entry["data"]), entry) for entry in line_chart["entries"]]


def _with_pairs(
    line_chart: LineChart, pairs: list[tuple[ChartDataKey, ChartEntry]]
) -> LineChart:
    updated = deepcopy(line_chart)
    updated["entries"] = deepcopy(ordered.values(pairs))
    return updated


def has_entry(line_chart: LineChart, key: ChartDataKey) -> bool:
    return ordered.contains(entry_pairs(line_chart), key)


def get_entry(line_chart: LineChart, key: ChartDataKey) -> ChartEntry:
    entry = ordered.get(entry_pairs(line_chart), key)
    if entry is None:
        raise NotFoundError(f"The chart has no {key[0]} {key[1]}.")
    return deepcopy(entry)


def references_chartable(line_chart: LineChart, chartable_id: ChartableId) -> bool:
    return has_entry(line_chart, ("chartable", chartable_id))


def references_trackable(line_chart: LineChart, trackable_id: TrackableId) -> bool:
    return has_entry(line_chart, ("trackable", trackable_id))


def add_entry(line_chart: LineChart, data: ChartData, at_head: bool) -> LineChart:
    """Add a visible entry. Each chartable or trackable appears once per chart."""
    key = entry_key(data)
    if has_entry(line_chart, key):
        raise ValidationError(f"The chart already shows {key[0]} {key[1]}.")
    entry: ChartEntry = {"data": deepcopy(data), "visible": True}
    return _with_pairs(
        line_chart, ordered.insert(entry_pairs(line_chart), key, entry, at_head)
    )


def delete_entry(line_chart: LineChart, key: ChartDataKey) -> LineChart:
    get_entry(line_chart, key)
    return _with_pairs(line_chart, ordered.delete(entry_pairs(line_chart), key))


def move_entry_up(line_chart: LineChart, key: ChartDataKey) -> LineChart:
    get_entry(line_chart, key)
    return _with_pairs(line_chart, ordered.move_up(entry_pairs(line_chart), key))


def move_entry_down(line_chart: LineChart, key: ChartDataKey) -> LineChart:
    get_entry(line_chart, key)
    return _with_pairs(line_chart, ordered.move_down(entry_pairs(line_chart), key))


def toggle_visible(line_chart: LineChart, key: ChartDataKey) -> LineChart:
    entry = get_entry(line_chart, key)
    entry["visible"] = not entry["visible"]
    return _with_pairs(line_chart, ordered.replace(entry_pairs(line_chart), key, entry))


def replace_entry_data(
    line_chart: LineChart, key: ChartDataKey, data: ChartData
) -> LineChart:
    """
    Swap what an entry shows while keeping its position and visibility. Used
    for multiplier/inversion edits and for converting between entry kinds.
    """
    entry = get_entry(line_chart, key)
    new_key = entry_key(data)
    if new_key != key and has_entry(line_chart, new_key):
        raise ValidationError(f"The chart already shows {new_key[0]} {new_key[1]}.")
    entry["data"] = deepcopy(data)
    return _with_pairs(
        line_chart, ordered.replace_key(entry_pairs(line_chart), key, new_key, entry)
    )
