# SPDX-License-Identifier: MIT

"""
JSON form of the user data document.

The document is one object with a store per kind of item. Each store keeps
its items as [id, value] pairs so the order survives a round trip, along
with the next id to hand out:

    {
        "trackables": {"nextId": 3, "items": [[1, {...}], [2, {...}]]},
        "chartables": {"nextId": 1, "items": []},
        "lineCharts": {"nextId": 1, "items": []}
    }

Answer maps are keyed by the day number written as a string.
"""

import json
import logging
from typing import Any, Callable, Optional

from tracklines.colour import DEFAULT_COLOUR, Colour, is_colour
from tracklines.error import StorageError
from tracklines.model.chartable import Chartable
from tracklines.model.ids import ChartableId, ChartId, TrackableId
from tracklines.model.line_chart import ChartData, ChartEntry, LineChart
from tracklines.model.trackable import Trackable, TrackableData
from tracklines.model.user_data import IdStore, UserData
from tracklines.template.user_data import get_user_data_template

logger = logging.getLogger(__name__)

DATA_TYPE_NAMES = {
    "yes_no": "yesNo",
    "icon": "icon",
    "scale": "scale",
    "int": "int",
    "float": "float",
    "text": "text",
}
DATA_TYPES_BY_NAME = {name: data_type for data_type, name in DATA_TYPE_NAMES.items()}


def to_json(user_data: UserData) -> str:
    return json.dumps(encode_user_data(user_data))


def from_json(text: Optional[str]) -> UserData:
    """Decode a document. No document at all is an empty set of user data."""
    if text is None or text.strip() == "":
        return get_user_data_template()
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise StorageError(f"User data is not valid JSON: {e}") from e
    return decode_user_data(raw)


# ─────────────────────────────────────────────────────────────
# Encoding
# ─────────────────────────────────────────────────────────────


def encode_user_data(user_data: UserData) -> dict[str, Any]:
    return {
        "trackables": _encode_store(user_data["trackables"], encode_trackable),
        "chartables": _encode_store(user_data["chartables"], encode_chartable),
        "lineCharts": _encode_store(user_data["line_charts"], encode_line_chart),
    }


def _encode_store[K: int, V](
    store: IdStore[K, V], encode: Callable[[V], dict[str, Any]]
) -> dict[str, Any]:
    return {
        "nextId": store["next_id"],
        "items": [[int(id), encode(value)] for id, value in store["items"]],
    }


def encode_trackable(trackable: Trackable) -> dict[str, Any]:
    data = trackable["data"]
    encoded_data: dict[str, Any] = {
        "type": DATA_TYPE_NAMES[data["type"]],
        "answers": {str(day): answer for day, answer in data["answers"].items()},
    }
    if data["type"] == "icon":
        encoded_data["choices"] = list(data["choices"])
    elif data["type"] == "scale":
        encoded_data["min"] = data["min"]
        encoded_data["max"] = data["max"]
    return {
        "question": trackable["question"],
        "colour": trackable["colour"],
        "data": encoded_data,
    }


def encode_chartable(chartable: Chartable) -> dict[str, Any]:
    return {
        "name": chartable["name"],
        "colour": chartable["colour"],
        "inverted": chartable["inverted"],
        "sum": [
            {"trackableId": int(trackable_id), "multiplier": multiplier}
            for trackable_id, multiplier in chartable["sum"]
        ],
    }


def encode_line_chart(line_chart: LineChart) -> dict[str, Any]:
    return {
        "name": line_chart["name"],
        "fillLines": line_chart["fill_lines"],
        "chartables": [_encode_chart_entry(entry) for entry in line_chart["entries"]],
    }


def _encode_chart_entry(entry: ChartEntry) -> dict[str, Any]:
    data = entry["data"]
    if data["kind"] == "chartable":
        return {"chartableId": int(data["chartable_id"]), "visible": entry["visible"]}
    return {
        "trackableId": int(data["trackable_id"]),
        "multiplier": data["multiplier"],
        "inverted": data["inverted"],
        "visible": entry["visible"],
    }


# ─────────────────────────────────────────────────────────────
# Decoding
# ─────────────────────────────────────────────────────────────


def decode_user_data(raw: Any) -> UserData:
    if raw is None:
        return get_user_data_template()
    try:
        return {
            "trackables": _decode_store(
                raw.get("trackables"), TrackableId, decode_trackable
            ),
            "chartables": _decode_store(
                raw.get("chartables"), ChartableId, decode_chartable
            ),
            "line_charts": _decode_store(
                raw.get("lineCharts"), ChartId, decode_line_chart
            ),
        }
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise StorageError(f"User data document is malformed: {e!r}") from e


def _decode_store[K: int, V](
    raw: Optional[dict[str, Any]],
    make_id: Callable[[int], K],
    decode: Callable[[dict[str, Any]], V],
) -> IdStore[K, V]:
    if raw is None:
        return {"next_id": 1, "items": []}
    items = [(make_id(int(id)), decode(value)) for id, value in raw["items"]]
    highest = max((int(id) for id, _ in items), default=0)
    next_id = raw.get("nextId")
    # Never hand out an id that is already taken, even if nextId is stale
    next_id = max(int(next_id), highest + 1) if next_id is not None else highest + 1
    return {"next_id": next_id, "items": items}


def _decode_colour(raw: Optional[str]) -> Colour:
    if raw is not None and is_colour(raw):
        return raw
    logger.warning("Unknown colour %r in user data, using %s", raw, DEFAULT_COLOUR)
    return DEFAULT_COLOUR


def decode_trackable(raw: dict[str, Any]) -> Trackable:
    return {
        "question": str(raw["question"]),
        "colour": _decode_colour(raw.get("colour")),
        "data": _decode_trackable_data(raw["data"]),
    }


def _decode_trackable_data(raw: dict[str, Any]) -> TrackableData:
    data_type = DATA_TYPES_BY_NAME.get(raw["type"])
    if data_type is None:
        raise ValueError(f"unknown answer type {raw['type']!r}")
    answers: dict[str, Any] = raw.get("answers", {})

    match data_type:
        case "yes_no":
            return {
                "type": "yes_no",
                "answers": {int(day): bool(value) for day, value in answers.items()},
            }
        case "icon":
            return {
                "type": "icon",
                "choices": [str(choice) for choice in raw["choices"]],
                "answers": {int(day): int(value) for day, value in answers.items()},
            }
        case "scale":
            return {
                "type": "scale",
                "min": int(raw["min"]),
                "max": int(raw["max"]),
                "answers": {int(day): int(value) for day, value in answers.items()},
            }
        case "int":
            return {
                "type": "int",
                "answers": {int(day): int(value) for day, value in answers.items()},
            }
        case "float":
            return {
                "type": "float",
                "answers": {int(day): float(value) for day, value in answers.items()},
            }
        case _:
            return {
                "type": "text",
                "answers": {int(day): str(value) for day, value in answers.items()},
            }


def _decode_chartable_colour(raw: Optional[str]) -> Optional[Colour]:
    # An unknown override falls back to the derived colour
    if raw is None or is_colour(raw):
        return raw
    logger.warning("Unknown chartable colour %r in user data, dropping it", raw)
    return None


def decode_chartable(raw: dict[str, Any]) -> Chartable:
    return {
        "name": str(raw.get("name", "")),
        "colour": _decode_chartable_colour(raw.get("colour")),
        "inverted": bool(raw.get("inverted", False)),
        "sum": [
            (TrackableId(int(member["trackableId"])), float(member["multiplier"]))
            for member in raw.get("sum", [])
        ],
    }


def decode_line_chart(raw: dict[str, Any]) -> LineChart:
    return {
        "name": str(raw.get("name", "")),
        "fill_lines": bool(raw.get("fillLines", True)),
        "entries": [_decode_chart_entry(entry) for entry in raw.get("chartables", [])],
    }


def _decode_chart_entry(raw: dict[str, Any]) -> ChartEntry:
    data: ChartData
    if "chartableId" in raw:
        data = {"kind": "chartable", "chartable_id": ChartableId(int(raw["chartableId"]))}
    else:
        data = {
            "kind": "trackable",
            "trackable_id": TrackableId(int(raw["trackableId"])),
            "multiplier": float(raw.get("multiplier", 1.0)),
            "inverted": bool(raw.get("inverted", False)),
        }
    return {"data": data, "visible": bool(raw.get("visible", True))}
