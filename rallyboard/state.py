import json
from typing import Any, Mapping, Optional

# Scoreboard record shared between the controller, the remote source and the displays
DEFAULT_STATE = {
    "set_label": "",
    "current_game": 1,
    "rally_count": 0,
    "player_a_name": "Player A",
    "player_a_serve_success": 0,
    "player_a_forehand_wins": 0,
    "player_a_backhand_wins": 0,
    "player_b_name": "Player B",
    "player_b_serve_success": 0,
    "player_b_forehand_wins": 0,
    "player_b_backhand_wins": 0,
    "singlebar_visible": True,
    "doublebar_visible": True,
    "doublebar_metric": "serve_success",
}

# Allow-list: the only keys that may ever reach the record
FIELDS = frozenset(DEFAULT_STATE)


def default_record() -> dict:
    """Fresh copy of the built-in defaults"""
    return dict(DEFAULT_STATE)


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def parse_json(text):
    """json.loads limited to standard JSON: NaN and Infinity are rejected"""
    return json.loads(text, parse_constant=_reject_constant)


def same_record(a: Mapping[str, Any], b: Mapping[str, Any]) -> bool:
    """Compare as JSON documents, so True and 1 are different values"""
    return json.dumps(a, sort_keys=True) == json.dumps(b, sort_keys=True)


def apply_local_update(current: Mapping[str, Any], payload: Any) -> dict:
    """Overwrite allow-listed keys of `current` with the controller's payload.

    Values are copied as-is: the controller may blank or zero any field.
    Unknown keys are dropped without error.
    """
    updated = dict(current)
    if not isinstance(payload, Mapping):
        return updated

    for key, value in payload.items():
        if key in FIELDS:
            updated[key] = value
    return updated


def extract_remote_fields(raw: Any) -> Optional[dict]:
    """Pull the recognized fields out of a remote snapshot.

    The source either sends the fields flat or wraps them in a "row" object.
    Null values are skipped so a partial row never wipes local data.
    Returns None when nothing usable is left.
    """
    if not isinstance(raw, Mapping):
        return None

    row = raw.get("row")
    payload = row if isinstance(row, Mapping) else raw

    fields = {
        key: payload[key]
        for key in DEFAULT_STATE
        if payload.get(key) is not None
    }
    return fields or None


def apply_remote_snapshot(current: Mapping[str, Any], raw: Any) -> Optional[dict]:
    remote = extract_remote_fields(raw)
    if remote is None:
        return None
    return {**current, **remote}
