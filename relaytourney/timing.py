"""Race time parsing and ordering helpers."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .store import JsonStore

_INT = r"\s*([+-]?\d+)(?!\d)"
_DELIM = r"\s*(\S)"
_TIME = re.compile(_INT + _DELIM + _INT + _DELIM + _INT + _DELIM + _INT)


def parse_time(text: str) -> tuple[int, int, int, int]:
    """Split ``hh:mm:ss:ms`` into its four integer parts.

    Raises :class:`ValueError` when the text is not a valid time.
    """
    match = _TIME.match(text)
    if match is None:
        raise ValueError(f"not a time: {text!r}")
    hours, _, minutes, _, seconds, last_delimiter, milliseconds = match.groups()
    h, m, s, ms = int(hours), int(minutes), int(seconds), int(milliseconds)
    if (
        last_delimiter != ":"
        or h < 0
        or not 0 <= m < 60
        or not 0 <= s < 60
        or not 0 <= ms < 1000
    ):
        raise ValueError(f"not a time: {text!r}")
    return h, m, s, ms


def to_seconds(hours: int, minutes: int, seconds: int, milliseconds: int) -> float:
    """Total number of seconds for the given parts."""
    return hours * 3600 + minutes * 60 + seconds + milliseconds / 1000.0


def time_to_seconds(text: str) -> float:
    """Seconds for a ``hh:mm:ss:ms`` string, or 0.0 if it does not parse."""
    try:
        return to_seconds(*parse_time(text))
    except ValueError:
        return 0.0


def sort_times(times: Iterable[float]) -> list[float]:
    """Return the times in ascending order."""
    return sorted(times)


def next_id(store: JsonStore, table: str) -> int:
    """One more than the largest id in ``table`` (1 for an empty table)."""
    models = store.load("models")
    last_id = 0
    if isinstance(models, list) and models and isinstance(models[0], dict):
        for row in models[0].get(table) or []:
            if row["id"] > last_id:
                last_id = row["id"]
    return last_id + 1