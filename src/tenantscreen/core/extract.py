"""Heuristic value lookup over provider response bodies.

Provider responses are nested JSON whose exact shape is not contractually
fixed, so callers search by key name instead of by path. Missing or
unexpected structure never raises: lookups return ``None`` and counts
return ``0``.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

_INT_PATTERN = re.compile(r"^\d+$")
_FLOAT_PATTERN = re.compile(r"^\d+(\.\d+)?$")


def find_first_value(node: Any, *keys: str) -> int | float | None:
    """Return the first numeric value stored under any of ``keys``.

    Each mapping is checked for the candidate keys (in order) before its
    children are searched depth-first. Null values and non-numeric strings
    are skipped.
    """
    if isinstance(node, list):
        for item in node:
            found = find_first_value(item, *keys)
            if found is not None:
                return found
        return None
    if not isinstance(node, Mapping):
        return None

    for key in keys:
        if key not in node:
            continue
        coerced = _coerce_number(node[key])
        if coerced is not None:
            return coerced

    for value in node.values():
        if isinstance(value, list):
            for item in value:
                found = find_first_value(item, *keys)
                if found is not None:
                    return found
        elif isinstance(value, Mapping):
            found = find_first_value(value, *keys)
            if found is not None:
                return found

    return None


def count_occurrences(node: Any, *keys: str) -> int:
    """Sum occurrences of ``keys`` across the whole structure.

    Lists contribute their length, numbers their value and any other truthy
    value counts once. Every nesting level is visited, so a record reported
    both as a list and as a count is counted twice.
    """
    total: float = 0

    def walk(current: Any) -> None:
        nonlocal total
        if isinstance(current, list):
            for item in current:
                walk(item)
            return
        if not isinstance(current, Mapping):
            return

        for key in keys:
            if key not in current:
                continue
            value = current[key]
            if isinstance(value, list):
                total += len(value)
            elif isinstance(value, bool):
                total += 1 if value else 0
            elif isinstance(value, (int, float)):
                total += value
            elif value:
                total += 1

        for value in current.values():
            if isinstance(value, (list, Mapping)):
                walk(value)

    walk(node)
    return int(total)


def _coerce_number(value: Any) -> int | float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INT_PATTERN.match(text):
            return int(text)
        if _FLOAT_PATTERN.match(text):
            return float(text)
    return None


__all__ = ["count_occurrences", "find_first_value"]
