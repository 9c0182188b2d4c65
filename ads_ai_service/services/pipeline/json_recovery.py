from __future__ import annotations

import json
from typing import Any


def _widest_object_span(text: str) -> str | None:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start : end + 1]


def _first_balanced_object(text: str) -> str | None:
    in_string = False
    escape = False
    start_idx: int | None = None
    depth = 0
    for idx, char in enumerate(text):
        if in_string:
            if escape:
                escape = False
            elif char == "\\":
                escape = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            # quotes only matter once we are inside an object
            in_string = start_idx is not None
            continue
        if char == "{":
            if start_idx is None:
                start_idx = idx
            depth += 1
        elif char == "}" and start_idx is not None:
            depth -= 1
            if depth == 0:
                return text[start_idx : idx + 1]
    return None


def _loads_object(text: str) -> dict[str, Any]:
    try:
        parsed = json.loads(text)
    except RecursionError as exc:
        raise ValueError("JSON nesting is too deep.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Parsed JSON must be an object.")
    return parsed


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse a reply that was asked to be a single JSON object.

    Falls back to the widest ``{...}`` span and then to the first balanced
    object, so prose or markdown fences around the object are tolerated.
    Raises ValueError when nothing parses into an object.
    """
    try:
        return _loads_object(text)
    except ValueError as exc:
        last_error = str(exc)

    for extract in (_widest_object_span, _first_balanced_object):
        candidate = extract(text)
        if candidate is None:
            continue
        try:
            return _loads_object(candidate)
        except ValueError as exc:
            last_error = str(exc)

    raise ValueError(f"No JSON object found: {last_error}")
