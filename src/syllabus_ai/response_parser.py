"""Layered recovery of an event array from free-form LLM output.

Gemini is asked for a bare JSON array but does not always comply: it may
wrap the array in an object, surround it with prose or code fences, or
return a single event object.  :func:`parse_event_array` runs an ordered
chain of parse attempts, each returning the recovered list or ``None``,
and stops at the first success.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from typing import Any

from syllabus_ai.exceptions import MalformedResponseError

_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

# Object keys that may hold the event array, in lookup order.
_WRAPPER_KEYS = ("events", "data")

_NOT_JSON = object()
_NO_WRAPPER = object()


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return _NOT_JSON


def _unwrap(obj: dict[str, Any]) -> Any:
    """Return the value of the first wrapper key set on *obj*.

    Returns ``_NO_WRAPPER`` when neither key holds a value.  A wrapper
    whose value is not a list is returned as is so callers can reject it.
    """
    for key in _WRAPPER_KEYS:
        value = obj.get(key)
        if value is not None:
            return value
    return _NO_WRAPPER


def _parse_whole(content: str) -> list[Any] | None:
    """Parse the full response; unwrap ``events``/``data`` from an object."""
    value = _loads(content)
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        unwrapped = _unwrap(value)
        return unwrapped if isinstance(unwrapped, list) else None
    return None


def _parse_array_substring(content: str) -> list[Any] | None:
    """Parse the outermost ``[...]`` span found in the response."""
    match = _ARRAY_RE.search(content)
    if match is None:
        return None
    value = _loads(match.group(0))
    return value if isinstance(value, list) else None


def _parse_object_substring(content: str) -> list[Any] | None:
    """Parse the outermost ``{...}`` span and recover an array from it.

    ``events`` is preferred over ``data``; an object with neither is
    treated as a single event, and a wrapper holding anything other than
    a list yields nothing.
    """
    match = _OBJECT_RE.search(content)
    if match is None:
        return None
    value = _loads(match.group(0))
    if not isinstance(value, dict):
        return None
    unwrapped = _unwrap(value)
    if unwrapped is _NO_WRAPPER:
        return [value]
    return unwrapped if isinstance(unwrapped, list) else None


PARSE_ATTEMPTS: tuple[Callable[[str], list[Any] | None], ...] = (
    _parse_whole,
    _parse_array_substring,
    _parse_object_substring,
)


def parse_event_array(content: str) -> list[Any]:
    """Recover a list of candidate event objects from *content*.

    Args:
        content: Raw text returned by the language model.

    Returns:
        The recovered list.  Items are not validated here.

    Raises:
        MalformedResponseError: If no attempt yields a list.
    """
    cleaned = (content or "").strip()
    if not cleaned:
        raise MalformedResponseError("Empty response from LLM", raw_response=content or "")

    for attempt in PARSE_ATTEMPTS:
        result = attempt(cleaned)
        if result is not None:
            return result

    raise MalformedResponseError("Invalid response format from LLM", raw_response=content)
