"""Validation and normalisation of candidate events.

Candidates come either from the parsed LLM response (arbitrary JSON
values) or from the regex extractor (already :class:`ScheduleEvent`).
:func:`validate_events` turns both into clean ``ScheduleEvent`` objects and
drops whatever cannot be repaired.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from pydantic import ValidationError

from syllabus_ai.models.events import EVENT_TYPES, ScheduleEvent

logger = logging.getLogger(__name__)

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_SEPARATOR_RE = re.compile(r"[T\s]")


def _present(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def normalize_date(value: str) -> str | None:
    """Reduce a date or datetime string to ``YYYY-MM-DD``.

    Anything after a ``T`` or whitespace time separator is dropped.

    Returns:
        The date-only string, or ``None`` if it is not a valid calendar
        date in ``YYYY-MM-DD`` form.
    """
    date_part = _TIME_SEPARATOR_RE.split(value.strip(), maxsplit=1)[0]
    if not _ISO_DATE_RE.match(date_part):
        return None
    try:
        date.fromisoformat(date_part)
    except ValueError:
        return None
    return date_part


def normalize_type(value: Any) -> str:
    """Map a raw type value onto the closed event-type set (``other`` if unknown)."""
    event_type = str(value).strip().lower()
    return event_type if event_type in EVENT_TYPES else "other"


def validate_events(candidates: Iterable[Any]) -> list[ScheduleEvent]:
    """Filter and normalise candidate events.

    Keeps entries with a non-empty ``title``, ``date`` and ``type``,
    coerces ``date`` to ``YYYY-MM-DD`` and ``type`` to a known category.
    Order is preserved and no ``id`` is set.

    Args:
        candidates: Mappings or :class:`ScheduleEvent` instances.

    Returns:
        The surviving events.
    """
    valid: list[ScheduleEvent] = []

    for index, candidate in enumerate(candidates):
        if isinstance(candidate, ScheduleEvent):
            data: Mapping[str, Any] = candidate.model_dump()
        elif isinstance(candidate, Mapping):
            data = candidate
        else:
            logger.warning("Skipping candidate %d: not an object (%r)", index, candidate)
            continue

        title, raw_date, raw_type = data.get("title"), data.get("date"), data.get("type")
        if not (_present(title) and _present(raw_date) and _present(raw_type)):
            logger.debug("Skipping candidate %d: missing title, date or type", index)
            continue

        event_date = normalize_date(str(raw_date))
        if event_date is None:
            logger.warning("Skipping '%s': invalid date %r", title, raw_date)
            continue

        description = data.get("description")
        try:
            valid.append(
                ScheduleEvent(
                    title=str(title),
                    date=event_date,
                    type=normalize_type(raw_type),
                    description=None if description is None else str(description),
                )
            )
        except ValidationError as exc:
            logger.warning("Skipping '%s': validation failed: %s", title, exc)

    return valid
