"""Pydantic model for extracted schedule events.

A :class:`ScheduleEvent` is the single output unit of the pipeline.  Both
the Gemini analyzer and the regex fallback produce them, and the
orchestrator assigns the sequential ``id`` once the final list is known.
"""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, field_validator

EventType = Literal["exam", "assignment", "reading", "class", "other"]

EVENT_TYPES: tuple[str, ...] = get_args(EventType)

TITLE_MAX_LENGTH = 100


class ScheduleEvent(BaseModel):
    """A dated event extracted from a document.

    Attributes:
        title: Non-empty event title.
        date: Calendar date as a ``YYYY-MM-DD`` string (no time component).
        type: One of ``exam``, ``assignment``, ``reading``, ``class`` or
            ``other``.
        description: Optional free-text description.
        id: 1-based position in the final result list.  Only stable
            within a single pipeline invocation.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    date: str
    type: EventType
    description: str | None = None
    id: int | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value

    def to_wire(self) -> dict:
        """Return the JSON-ready dict, omitting unset optional fields."""
        return self.model_dump(exclude_none=True)
