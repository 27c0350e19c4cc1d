"""Data models for syllabus-ai."""

from __future__ import annotations

from syllabus_ai.models.events import EVENT_TYPES, EventType, ScheduleEvent
from syllabus_ai.models.result import ProcessingDebug, ResultEnvelope
from syllabus_ai.models.text import ExtractedText, StrategyFailure

__all__ = [
    "EVENT_TYPES",
    "EventType",
    "ExtractedText",
    "ProcessingDebug",
    "ResultEnvelope",
    "ScheduleEvent",
    "StrategyFailure",
]
