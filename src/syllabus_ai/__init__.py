"""syllabus-ai: Document-to-Calendar extraction.

Extracts dated events (exams, assignments, readings, classes) from PDF
documents or pasted text using Google Gemini, with a deterministic regex
fallback.
"""

from __future__ import annotations

from syllabus_ai.exceptions import (
    AnalysisFailed,
    ClientInputError,
    ExtractionFailed,
    MalformedResponseError,
)
from syllabus_ai.llm import GeminiEventExtractor
from syllabus_ai.models import (
    EventType,
    ExtractedText,
    ProcessingDebug,
    ResultEnvelope,
    ScheduleEvent,
    StrategyFailure,
)
from syllabus_ai.pipeline import ExtractionOrchestrator, build_orchestrator, process_document
from syllabus_ai.regex_extractor import RegexDateEventExtractor
from syllabus_ai.response_parser import parse_event_array
from syllabus_ai.text_extraction import TextExtractionCascade

__version__ = "0.1.0"

__all__ = [
    "AnalysisFailed",
    "ClientInputError",
    "EventType",
    "ExtractedText",
    "ExtractionFailed",
    "ExtractionOrchestrator",
    "GeminiEventExtractor",
    "MalformedResponseError",
    "ProcessingDebug",
    "RegexDateEventExtractor",
    "ResultEnvelope",
    "ScheduleEvent",
    "StrategyFailure",
    "TextExtractionCascade",
    "build_orchestrator",
    "parse_event_array",
    "process_document",
]
