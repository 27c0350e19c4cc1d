"""Deterministic regex-based event extraction.

The fallback used when the Gemini path fails.  It scans text line by line
for date-shaped substrings, classifies the line by keywords and derives a
title from the text around the date.  It over-generates on purpose and
never raises.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime

from dateutil import parser as date_parser

from syllabus_ai.models.events import TITLE_MAX_LENGTH, EventType, ScheduleEvent

logger = logging.getLogger(__name__)

_MONTHS = (
    r"Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?"
    r"|Aug(?:ust)?|Sept?(?:ember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?"
)

# Long form, slash form, ISO form -- applied in this order on every line.
DATE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\b(?:{_MONTHS})\.?\s+\d{{1,2}},?\s+\d{{4}}\b", re.IGNORECASE),
    re.compile(r"\b\d{1,2}/\d{1,2}/(?:\d{4}|\d{2})\b"),
    re.compile(r"\b\d{4}-\d{2}-\d{2}\b"),
)

# Checked in insertion order; the first type with a matching keyword wins.
EVENT_KEYWORDS: dict[EventType, tuple[str, ...]] = {
    "exam": ("exam", "test", "quiz", "midterm", "final"),
    "assignment": ("assignment", "homework", "hw", "project", "paper", "essay", "due"),
    "reading": ("reading", "read", "chapter", "ch.", "pages"),
    "class": ("class", "lecture", "session", "meeting"),
}


def classify_line(line: str) -> EventType:
    """Return the event type suggested by keywords in *line*."""
    lowered = line.lower()
    for event_type, keywords in EVENT_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return event_type
    return "other"


def parse_date(value: str) -> datetime | None:
    """Parse a matched date substring, or return ``None`` if it is invalid.

    Slash dates are read strictly month-first (``1/15/2025`` is January
    15); a first field above 12 is rejected rather than swapped.
    """
    try:
        if "/" in value and int(value.split("/", 1)[0]) > 12:
            return None
        return date_parser.parse(value, dayfirst=False)
    except (ValueError, OverflowError):
        return None


def _derive_title(line: str, start: int, end: int) -> str:
    before = line[:start].strip()
    after = line[end:].strip()
    title = after if len(after) > len(before) else before
    return title[:TITLE_MAX_LENGTH].strip()


class RegexDateEventExtractor:
    """Line-oriented date matcher used as the pipeline's safety net."""

    name = "regex"

    def extract(self, text: str) -> list[ScheduleEvent]:
        """Extract every dated line fragment from *text*.

        Args:
            text: Plain document text.

        Returns:
            Events in line order, then pattern order, then match order.
            Empty when *text* contains no parseable date substrings.
        """
        events: list[ScheduleEvent] = []

        for line in text.splitlines():
            for pattern in DATE_PATTERNS:
                for match in pattern.finditer(line):
                    parsed = parse_date(match.group(0))
                    if parsed is None:
                        logger.debug("Discarding unparseable date %r", match.group(0))
                        continue

                    title = _derive_title(line, match.start(), match.end())
                    if not title:
                        continue

                    events.append(
                        ScheduleEvent(
                            title=title,
                            date=parsed.date().isoformat(),
                            type=classify_line(line),
                            description="",
                        )
                    )

        logger.info("Regex fallback found %d candidate event(s)", len(events))
        return events
