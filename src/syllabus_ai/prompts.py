"""Prompt builders for the Gemini event-extraction call.

The system prompt fixes the output contract (a bare JSON array of event
objects) and the year-inference rule for dates without a year.  The
academic year is derived from an explicit reference date so callers and
tests can pin it.
"""

from __future__ import annotations

from datetime import date

from syllabus_ai.models.events import EVENT_TYPES

# Months from which a reference date belongs to the academic year that
# starts in the same calendar year.
_ACADEMIC_YEAR_START_MONTH = 7


def academic_year_for(reference_date: date) -> tuple[int, int]:
    """Return the ``(first, second)`` calendar years of the academic year.

    A reference date in July or later belongs to the academic year that
    starts that autumn; earlier dates belong to the one that started the
    previous autumn.

    Args:
        reference_date: The date considered "today".

    Returns:
        A tuple such as ``(2024, 2025)``.
    """
    if reference_date.month >= _ACADEMIC_YEAR_START_MONTH:
        first = reference_date.year
    else:
        first = reference_date.year - 1
    return first, first + 1


def build_system_prompt(reference_date: date) -> str:
    """Build the system prompt for the extraction call.

    Args:
        reference_date: Date used to resolve the current academic year.

    Returns:
        The complete system prompt string.
    """
    first, second = academic_year_for(reference_date)
    types = "/".join(EVENT_TYPES)
    return f"""\
You are a helpful assistant that extracts dates and events from academic syllabi.
You MUST respond with ONLY a valid JSON array, no additional text or explanation.
If the year is not specified, assume it's the current academic year ({first}-{second}).
If only a day and month are given, use {first} for September-December dates, and {second} for January-May dates.
Each event object must have: title (string), date (YYYY-MM-DD format), type ({types}), and optionally description (string)."""


def build_user_prompt(text: str) -> str:
    """Build the user prompt embedding the (already truncated) document text.

    Args:
        text: Document text to analyse.

    Returns:
        The user prompt string, including an example of the expected format.
    """
    return f"""\
Extract all important dates and events from this syllabus text and return ONLY a JSON array:

{text}

Example response format:
[
  {{"title": "First Day of Class", "date": "2024-09-05", "type": "class", "description": "Introduction to course"}},
  {{"title": "Midterm Exam", "date": "2024-10-15", "type": "exam", "description": "Covers chapters 1-5"}}
]"""
