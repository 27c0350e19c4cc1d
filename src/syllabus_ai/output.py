"""Console output for pipeline results.

:func:`format_envelope_json` renders the wire envelope as JSON (the
default CLI output); :func:`format_envelope_text` renders a readable
summary with events grouped by date.  :func:`print_envelope` writes either
form to stdout.
"""

from __future__ import annotations

import json
import sys
from datetime import date
from itertools import groupby

from syllabus_ai.models.events import ScheduleEvent
from syllabus_ai.models.result import ResultEnvelope

_BANNER_WIDTH = 60
_SEPARATOR = "=" * _BANNER_WIDTH


def format_envelope_json(envelope: ResultEnvelope, pretty: bool = False) -> str:
    """Serialise the wire form of *envelope*."""
    return json.dumps(envelope.to_wire(), indent=2 if pretty else None, ensure_ascii=False)


def format_envelope_text(envelope: ResultEnvelope) -> str:
    """Render *envelope* as a human-readable report.

    Events are listed chronologically (stable within a day) under a
    heading per date.  Failures show the error and every diagnostic line.
    """
    lines: list[str] = [_SEPARATOR, "  SYLLABUS EVENTS", _SEPARATOR]

    if not envelope.success:
        lines.append("")
        lines.append(f"  Error: {envelope.error}")
        for detail in envelope.details:
            lines.append(f"    - {detail}")
        lines.append(_SEPARATOR)
        return "\n".join(lines)

    events = envelope.events or []
    if not events:
        lines.append("")
        lines.append("  No dated events found in this document.")

    ordered = sorted(events, key=lambda e: e.date)
    for event_date, day_events in groupby(ordered, key=lambda e: e.date):
        lines.append("")
        lines.append(f"--- {_format_date(event_date)} ---")
        for event in day_events:
            lines.append(_format_event(event))

    if envelope.debug is not None:
        lines.append("")
        lines.append("--- SUMMARY ---")
        lines.append(f"  Events found: {envelope.debug.events_found}")
        lines.append(f"  Text length: {envelope.debug.text_length}")
        lines.append(f"  Text source: {envelope.debug.source}")
        lines.append(f"  Event source: {envelope.debug.events_source}")

    lines.append(_SEPARATOR)
    return "\n".join(lines)


def print_envelope(envelope: ResultEnvelope, fmt: str = "json", pretty: bool = False) -> None:
    """Format and print *envelope* to stdout."""
    if fmt == "text":
        rendered = format_envelope_text(envelope)
    else:
        rendered = format_envelope_json(envelope, pretty=pretty)
    sys.stdout.write(rendered + "\n")


def _format_date(value: str) -> str:
    try:
        return date.fromisoformat(value).strftime("%A %Y-%m-%d")
    except ValueError:
        return value


def _format_event(event: ScheduleEvent) -> str:
    line = f"  #{event.id} [{event.type.upper()}] {event.title}"
    if event.description:
        line += f" -- {event.description}"
    return line
