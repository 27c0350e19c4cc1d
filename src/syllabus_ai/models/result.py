"""Result envelope returned by the extraction pipeline.

Every call to :meth:`~syllabus_ai.pipeline.ExtractionOrchestrator.process`
returns a :class:`ResultEnvelope`; failures are reported through it rather
than raised.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from syllabus_ai.models.events import ScheduleEvent
from syllabus_ai.models.text import StrategyFailure


class ProcessingDebug(BaseModel):
    """Diagnostic counters attached to a successful result.

    Attributes:
        text_length: Length of the text handed to the analyzer.
        events_found: Number of events in the final list.
        source: Where the text came from (``"manual"`` or a strategy name).
        events_source: Which analyzer produced the events (``"llm"`` or
            ``"regex"``).
    """

    model_config = ConfigDict(populate_by_name=True)

    text_length: int | None = Field(default=None, alias="textLength")
    events_found: int | None = Field(default=None, alias="eventsFound")
    source: str | None = None
    events_source: str | None = Field(default=None, alias="eventsSource")


class ResultEnvelope(BaseModel):
    """Uniform success/failure response.

    Exactly one of ``events`` (on success) or ``error`` (on failure) is
    meaningful.  ``diagnostics`` carries the structured failure entries;
    on the wire they appear as ``details`` strings.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool
    events: list[ScheduleEvent] | None = None
    error: str | None = None
    debug: ProcessingDebug | None = None
    diagnostics: list[StrategyFailure] = Field(default_factory=list, exclude=True)

    @classmethod
    def ok(
        cls,
        events: list[ScheduleEvent],
        debug: ProcessingDebug | None = None,
    ) -> ResultEnvelope:
        return cls(success=True, events=events, debug=debug)

    @classmethod
    def fail(
        cls,
        error: str,
        diagnostics: list[StrategyFailure] | None = None,
    ) -> ResultEnvelope:
        return cls(success=False, error=error, diagnostics=list(diagnostics or []))

    @property
    def details(self) -> list[str]:
        """Diagnostics rendered as ``"<strategy>: <reason>"`` strings."""
        return [str(d) for d in self.diagnostics]

    def to_wire(self) -> dict:
        """Return the JSON-ready envelope dict with unset fields omitted."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        if self.diagnostics:
            data["details"] = self.details
        return data
