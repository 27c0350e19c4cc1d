"""Custom exceptions for the syllabus-ai extraction pipeline.

Each stage raises its own exception type so the orchestrator can decide
whether a failure is recoverable (model failures fall back to the regex
extractor) or must be reported to the caller.
"""

from __future__ import annotations

from syllabus_ai.models.text import StrategyFailure


class ClientInputError(Exception):
    """Raised when the caller supplied no usable input.

    Covers a missing text/file, a non-PDF upload, or resolved text that is
    too short to analyse.  Not a pipeline defect and never retried.
    """


class ExtractionFailed(Exception):
    """Raised when every text-extraction strategy has been exhausted.

    Attributes:
        diagnostics: One :class:`StrategyFailure` per attempted strategy,
            in attempt order.
    """

    def __init__(self, diagnostics: list[StrategyFailure]) -> None:
        joined = "; ".join(str(d) for d in diagnostics)
        super().__init__(f"All extraction methods failed: {joined}")
        self.diagnostics = list(diagnostics)


class MalformedResponseError(Exception):
    """Raised when no event array can be recovered from an LLM response.

    Attributes:
        raw_response: The raw LLM output that failed to parse.
    """

    def __init__(self, message: str, raw_response: str = "") -> None:
        super().__init__(message)
        self.raw_response = raw_response


class AnalysisFailed(Exception):
    """Raised when the language-model analysis step cannot produce events.

    This covers API errors (network, auth, rate limits, timeouts) as well as
    responses from which no event array could be recovered.  The
    orchestrator catches it and runs the regex fallback.

    Attributes:
        cause: The underlying exception, if any.
        raw_response: The raw model output, if one was received.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        raw_response: str = "",
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.raw_response = raw_response
