"""Pipeline orchestrator for the document-to-events workflow.

Wires all components together: text resolution (manual text or the PDF
extraction cascade), Gemini analysis with the regex fallback, event
validation and id assignment.  The entry point is
:meth:`ExtractionOrchestrator.process`, which always returns a
:class:`~syllabus_ai.models.result.ResultEnvelope` and never raises.
"""

from __future__ import annotations

import logging
from typing import Protocol

from syllabus_ai.config import ConfigError, Settings, load_settings
from syllabus_ai.exceptions import ClientInputError, ExtractionFailed
from syllabus_ai.llm import GeminiEventExtractor
from syllabus_ai.models.events import ScheduleEvent
from syllabus_ai.models.result import ProcessingDebug, ResultEnvelope
from syllabus_ai.models.text import ExtractedText, StrategyFailure
from syllabus_ai.regex_extractor import RegexDateEventExtractor
from syllabus_ai.text_extraction import (
    TextExtractionCascade,
    clean_extracted_text,
    passes_quality_gate,
)
from syllabus_ai.validation import validate_events

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 10_000

TEXT_TOO_SHORT = "Text too short or empty. Please check your input."
NO_INPUT = "No file or text provided"
NOT_A_PDF = "Please upload a PDF file"


class EventAnalyzer(Protocol):
    """The primary analysis step (normally :class:`GeminiEventExtractor`)."""

    name: str

    def analyze(self, text: str) -> list[ScheduleEvent]: ...


class ExtractionOrchestrator:
    """Turn a document or pasted text into a result envelope.

    The orchestrator holds only its collaborators; each :meth:`process`
    call is independent.

    Args:
        analyzer: Primary event analyzer.
        cascade: Text-extraction cascade for PDF bytes.  Defaults to a
            :class:`TextExtractionCascade` with the default strategies.
        fallback: Regex extractor used when the analyzer fails.
    """

    def __init__(
        self,
        analyzer: EventAnalyzer,
        cascade: TextExtractionCascade | None = None,
        fallback: RegexDateEventExtractor | None = None,
    ) -> None:
        self._analyzer = analyzer
        self._cascade = cascade or TextExtractionCascade()
        self._fallback = fallback or RegexDateEventExtractor()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def process(
        self,
        manual_text: str | None = None,
        file_bytes: bytes | None = None,
        filename: str | None = None,
    ) -> ResultEnvelope:
        """Run the full pipeline.

        Non-blank *manual_text* takes precedence over *file_bytes*.

        Args:
            manual_text: Text pasted by the user.
            file_bytes: Raw PDF bytes.
            filename: Original upload name; when given it must end in
                ``.pdf``.

        Returns:
            ``success=True`` with numbered events, or ``success=False``
            with an error message and any accumulated diagnostics.
        """
        diagnostics: list[StrategyFailure] = []
        try:
            return self._run(manual_text, file_bytes, filename, diagnostics)
        except ClientInputError as exc:
            logger.info("Rejected input: %s", exc)
            return ResultEnvelope.fail(str(exc))
        except ExtractionFailed as exc:
            logger.error("Text extraction failed: %s", exc)
            return ResultEnvelope.fail(
                f"Could not read text from the PDF. Try pasting the text manually. ({exc})",
                exc.diagnostics,
            )
        except ConfigError as exc:
            logger.error("Configuration error: %s", exc)
            return ResultEnvelope.fail(f"Configuration error: {exc}", diagnostics)
        except Exception as exc:
            logger.exception("Processing failed")
            return ResultEnvelope.fail(f"Processing error: {exc}", diagnostics)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _run(
        self,
        manual_text: str | None,
        file_bytes: bytes | None,
        filename: str | None,
        diagnostics: list[StrategyFailure],
    ) -> ResultEnvelope:
        source = self._resolve_text(manual_text, file_bytes, filename)
        if not passes_quality_gate(source.text):
            raise ClientInputError(TEXT_TOO_SHORT)

        text = source.text[:MAX_TEXT_LENGTH]
        logger.info("Processing text of length %d from %s", len(text), source.strategy)

        candidates, events_source = self._analyze(text, diagnostics)
        events = [
            event.model_copy(update={"id": index})
            for index, event in enumerate(validate_events(candidates), start=1)
        ]

        logger.info("Pipeline complete: %d event(s) via %s", len(events), events_source)
        return ResultEnvelope.ok(
            events,
            ProcessingDebug(
                text_length=len(text),
                events_found=len(events),
                source=source.strategy,
                events_source=events_source,
            ),
        )

    def _resolve_text(
        self,
        manual_text: str | None,
        file_bytes: bytes | None,
        filename: str | None,
    ) -> ExtractedText:
        if manual_text and manual_text.strip():
            logger.info("Using manual text, length: %d", len(manual_text))
            return ExtractedText(text=clean_extracted_text(manual_text), strategy="manual")

        if not file_bytes:
            raise ClientInputError(NO_INPUT)
        if filename is not None and not filename.lower().endswith(".pdf"):
            raise ClientInputError(NOT_A_PDF)

        logger.info("Processing file %s, size: %d bytes", filename or "<bytes>", len(file_bytes))
        return self._cascade.extract(file_bytes)

    def _analyze(
        self,
        text: str,
        diagnostics: list[StrategyFailure],
    ) -> tuple[list[ScheduleEvent], str]:
        """Run the analyzer, falling back to the regex extractor on failure.

        Raises:
            ConfigError: Propagated from the analyzer without a fallback.
            Exception: The analyzer's own failure when the fallback also
                finds nothing.
        """
        try:
            return self._analyzer.analyze(text), self._analyzer.name
        except ConfigError:
            raise
        except Exception as exc:
            diagnostics.append(StrategyFailure(self._analyzer.name, str(exc)))
            logger.warning("%s analysis failed, trying regex fallback: %s", self._analyzer.name, exc)

            fallback_events = self._fallback.extract(text)
            if fallback_events:
                logger.info("Fallback extracted %d event(s)", len(fallback_events))
                return fallback_events, self._fallback.name

            diagnostics.append(StrategyFailure(self._fallback.name, "No dated events found"))
            raise


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


def build_orchestrator(settings: Settings) -> ExtractionOrchestrator:
    """Build an orchestrator with the default collaborators for *settings*."""
    analyzer = GeminiEventExtractor(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        timeout_seconds=settings.llm_timeout_seconds,
        reference_date=settings.reference_date,
    )
    return ExtractionOrchestrator(analyzer)


def process_document(
    manual_text: str | None = None,
    file_bytes: bytes | None = None,
    filename: str | None = None,
    settings: Settings | None = None,
) -> ResultEnvelope:
    """Load settings (unless given), build the pipeline and process one request.

    A :class:`ConfigError` raised while loading settings is returned as a
    failure envelope like every other error.
    """
    if settings is None:
        try:
            settings = load_settings()
        except ConfigError as exc:
            logger.error("Configuration error: %s", exc)
            return ResultEnvelope.fail(f"Configuration error: {exc}")

    return build_orchestrator(settings).process(
        manual_text=manual_text,
        file_bytes=file_bytes,
        filename=filename,
    )
