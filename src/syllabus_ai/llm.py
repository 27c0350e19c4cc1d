"""Gemini-backed event extraction.

Wraps the Google ``google-genai`` SDK to extract schedule events from
document text.  Handles prompt construction, the API call (bounded by a
timeout, never retried), layered response parsing and event validation.
Every failure surfaces as :class:`~syllabus_ai.exceptions.AnalysisFailed`
so the orchestrator can fall back to the regex extractor.
"""

from __future__ import annotations

import logging
from datetime import date

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from syllabus_ai.config import ConfigError
from syllabus_ai.exceptions import AnalysisFailed, MalformedResponseError
from syllabus_ai.models.events import ScheduleEvent
from syllabus_ai.prompts import build_system_prompt, build_user_prompt
from syllabus_ai.response_parser import parse_event_array
from syllabus_ai.validation import validate_events

logger = logging.getLogger(__name__)

MAX_PROMPT_CHARS = 8000

_TEMPERATURE = 0.1
_MAX_OUTPUT_TOKENS = 2000


class GeminiEventExtractor:
    """Extract schedule events from text via Google Gemini.

    Args:
        api_key: Google Gemini API key.  When empty, :meth:`analyze`
            raises :class:`ConfigError` without touching the network.
        model: Model identifier to use for generation.
        timeout_seconds: Per-request timeout enforced by the SDK's HTTP
            client.
        reference_date: Date used to infer the academic year for dates
            without a year.  ``None`` means "today" at call time.
    """

    name = "llm"

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.0-flash",
        timeout_seconds: float = 30.0,
        reference_date: date | None = None,
    ) -> None:
        self._model = model
        self._reference_date = reference_date
        self._client: genai.Client | None = None
        if api_key:
            self._client = genai.Client(
                api_key=api_key,
                http_options=genai_types.HttpOptions(timeout=int(timeout_seconds * 1000)),
            )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def analyze(self, text: str) -> list[ScheduleEvent]:
        """Extract events from document text.

        Only the first :data:`MAX_PROMPT_CHARS` characters are sent.

        Args:
            text: Plain document text.

        Returns:
            Validated events in response order (possibly empty when the
            model answered with an empty array).

        Raises:
            ConfigError: If no API key was configured.
            AnalysisFailed: If the API call fails or no event array can be
                recovered from the response.
        """
        if self._client is None:
            raise ConfigError("GEMINI_API_KEY is not configured")

        reference = self._reference_date or date.today()
        system_prompt = build_system_prompt(reference)
        user_prompt = build_user_prompt(text[:MAX_PROMPT_CHARS])

        logger.debug("System prompt sent to Gemini:\n%s", system_prompt)

        config = genai_types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=_TEMPERATURE,
            max_output_tokens=_MAX_OUTPUT_TOKENS,
            response_mime_type="application/json",
        )

        raw_text = self._call_api(user_prompt, config)
        logger.debug("Raw LLM response:\n%s", raw_text)

        try:
            candidates = parse_event_array(raw_text)
        except MalformedResponseError as exc:
            logger.warning("Could not recover an event array from LLM response: %s", exc)
            raise AnalysisFailed(
                f"LLM response could not be parsed: {exc}",
                cause=exc,
                raw_response=raw_text,
            ) from exc

        events = validate_events(candidates)
        logger.info(
            "Successfully parsed %d event(s) from %d candidate(s)",
            len(events),
            len(candidates),
        )
        return events

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _call_api(
        self,
        user_prompt: str,
        config: genai_types.GenerateContentConfig,
    ) -> str:
        """Call the Gemini API and return the raw response text.

        Raises:
            AnalysisFailed: On API-level failures (auth, rate limits,
                server errors), transport failures (timeouts, connection
                errors) or an empty response.
        """
        try:
            response = self._client.models.generate_content(
                model=self._model,
                contents=user_prompt,
                config=config,
            )
        except genai_errors.APIError as exc:
            logger.error("Gemini API error: %s", exc)
            raise AnalysisFailed(f"Gemini API call failed: {exc}", cause=exc) from exc
        except httpx.HTTPError as exc:
            logger.error("Gemini transport error: %s", exc)
            raise AnalysisFailed(f"Gemini request failed: {exc}", cause=exc) from exc

        raw_text = response.text or ""
        if not raw_text.strip():
            raise AnalysisFailed("Empty response from LLM")
        return raw_text
