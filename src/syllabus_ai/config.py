"""Configuration loading for syllabus-ai.

Reads settings from environment variables (with .env support via python-dotenv)
and validates the values that have a fixed shape.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date

from dotenv import load_dotenv


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""


_DEFAULT_MODEL = "gemini-2.0-flash"
_DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        gemini_api_key: API key for Google Gemini.  May be empty; the
            analyzer reports a missing key when it is first needed.
        gemini_model: Gemini model identifier.
        llm_timeout_seconds: Timeout applied to each Gemini request.
        reference_date: Date used to infer the current academic year, or
            ``None`` to use today's date.
        log_level: Logging level (default ``"INFO"``).
    """

    gemini_api_key: str = ""
    gemini_model: str = _DEFAULT_MODEL
    llm_timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS
    reference_date: date | None = None
    log_level: str = "INFO"

    def __repr__(self) -> str:
        key = "'***'" if self.gemini_api_key else "''"
        return (
            f"Settings(gemini_api_key={key}, "
            f"gemini_model={self.gemini_model!r}, "
            f"llm_timeout_seconds={self.llm_timeout_seconds!r}, "
            f"reference_date={self.reference_date!r}, "
            f"log_level={self.log_level!r})"
        )


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the project root
    is picked up automatically.

    Returns:
        A validated :class:`Settings` instance.

    Raises:
        ConfigError: If ``LLM_TIMEOUT_SECONDS`` is not a positive number or
            ``REFERENCE_DATE`` is not an ISO date.  The error message names
            **all** invalid variables.
    """
    load_dotenv()

    values: dict[str, object] = {}
    invalid: list[str] = []

    api_key = os.environ.get("GEMINI_API_KEY", "").strip()
    if api_key:
        values["gemini_api_key"] = api_key

    model = os.environ.get("GEMINI_MODEL", "").strip()
    if model:
        values["gemini_model"] = model

    raw_timeout = os.environ.get("LLM_TIMEOUT_SECONDS", "").strip()
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            timeout = 0.0
        if timeout > 0:
            values["llm_timeout_seconds"] = timeout
        else:
            invalid.append("LLM_TIMEOUT_SECONDS")

    raw_reference = os.environ.get("REFERENCE_DATE", "").strip()
    if raw_reference:
        try:
            values["reference_date"] = date.fromisoformat(raw_reference)
        except ValueError:
            invalid.append("REFERENCE_DATE")

    if invalid:
        names = ", ".join(invalid)
        raise ConfigError(f"Invalid environment variables: {names}")

    log_level = os.environ.get("LOG_LEVEL", "").strip()
    if log_level:
        values["log_level"] = log_level

    return Settings(**values)
