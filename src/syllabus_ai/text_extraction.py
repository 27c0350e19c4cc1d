"""Multi-strategy text extraction for PDF documents.

:class:`TextExtractionCascade` runs an ordered list of extraction
strategies over the raw document bytes and returns the first output that
passes the quality gate.  Strategy failures are absorbed and recorded as
diagnostics; only total exhaustion raises :class:`ExtractionFailed`.

Strategies, in default priority order:

1. :class:`PypdfStrategy` -- structured PDF parsing with ``pypdf``.
2. :class:`PdfplumberStrategy` -- page-by-page positioned word runs via
   ``pdfplumber``; a failing page is skipped.
3. :class:`RawBytesStrategy` -- decode the bytes directly and blank out
   anything that is not printable ASCII.
"""

from __future__ import annotations

import io
import logging
import re
from collections.abc import Sequence

import pdfplumber
from pypdf import PdfReader

from syllabus_ai.exceptions import ExtractionFailed
from syllabus_ai.models.text import ExtractedText, StrategyFailure

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 50

INSUFFICIENT_TEXT = "Insufficient text extracted"

_HORIZONTAL_WS_RE = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE_RE = re.compile(r" ?\n ?")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_NON_PRINTABLE_RE = re.compile(r"[^\x20-\x7E\n]")


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


def clean_extracted_text(text: str) -> str:
    """Normalise whitespace in raw extractor output.

    Runs of spaces, tabs and other non-newline whitespace become a single
    space, spaces hugging a newline are dropped, three or more consecutive
    newlines collapse to exactly two, and the result is trimmed.  Line
    breaks are kept so that line-oriented consumers still see lines.

    Args:
        text: Raw text from an extraction strategy.

    Returns:
        The cleaned text.
    """
    text = _HORIZONTAL_WS_RE.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE_RE.sub("\n", text)
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


def passes_quality_gate(text: str) -> bool:
    """Return ``True`` if *text* is long enough to be worth analysing."""
    return len(text) > MIN_TEXT_LENGTH


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class ExtractionStrategy:
    """Base class for a single bytes-to-text method.

    Subclasses set :attr:`name` and implement :meth:`extract`.  They may
    raise any exception; the cascade records it as a diagnostic.
    """

    name: str = "strategy"

    def extract(self, data: bytes) -> str:
        raise NotImplementedError


class PypdfStrategy(ExtractionStrategy):
    """Parse the PDF container and concatenate each page's text in order."""

    name = "pypdf"

    def extract(self, data: bytes) -> str:
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            raise ValueError("PDF is encrypted")
        return "\n".join(page.extract_text() or "" for page in reader.pages)


class PdfplumberStrategy(ExtractionStrategy):
    """Read positioned word runs page by page.

    Word strings on a page are joined with single spaces and each page is
    terminated by a newline.  An exception on one page is logged and the
    page is skipped so one damaged page does not lose the whole document.
    """

    name = "pdfplumber"

    def extract(self, data: bytes) -> str:
        page_texts: list[str] = []
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            for page_number, page in enumerate(pdf.pages, start=1):
                try:
                    words = page.extract_words()
                except Exception as exc:
                    logger.warning("pdfplumber: skipping page %d: %s", page_number, exc)
                    continue
                runs = [word["text"] for word in words if word.get("text")]
                page_texts.append(" ".join(runs) + "\n")
        return "".join(page_texts).strip()


class RawBytesStrategy(ExtractionStrategy):
    """Decode the bytes as text and blank out non-printable characters.

    Always produces *something*; for compressed PDFs that is mostly noise,
    which the quality gate alone decides on.
    """

    name = "raw-bytes"

    def extract(self, data: bytes) -> str:
        text = data.decode("utf-8", errors="replace")
        return _NON_PRINTABLE_RE.sub(" ", text)


def default_strategies() -> list[ExtractionStrategy]:
    """Return a fresh list of the default strategies in priority order."""
    return [PypdfStrategy(), PdfplumberStrategy(), RawBytesStrategy()]


# ---------------------------------------------------------------------------
# Cascade
# ---------------------------------------------------------------------------


class TextExtractionCascade:
    """Try extraction strategies in order until one yields usable text.

    Args:
        strategies: Ordered strategies to attempt.  Defaults to
            :func:`default_strategies`.
    """

    def __init__(self, strategies: Sequence[ExtractionStrategy] | None = None) -> None:
        self._strategies = list(strategies) if strategies is not None else default_strategies()

    @property
    def strategy_names(self) -> list[str]:
        return [s.name for s in self._strategies]

    def extract(self, data: bytes) -> ExtractedText:
        """Extract cleaned text from *data*.

        Strategies run sequentially and the first whose cleaned output
        passes :func:`passes_quality_gate` wins.

        Args:
            data: Raw document bytes (assumed to be a PDF).

        Returns:
            The accepted :class:`ExtractedText`.

        Raises:
            ExtractionFailed: If no strategy produced acceptable text.  Its
                ``diagnostics`` hold exactly one entry per strategy, in
                attempt order.
        """
        diagnostics: list[StrategyFailure] = []

        for strategy in self._strategies:
            logger.info("Trying extraction method: %s", strategy.name)
            try:
                text = clean_extracted_text(strategy.extract(data))
            except Exception as exc:
                reason = str(exc) or type(exc).__name__
                logger.warning("%s failed: %s", strategy.name, reason)
                diagnostics.append(StrategyFailure(strategy.name, reason))
                continue

            if passes_quality_gate(text):
                logger.info("%s successful, text length: %d", strategy.name, len(text))
                return ExtractedText(text=text, strategy=strategy.name)

            logger.warning(
                "%s produced only %d character(s), trying next method",
                strategy.name,
                len(text),
            )
            diagnostics.append(StrategyFailure(strategy.name, INSUFFICIENT_TEXT))

        raise ExtractionFailed(diagnostics)
