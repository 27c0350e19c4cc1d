"""Data models for document text extraction.

- :class:`ExtractedText` -- plain text plus the name of the strategy that
  produced it.
- :class:`StrategyFailure` -- one diagnostic entry recorded when a strategy
  raises or its output fails the quality gate.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractedText:
    """Cleaned document text and its provenance.

    Attributes:
        text: Post-processed plain text.
        strategy: Name of the extraction strategy that produced *text*
            (``"manual"`` when the caller supplied the text directly).
    """

    text: str
    strategy: str


@dataclass(frozen=True)
class StrategyFailure:
    """A single ``{strategy, reason}`` diagnostic entry."""

    strategy: str
    reason: str

    def __str__(self) -> str:
        return f"{self.strategy}: {self.reason}"
