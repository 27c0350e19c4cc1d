"""Shared fixtures for syllabus-ai tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator

import pytest

_ENV_VARS = (
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "LLM_TIMEOUT_SECONDS",
    "REFERENCE_DATE",
    "LOG_LEVEL",
)


@pytest.fixture()
def monkeypatch_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set the environment variables to valid values.

    Also patches ``load_dotenv`` so that a real ``.env`` file on disk does not
    override the test values.

    Returns the dict of variables so tests can inspect or override values.
    """
    monkeypatch.setattr("syllabus_ai.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    env_vars = {
        "GEMINI_API_KEY": "test-gemini-key-12345",
        "REFERENCE_DATE": "2024-10-01",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all syllabus-ai environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("syllabus_ai.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Reset the root logger after each test to prevent handler leaks."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)


def _escape_pdf_string(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: list[list[str]]) -> bytes:
    """Build a minimal uncompressed PDF with one Helvetica text line per entry.

    Args:
        pages: For each page, the lines of text to draw top to bottom.

    Returns:
        The PDF file bytes, with a correct cross-reference table.
    """
    page_count = len(pages)
    font_id = 3 + 2 * page_count
    objects: list[bytes] = []

    kids = " ".join(f"{3 + 2 * i} 0 R" for i in range(page_count))
    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode())

    for index, lines in enumerate(pages):
        content_id = 4 + 2 * index
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Contents {content_id} 0 R "
                f"/Resources << /Font << /F1 {font_id} 0 R >> >> >>"
            ).encode()
        )
        ops = ["BT", "/F1 12 Tf", "72 720 Td"]
        for line_index, line in enumerate(lines):
            if line_index:
                ops.append("0 -16 Td")
            ops.append(f"({_escape_pdf_string(line)}) Tj")
        ops.append("ET")
        stream = "\n".join(ops).encode("latin-1")
        objects.append(
            b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream"
        )

    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n".encode()
    out += f"startxref\n{xref_offset}\n%%EOF\n".encode()
    return bytes(out)


@pytest.fixture()
def pdf_factory() -> Callable[[list[list[str]]], bytes]:
    """Return :func:`build_pdf` for tests that need real PDF bytes."""
    return build_pdf


@pytest.fixture()
def syllabus_pdf() -> bytes:
    """A two-page syllabus PDF with several dated lines."""
    return build_pdf(
        [
            [
                "CS 101 Introduction to Computer Science - Fall 2024",
                "Lecture 1: Course overview on September 5, 2024",
                "Homework 1 due 9/19/2024",
            ],
            [
                "Midterm Exam on October 15, 2024",
                "Read chapter 7 before 2024-11-02",
            ],
        ]
    )
