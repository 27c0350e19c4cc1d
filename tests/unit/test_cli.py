"""Unit tests for the CLI entrypoint."""

from __future__ import annotations

import io
import json
from datetime import date
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from syllabus_ai.__main__ import main
from syllabus_ai.config import ConfigError, Settings
from syllabus_ai.models import ResultEnvelope, ScheduleEvent

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_TEXT = "Midterm Exam on October 15, 2024 in the main hall, bring a calculator."


def _ok_envelope() -> ResultEnvelope:
    return ResultEnvelope.ok([ScheduleEvent(title="Midterm", date="2024-10-15", type="exam", id=1)])


def _patched_orchestrator(envelope: ResultEnvelope) -> tuple[MagicMock, MagicMock]:
    orchestrator = MagicMock()
    orchestrator.process.return_value = envelope
    build = MagicMock(return_value=orchestrator)
    return build, orchestrator


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestCLI:
    """Unit tests for ``syllabus_ai.__main__.main``."""

    def test_text_input_prints_json(
        self, monkeypatch_env: dict[str, str], capsys: pytest.CaptureFixture[str]
    ) -> None:
        build, orchestrator = _patched_orchestrator(_ok_envelope())

        with patch("syllabus_ai.__main__.build_orchestrator", build):
            exit_code = main(["--text", _TEXT])

        assert exit_code == 0
        orchestrator.process.assert_called_once_with(
            manual_text=_TEXT, file_bytes=None, filename=None
        )
        payload = json.loads(capsys.readouterr().out)
        assert payload["success"] is True
        assert payload["events"][0]["id"] == 1

    def test_pdf_file_read_as_bytes(self, tmp_path: Path, monkeypatch_env: dict[str, str]) -> None:
        pdf = tmp_path / "syllabus.pdf"
        pdf.write_bytes(b"%PDF-1.4 test")
        build, orchestrator = _patched_orchestrator(_ok_envelope())

        with patch("syllabus_ai.__main__.build_orchestrator", build):
            exit_code = main([str(pdf)])

        assert exit_code == 0
        orchestrator.process.assert_called_once_with(
            manual_text=None, file_bytes=b"%PDF-1.4 test", filename="syllabus.pdf"
        )

    def test_text_wins_over_file(self, tmp_path: Path, monkeypatch_env: dict[str, str]) -> None:
        build, orchestrator = _patched_orchestrator(_ok_envelope())

        with patch("syllabus_ai.__main__.build_orchestrator", build):
            main([str(tmp_path / "missing.pdf"), "--text", _TEXT])

        assert orchestrator.process.call_args.kwargs["file_bytes"] is None

    def test_text_from_stdin(
        self, monkeypatch_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(_TEXT))
        build, orchestrator = _patched_orchestrator(_ok_envelope())

        with patch("syllabus_ai.__main__.build_orchestrator", build):
            main(["--text", "-"])

        assert orchestrator.process.call_args.kwargs["manual_text"] == _TEXT

    def test_failure_envelope_exit_code(
        self, monkeypatch_env: dict[str, str], capsys: pytest.CaptureFixture[str]
    ) -> None:
        build, _ = _patched_orchestrator(ResultEnvelope.fail("Text too short"))

        with patch("syllabus_ai.__main__.build_orchestrator", build):
            exit_code = main(["--text", "short"])

        assert exit_code == 1
        assert json.loads(capsys.readouterr().out)["error"] == "Text too short"

    def test_no_input(self, monkeypatch_env: dict[str, str], capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 1

        captured = capsys.readouterr()
        assert "provide a PDF file or --text" in captured.err
        assert json.loads(captured.out) == {"success": False, "error": "No file or text provided"}

    def test_missing_file(
        self, tmp_path: Path, monkeypatch_env: dict[str, str], capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = main([str(tmp_path / "nope.pdf")])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert "File not found" in captured.err
        payload = json.loads(captured.out)
        assert payload["success"] is False
        assert payload["error"].startswith("File not found:")

    def test_config_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch(
            "syllabus_ai.__main__.load_settings",
            side_effect=ConfigError("Invalid environment variables: LLM_TIMEOUT_SECONDS"),
        ):
            exit_code = main(["--text", _TEXT])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert "LLM_TIMEOUT_SECONDS" in captured.err
        assert json.loads(captured.out) == {
            "success": False,
            "error": "Configuration error: Invalid environment variables: LLM_TIMEOUT_SECONDS",
        }

    def test_reference_date_override(self, monkeypatch_env: dict[str, str]) -> None:
        build, _ = _patched_orchestrator(_ok_envelope())

        with patch("syllabus_ai.__main__.build_orchestrator", build):
            main(["--text", _TEXT, "--reference-date", "2025-02-01"])

        settings: Settings = build.call_args.args[0]
        assert settings.reference_date == date(2025, 2, 1)
        assert settings.gemini_api_key == "test-gemini-key-12345"

    def test_invalid_reference_date_is_argparse_error(self, monkeypatch_env: dict[str, str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--text", _TEXT, "--reference-date", "tomorrow"])

        assert exc_info.value.code == 2

    def test_verbose_sets_debug(self, monkeypatch_env: dict[str, str]) -> None:
        build, _ = _patched_orchestrator(_ok_envelope())

        with (
            patch("syllabus_ai.__main__.build_orchestrator", build),
            patch("syllabus_ai.__main__.setup_logging") as mock_setup,
        ):
            main(["--text", _TEXT, "-v"])

        mock_setup.assert_called_once_with("DEBUG")

    def test_text_format(
        self, monkeypatch_env: dict[str, str], capsys: pytest.CaptureFixture[str]
    ) -> None:
        build, _ = _patched_orchestrator(_ok_envelope())

        with patch("syllabus_ai.__main__.build_orchestrator", build):
            main(["--text", _TEXT, "--format", "text"])

        assert "[EXAM] Midterm" in capsys.readouterr().out

    def test_regex_fallback_end_to_end(
        self,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """With Gemini failing, the real pipeline still returns regex events."""
        monkeypatch.setenv("GEMINI_API_KEY", "k")
        with patch("syllabus_ai.llm.genai.Client") as client_cls:
            client_cls.return_value.models.generate_content.return_value = MagicMock(text="nope")
            exit_code = main(["--text", _TEXT])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["events"][0]["date"] == "2024-10-15"
        assert payload["events"][0]["type"] == "exam"
        assert payload["debug"]["eventsSource"] == "regex"
