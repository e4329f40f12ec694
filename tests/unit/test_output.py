"""Unit tests for CLI output formatter.

Tests cover:
- Scenario table rendering
- Step counter progression
- PASS/FAIL result lines and verbose details
- Run summary
- Plain mode and NO_COLOR
"""

from pathlib import Path

from regsuite.cli.output import GREEN, RED, OutputFormatter
from regsuite.core.protocols import ScenarioResult
from regsuite.scenarios.registry import get_scenarios


class TestShowScenarios:
    """Tests for OutputFormatter.show_scenarios."""

    def test_lists_ids_and_titles(self, capsys) -> None:
        scenarios = get_scenarios("negative")

        OutputFormatter(plain=True).show_scenarios(scenarios)

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == len(scenarios)
        assert any("missing-first-name" in line for line in lines)
        assert all(line.strip().startswith("negative") for line in lines)

    def test_empty_list(self, capsys) -> None:
        OutputFormatter(plain=True).show_scenarios([])
        assert capsys.readouterr().out == ""


class TestShowProgress:
    """Tests for OutputFormatter.show_progress."""

    def test_increments_step_counter(self, capsys) -> None:
        formatter = OutputFormatter(plain=True)
        assert formatter._step == 0

        formatter.show_progress("empty-form", "Reject an empty form")
        formatter.show_progress("full-submission", "Submit every field")

        assert formatter._step == 2
        out = capsys.readouterr().out
        assert "[1] empty-form: Reject an empty form" in out
        assert "[2] full-submission: Submit every field" in out


class TestShowResult:
    """Tests for OutputFormatter.show_result."""

    def test_pass(self, capsys) -> None:
        OutputFormatter(plain=True).show_result(
            ScenarioResult("full-submission", True, "submitted", duration_ms=42)
        )
        out = capsys.readouterr().out
        assert "PASS submitted" in out
        assert "42 ms" not in out

    def test_fail_verbose_shows_artifacts(self, capsys) -> None:
        result = ScenarioResult(
            "empty-form",
            False,
            "Expected invalid styling on: #userNumber",
            duration_ms=900,
            artifacts=[Path("/tmp/run/empty-form_failure.png")],
        )

        OutputFormatter(verbose=True, plain=True).show_result(result)

        out = capsys.readouterr().out
        assert "FAIL Expected invalid styling" in out
        assert "(900 ms)" in out
        assert "artifact: /tmp/run/empty-form_failure.png" in out

    def test_colors_when_enabled(self, capsys, monkeypatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        formatter = OutputFormatter()

        formatter.show_result(ScenarioResult("a", True, "ok"))
        formatter.show_result(ScenarioResult("b", False, "bad"))

        out = capsys.readouterr().out
        assert GREEN in out
        assert RED in out

    def test_no_color_env_forces_plain(self, capsys, monkeypatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        formatter = OutputFormatter()

        formatter.show_result(ScenarioResult("a", True, "ok"))

        assert formatter.plain is True
        assert "\033[" not in capsys.readouterr().out


class TestShowSummary:
    """Tests for OutputFormatter.show_summary."""

    def test_all_passed(self, capsys, tmp_path) -> None:
        results = [ScenarioResult("a", True, "ok"), ScenarioResult("b", True, "ok")]

        OutputFormatter(plain=True).show_summary(results, tmp_path)

        out = capsys.readouterr().out
        assert "ALL 2 SCENARIOS PASSED" in out
        assert f"Session artifacts: {tmp_path}" in out
        assert "_failure.png" not in out

    def test_failures_listed(self, capsys, tmp_path) -> None:
        results = [
            ScenarioResult("a", True, "ok"),
            ScenarioResult("missing-gender", False, "Expected invalid styling"),
        ]

        OutputFormatter(plain=True).show_summary(results, tmp_path)

        out = capsys.readouterr().out
        assert "1 of 2 SCENARIOS FAILED" in out
        assert "Passed: 1  Failed: 1" in out
        assert "- missing-gender: Expected invalid styling" in out
        assert "_failure.png" in out


def test_show_warning(capsys) -> None:
    OutputFormatter(plain=True).show_warning("Chromium is not installed")
    assert "WARNING: Chromium is not installed" in capsys.readouterr().out
