"""Unit tests for session logging utilities.

Tests cover:
- ScenarioEntry and AttemptEntry dataclass creation
- SessionLogger directory creation
- SessionLogger log_scenario and log_attempts
- SessionLogger complete
- session.json stays valid after every call
"""

import json
from pathlib import Path

from regsuite.core.protocols import AttemptOutcome, AttemptRecord
from regsuite.utils.session import AttemptEntry, ScenarioEntry, SessionLogger


def read_log(logger: SessionLogger) -> dict:
    with open(logger.session_dir / "session.json") as f:
        return json.load(f)


class TestEntries:
    """Tests for the entry dataclasses."""

    def test_create_scenario_entry(self) -> None:
        entry = ScenarioEntry(
            timestamp="2026-10-19T10:30:00",
            scenario_id="empty-form",
            passed=True,
            message="rejected after 3 attempt(s)",
            duration_ms=1200,
            artifacts=[],
        )
        assert entry.scenario_id == "empty-form"
        assert entry.passed is True
        assert entry.duration_ms == 1200

    def test_create_attempt_entry(self) -> None:
        entry = AttemptEntry(
            timestamp="2026-10-19T10:30:00",
            scenario_id="full-submission",
            action="submit form",
            attempt=2,
            strategy="js_click",
            outcome="satisfied",
            detail="",
            ignored_failures=["https://securepubads.g.doubleclick.net/tag/js/gpt.js"],
        )
        assert entry.action == "submit form"
        assert entry.ignored_failures[0].endswith("gpt.js")


class TestSessionLogger:
    """Tests for the SessionLogger class."""

    def test_session_directory_creation(self, tmp_path: Path) -> None:
        """Should create the run directory on initialization."""
        logger = SessionLogger(
            output_dir=tmp_path, suite="registration", target="http://localhost/form"
        )

        assert logger.session_dir.is_dir()
        assert logger.session_dir.parent == tmp_path
        assert logger.run_id.startswith("registration_")
        assert logger.artifacts_dir == logger.session_dir

    def test_initial_data(self, tmp_path: Path) -> None:
        logger = SessionLogger(tmp_path, suite="registration", target="http://x/form")

        assert logger.data["target"] == "http://x/form"
        assert logger.data["completed_at"] is None
        assert logger.data["scenarios"] == []
        assert logger.data["attempts"] == []

    def test_log_scenario_persists(self, tmp_path: Path) -> None:
        logger = SessionLogger(tmp_path, suite="registration", target="t")
        artifact = logger.session_dir / "empty-form_failure.png"

        logger.log_scenario("empty-form", False, "Expected invalid styling", 50, [artifact])

        data = read_log(logger)
        assert len(data["scenarios"]) == 1
        entry = data["scenarios"][0]
        assert entry["scenario_id"] == "empty-form"
        assert entry["passed"] is False
        assert entry["artifacts"] == [str(artifact)]

    def test_log_scenario_without_artifacts(self, tmp_path: Path) -> None:
        logger = SessionLogger(tmp_path, suite="registration", target="t")
        logger.log_scenario("full-submission", True, "ok", 10)
        assert read_log(logger)["scenarios"][0]["artifacts"] == []

    def test_log_attempts(self, tmp_path: Path) -> None:
        logger = SessionLogger(tmp_path, suite="registration", target="t")
        records = [
            AttemptRecord(1, "click", AttemptOutcome.PREDICATE_FALSE, "modal not present"),
            AttemptRecord(
                2, "js_click", AttemptOutcome.SATISFIED,
                ignored_failures=["https://ads.example/gpt.js"],
            ),
        ]

        logger.log_attempts("full-submission", "submit form", records)

        attempts = read_log(logger)["attempts"]
        assert [a["attempt"] for a in attempts] == [1, 2]
        assert attempts[0]["outcome"] == "predicate_false"
        assert attempts[0]["detail"] == "modal not present"
        assert attempts[1]["strategy"] == "js_click"
        assert attempts[1]["ignored_failures"] == ["https://ads.example/gpt.js"]

    def test_complete(self, tmp_path: Path) -> None:
        logger = SessionLogger(tmp_path, suite="registration", target="t")

        logger.complete(passed=20, failed=3)

        data = read_log(logger)
        assert data["passed"] == 20
        assert data["failed"] == 3
        assert data["completed_at"] is not None
