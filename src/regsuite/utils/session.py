"""Session logging utilities for regsuite.

This module provides run tracking with JSON output. It includes:
- ScenarioEntry dataclass for recording scenario results
- AttemptEntry dataclass for recording retried-action attempts
- SessionLogger class for managing run data and persistence
"""

import json
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any


@dataclass
class ScenarioEntry:
    """Records the result of one scenario.

    Attributes:
        timestamp: ISO format timestamp of when the scenario finished.
        scenario_id: Identifier of the scenario.
        passed: Whether the scenario passed.
        message: Summary or failure reason.
        duration_ms: Wall time of the scenario.
        artifacts: Paths of screenshots/HTML dumps saved for the scenario.
    """

    timestamp: str
    scenario_id: str
    passed: bool
    message: str
    duration_ms: int
    artifacts: list[str]


@dataclass
class AttemptEntry:
    """Records one attempt of a retried action.

    Attributes:
        timestamp: ISO format timestamp of when the entry was logged.
        scenario_id: Scenario the action ran in.
        action: Name of the action.
        attempt: 1-based attempt number.
        strategy: Strategy applied.
        outcome: Observed outcome.
        detail: Observed page state or error text.
        ignored_failures: Allow-listed failures seen on the attempt.
    """

    timestamp: str
    scenario_id: str
    action: str
    attempt: int
    strategy: str
    outcome: str
    detail: str
    ignored_failures: list[str]


class SessionLogger:
    """Logs run data to JSON file.

    Tracks every scenario result and every attempt of the retried actions.
    Persists data to JSON after each operation so an interrupted run still
    leaves a usable log.

    Attributes:
        run_id: Unique identifier for this run.
        session_dir: Directory where run data and artifacts are stored.
        data: Dictionary containing all run data.
    """

    def __init__(self, output_dir: Path, suite: str, target: str) -> None:
        """Initialize a new session logger.

        Args:
            output_dir: Parent directory where the run folder will be created.
            suite: Name of the suite being run (e.g., registration).
            target: URL of the page under test.
        """
        self.run_id = f"{suite}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        self.session_dir = output_dir / self.run_id
        self.session_dir.mkdir(parents=True, exist_ok=True)

        self.data: dict[str, Any] = {
            "run_id": self.run_id,
            "suite": suite,
            "target": target,
            "started_at": datetime.now().isoformat(),
            "completed_at": None,
            "passed": None,
            "failed": None,
            "scenarios": [],
            "attempts": [],
        }

    def log_scenario(
        self,
        scenario_id: str,
        passed: bool,
        message: str,
        duration_ms: int,
        artifacts: list[Path] | None = None,
    ) -> None:
        """Log a scenario result.

        Args:
            scenario_id: Identifier of the scenario.
            passed: Whether the scenario passed.
            message: Summary or failure reason.
            duration_ms: Wall time of the scenario.
            artifacts: Files saved for the scenario.
        """
        entry = ScenarioEntry(
            timestamp=datetime.now().isoformat(),
            scenario_id=scenario_id,
            passed=passed,
            message=message,
            duration_ms=duration_ms,
            artifacts=[str(p) for p in artifacts or []],
        )
        self.data["scenarios"].append(asdict(entry))
        self._save()

    def log_attempts(
        self, scenario_id: str, action: str, records: list[Any]
    ) -> None:
        """Log every attempt record of one action execution.

        Args:
            scenario_id: Scenario the action ran in.
            action: Name of the action.
            records: AttemptRecord instances, in order.
        """
        for record in records:
            entry = AttemptEntry(
                timestamp=datetime.now().isoformat(),
                scenario_id=scenario_id,
                action=action,
                attempt=record.attempt,
                strategy=record.strategy,
                outcome=record.outcome.value,
                detail=record.detail,
                ignored_failures=list(record.ignored_failures),
            )
            self.data["attempts"].append(asdict(entry))
        self._save()

    def complete(self, passed: int, failed: int) -> None:
        """Mark the run complete.

        Args:
            passed: Number of passed scenarios.
            failed: Number of failed scenarios.
        """
        self.data["completed_at"] = datetime.now().isoformat()
        self.data["passed"] = passed
        self.data["failed"] = failed
        self._save()

    def _save(self) -> None:
        """Write run data to JSON file."""
        log_path = self.session_dir / "session.json"
        with open(log_path, "w") as f:
            json.dump(self.data, f, indent=2)

    @property
    def artifacts_dir(self) -> Path:
        """Directory for screenshots and HTML dumps.

        Returns:
            Path to the run directory where artifacts should be stored.
        """
        return self.session_dir
