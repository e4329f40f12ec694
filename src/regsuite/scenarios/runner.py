"""Scenario runner for the registration form suite.

Runs scenarios from the registry one after another against a single
browser session: load the form, fill it from the scenario's record,
submit, then assert on the confirmation table or on the validation state.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from regsuite.core.executor import ReliableActionExecutor
from regsuite.core.interactions import ReliableInteractions
from regsuite.core.protocols import (
    AttemptRecord,
    BrowserProtocol,
    Outcome,
    ScenarioResult,
    Success,
)
from regsuite.form.page import RegistrationFormPage
from regsuite.form.student import FixtureSet, StudentRecord
from regsuite.scenarios.checks import CHECKS, CheckContext
from regsuite.scenarios.registry import Scenario
from regsuite.utils.config import AppConfig
from regsuite.utils.exceptions import (
    ConfigurationError,
    ExpectationError,
    InvalidConfiguration,
    RegSuiteError,
)
from regsuite.utils.session import SessionLogger

logger = logging.getLogger(__name__)


class ScenarioRunner:
    """Runs registry scenarios against one browser session.

    Attributes:
        browser: Browser automation interface.
        config: Application configuration.
        session: Session logger for results and attempt records.
        fixtures: Default student record and fixture files.
        form: Page object shared by all scenarios.
        interactions: Retried visit/submit/verify interactions.
        output_callback: Callback for progress messages.

    Example:
        >>> runner = ScenarioRunner(browser, config, session, load_fixtures())
        >>> results = await runner.run_all(get_scenarios("positive"))
    """

    def __init__(
        self,
        browser: BrowserProtocol,
        config: AppConfig,
        session: SessionLogger,
        fixtures: FixtureSet,
        executor: ReliableActionExecutor | None = None,
        output_callback: Callable[[str, str], None] | None = None,
        result_callback: Callable[[ScenarioResult], None] | None = None,
    ) -> None:
        """Initialize the ScenarioRunner.

        Args:
            browser: Browser automation interface.
            config: Application configuration.
            session: Session logger for tracking the run.
            fixtures: Default record and fixture directory.
            executor: Optional executor; one is built from config otherwise.
            output_callback: Optional callback for progress messages.
                Signature: (scenario_id: str, message: str) -> None
            result_callback: Optional callback receiving each result.
        """
        self.browser = browser
        self.config = config
        self.session = session
        self.fixtures = fixtures
        self.form = RegistrationFormPage(browser)
        self.interactions = ReliableInteractions(browser, self.form, config, executor)
        self.output_callback = output_callback or (lambda scenario_id, msg: None)
        self.result_callback = result_callback or (lambda result: None)

    async def run_all(self, scenarios: list[Scenario]) -> list[ScenarioResult]:
        """Launch the browser, run every scenario in order, then close it.

        Returns:
            One result per scenario, in input order.

        Raises:
            InvalidConfiguration: If the retry or timing settings are invalid.
                Raised before the browser is launched.
        """
        self.config.validate()
        results: list[ScenarioResult] = []
        await self.browser.launch()
        try:
            await self.browser.block_requests(self.config.ignorable_domains)
            for scenario in scenarios:
                results.append(await self.run(scenario))
        finally:
            await self.browser.close()

        passed = sum(1 for r in results if r.passed)
        self.session.complete(passed=passed, failed=len(results) - passed)
        return results

    async def run(self, scenario: Scenario) -> ScenarioResult:
        """Run one scenario on the already launched browser.

        Scenario failures are reported in the result. Invalid execution
        options are not a scenario failure and propagate.
        """
        started = time.monotonic()
        self.output_callback(scenario.id, scenario.title)
        try:
            message = await self._execute(scenario)
            result = ScenarioResult(
                scenario_id=scenario.id,
                passed=True,
                message=message,
                duration_ms=self._elapsed(started),
            )
        except InvalidConfiguration:
            raise
        except (RegSuiteError, AssertionError) as e:
            logger.warning("Scenario %s failed: %s", scenario.id, e)
            artifacts = await self._save_failure_artifacts(scenario.id)
            result = ScenarioResult(
                scenario_id=scenario.id,
                passed=False,
                message=str(e) or type(e).__name__,
                duration_ms=self._elapsed(started),
                artifacts=artifacts,
            )

        self.session.log_scenario(
            scenario_id=result.scenario_id,
            passed=result.passed,
            message=result.message,
            duration_ms=result.duration_ms,
            artifacts=result.artifacts,
        )
        self.result_callback(result)
        return result

    async def _execute(self, scenario: Scenario) -> str:
        visit = await self.interactions.visit()
        self._log(scenario.id, "visit", visit.records)
        await self.form.clean_up()

        record = scenario.build_record(self.fixtures.record)

        if scenario.check is not None:
            check = CHECKS.get(scenario.check)
            if check is None:
                raise ConfigurationError(
                    f"Scenario '{scenario.id}' names unknown check '{scenario.check}'"
                )
            await check(CheckContext(self.form, self.interactions, record))
            return "field check passed"

        picture = self.fixtures.resolve(record.picture) if record.picture else None
        await self.form.fill(record, picture)

        outcome = await self.interactions.submit()
        self._log(scenario.id, "submit form", outcome.records)

        if scenario.expect.submitted:
            return await self._expect_submitted(scenario, record)
        return await self._expect_rejected(scenario, outcome)

    async def _expect_submitted(self, scenario: Scenario, record: StudentRecord) -> str:
        confirmation = await self.interactions.verify()
        self._log(scenario.id, "verify submission", confirmation.records)

        rows = await self.form.submitted_rows()
        if not rows:
            raise ExpectationError(
                f"Submission confirmed via {confirmation.method}, "
                "but no confirmation table was found"
            )

        expected = {**record.expected_rows(), **scenario.expect.row_overrides}
        mismatches = [
            f"{label}: expected '{value}', got '{rows.get(label)}'"
            for label, value in expected.items()
            if rows.get(label) != value
        ]
        if mismatches:
            raise ExpectationError(
                "Confirmation table mismatch: " + "; ".join(mismatches)
            )

        await self.form.close_modal()
        url = await self.browser.url()
        if self.config.form_path not in url:
            raise ExpectationError(f"Left the form page after closing modal: {url}")
        return f"submitted and confirmed via {confirmation.method} ({len(rows)} rows)"

    async def _expect_rejected(self, scenario: Scenario, outcome: Outcome) -> str:
        if isinstance(outcome, Success):
            raise ExpectationError(
                f"Form was submitted on attempt {outcome.attempts_used} "
                f"('{outcome.strategy_used}') but should have been rejected"
            )

        unflagged = []
        for field_name in scenario.expect.invalid_fields:
            for selector in self.form.error_selectors(field_name):
                if not await self.form.has_error(selector):
                    unflagged.append(selector)
        if unflagged:
            raise ExpectationError(
                "Expected invalid styling on: " + ", ".join(unflagged)
            )

        if await self.form.confirmation_visible():
            raise ExpectationError("Confirmation modal appeared for a rejected form")

        flagged = ", ".join(scenario.expect.invalid_fields) or "none asserted"
        return f"rejected after {len(outcome.records)} attempt(s); flagged: {flagged}"

    def _log(self, scenario_id: str, action: str, records: list[AttemptRecord]) -> None:
        self.session.log_attempts(scenario_id, action, records)

    async def _save_failure_artifacts(self, scenario_id: str) -> list[Path]:
        """Save a screenshot and HTML dump for a failed scenario."""
        base = self.session.artifacts_dir / f"{scenario_id}_failure"
        saved: list[Path] = []
        try:
            screenshot_path = base.with_suffix(".png")
            await self.browser.screenshot(str(screenshot_path))
            saved.append(screenshot_path)

            html_path = base.with_suffix(".html")
            html_content = await self.browser.html()
            with open(html_path, "w", encoding="utf-8") as f:
                f.write(html_content)
            saved.append(html_path)
        except Exception as e:
            # Artifacts are diagnostic; the scenario result is already decided.
            logger.warning("Could not save artifacts for %s: %s", scenario_id, e)
        return saved

    @staticmethod
    def _elapsed(started: float) -> int:
        return int((time.monotonic() - started) * 1000)
