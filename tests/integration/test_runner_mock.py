"""Integration tests running registry scenarios against the mock form."""

import json

import pytest
from playwright.async_api import Error as PlaywrightError

from regsuite.core.browser import PlaywrightBrowser
from regsuite.form.student import load_fixtures
from regsuite.scenarios.registry import Scenario, get_scenario_by_id
from regsuite.scenarios.runner import ScenarioRunner
from regsuite.utils.session import SessionLogger

# Scenarios that only touch the fields the mock form implements.
MOCK_SCENARIOS = [
    "empty-form",
    "missing-first-name",
    "missing-last-name",
    "invalid-email",
    "missing-gender",
    "short-mobile",
    "valid-name-inputs",
    "single-gender-option",
]


@pytest.fixture
def scenario_runner(mock_config, mock_server) -> ScenarioRunner:
    session = SessionLogger(
        mock_config.output_dir, suite="registration", target=mock_config.form_url
    )
    browser = PlaywrightBrowser(
        headless=True, element_timeout=mock_config.element_timeout
    )
    runner = ScenarioRunner(browser, mock_config, session, load_fixtures())
    runner.form.settle_delay = 0
    return runner


async def run_or_skip(runner: ScenarioRunner, scenarios: list[Scenario]):
    try:
        return await runner.run_all(scenarios)
    except PlaywrightError as e:
        pytest.skip(f"Chromium is not available: {e}")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_mock_scenarios_pass(scenario_runner) -> None:
    scenarios = [get_scenario_by_id(s) for s in MOCK_SCENARIOS]

    results = await run_or_skip(scenario_runner, scenarios)

    failures = {r.scenario_id: r.message for r in results if not r.passed}
    assert failures == {}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_contact_submission_passes(scenario_runner) -> None:
    scenario = Scenario(
        id="contact-only",
        title="Submit the contact fields",
        group="positive",
        only=("first_name", "last_name", "email", "gender", "mobile", "current_address"),
    )

    results = await run_or_skip(scenario_runner, [scenario])

    assert results[0].passed, results[0].message
    assert "confirmed via modal" in results[0].message


@pytest.mark.integration
@pytest.mark.asyncio
async def test_failure_saves_artifacts(scenario_runner) -> None:
    """The mock form has no datepicker, so a full submission fails."""
    results = await run_or_skip(
        scenario_runner, [get_scenario_by_id("full-submission")]
    )

    result = results[0]
    assert result.passed is False
    assert {p.suffix for p in result.artifacts} == {".png", ".html"}
    assert all(p.is_file() for p in result.artifacts)

    log_path = scenario_runner.session.session_dir / "session.json"
    data = json.loads(log_path.read_text())
    assert data["failed"] == 1
    assert data["scenarios"][0]["artifacts"]
