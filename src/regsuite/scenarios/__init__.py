"""Scenario table, field checks and the runner that executes them."""

from regsuite.scenarios.registry import (
    GROUPS,
    SCENARIO_REGISTRY,
    Expectation,
    Scenario,
    get_all_scenarios,
    get_scenario_by_id,
    get_scenarios,
    suggest_scenario,
)
from regsuite.scenarios.runner import ScenarioRunner

__all__ = [
    "GROUPS",
    "SCENARIO_REGISTRY",
    "Expectation",
    "Scenario",
    "ScenarioRunner",
    "get_all_scenarios",
    "get_scenario_by_id",
    "get_scenarios",
    "suggest_scenario",
]
