"""CLI output formatting utilities for regsuite.

This module provides the OutputFormatter class for displaying the scenario
table, per-scenario progress and results, and the run summary.
"""

from pathlib import Path

from regsuite.cli.accessibility import should_use_colors
from regsuite.core.protocols import ScenarioResult
from regsuite.scenarios.registry import Scenario

GREEN = "\033[32m"
RED = "\033[31m"
YELLOW = "\033[33m"
CYAN = "\033[36m"
RESET = "\033[0m"

GROUP_COLORS = {
    "positive": GREEN,
    "negative": YELLOW,
    "field": CYAN,
}


class OutputFormatter:
    """Formats and displays CLI output.

    Attributes:
        verbose: Whether to print failure artifacts and timings.
        plain: Whether to suppress ANSI colors.
    """

    def __init__(self, verbose: bool = False, plain: bool = False):
        """Initialize the output formatter.

        Args:
            verbose: Enable verbose output mode. Defaults to False.
            plain: Disable colors. Colors are also disabled when the
                environment asks for it (NO_COLOR, TERM=dumb).
        """
        self.verbose = verbose
        self.plain = plain or not should_use_colors()
        self._step = 0

    def _color(self, text: str, color: str) -> str:
        if self.plain or not color:
            return text
        return f"{color}{text}{RESET}"

    def show_scenarios(self, scenarios: list[Scenario]) -> None:
        """Print the scenario table, one line per scenario."""
        width = max((len(s.id) for s in scenarios), default=0)
        for scenario in scenarios:
            group = self._color(f"{scenario.group:<8}", GROUP_COLORS.get(scenario.group, ""))
            print(f"  {group} {scenario.id:<{width}}  {scenario.title}")

    def show_progress(self, scenario_id: str, message: str) -> None:
        """Show step indicator for a scenario that is starting.

        Args:
            scenario_id: Identifier of the scenario.
            message: The scenario title.
        """
        self._step += 1
        prefix = f"[{self._step}]"
        print(f"{prefix} {self._color(scenario_id, CYAN)}: {message}")

    def show_result(self, result: ScenarioResult) -> None:
        """Show the outcome of one scenario."""
        if result.passed:
            status = self._color("PASS", GREEN)
        else:
            status = self._color("FAIL", RED)
        line = f"    {status} {result.message}"
        if self.verbose:
            line += f" ({result.duration_ms} ms)"
        print(line)
        if self.verbose:
            for artifact in result.artifacts:
                print(f"      artifact: {artifact}")

    def show_summary(
        self, results: list[ScenarioResult], session_dir: Path | None = None
    ) -> None:
        """Show pass/fail counts and the failed scenario IDs.

        Args:
            results: Results of the run, in order.
            session_dir: Directory holding session.json and artifacts.
        """
        passed = sum(1 for r in results if r.passed)
        failed = [r for r in results if not r.passed]

        print("\n" + "=" * 60)
        if failed:
            print(self._color(f"✗ {len(failed)} of {len(results)} SCENARIOS FAILED", RED))
        else:
            print(self._color(f"✓ ALL {passed} SCENARIOS PASSED", GREEN))
        print("=" * 60)
        print(f"Passed: {passed}  Failed: {len(failed)}")
        for result in failed:
            print(f"  - {result.scenario_id}: {result.message}")
        if session_dir:
            print(f"\nSession artifacts: {session_dir}")
            print("  - session.json: Scenario results and attempt records")
            if failed:
                print("  - *_failure.png / *_failure.html: Page at failure")
        print("=" * 60 + "\n")

    def show_warning(self, message: str) -> None:
        """Show warning message in yellow."""
        print(self._color(f"\n⚠ WARNING: {message}\n", YELLOW))
