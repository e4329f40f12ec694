"""Core protocols and data types for regsuite.

This module defines the foundational types and protocols that all other
components depend on. It includes:
- ElementState, the observable state of one DOM element
- Attempt records and the outcomes of a retried action
- ScenarioResult for reporting one scenario
- BrowserProtocol, the capability set the executor and page objects consume
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Protocol, Union

from regsuite.utils.exceptions import ExhaustedRetries


@dataclass(frozen=True)
class ElementState:
    """Observable state of an element, or of its absence.

    Attributes:
        selector: Selector the state was queried with.
        exists: Whether any element matched.
        visible: Whether the first match is visible.
        value: Current input value, if the element has one.
        text: Trimmed inner text.
        classes: CSS classes on the element.
        checked: Checked state for radios/checkboxes.
        disabled: Whether the element is disabled.
        border_color: Computed ``border-color``.
        color: Computed ``color``.
    """

    selector: str
    exists: bool
    visible: bool = False
    value: str | None = None
    text: str = ""
    classes: tuple[str, ...] = ()
    checked: bool = False
    disabled: bool = False
    border_color: str = ""
    color: str = ""

    @classmethod
    def missing(cls, selector: str) -> ElementState:
        """State for a selector that matched nothing."""
        return cls(selector=selector, exists=False)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def describe(self) -> str:
        """One-line description used in attempt diagnostics."""
        if not self.exists:
            return f"{self.selector} not present"
        shown = "visible" if self.visible else "hidden"
        return f"{self.selector} present ({shown})"


class AttemptOutcome(Enum):
    """What one attempt observed."""

    SATISFIED = "satisfied"
    PREDICATE_FALSE = "predicate_false"
    STRATEGY_ERROR = "strategy_error"
    PREDICATE_ERROR = "predicate_error"


@dataclass
class AttemptRecord:
    """Diagnostic record of one strategy application.

    Attributes:
        attempt: 1-based attempt number.
        strategy: Name of the strategy applied.
        outcome: What the attempt observed.
        detail: Observed page state or error text.
        ignored_failures: Allow-listed failures seen during this attempt.
        strategy_error: Text of a transient strategy error, if any.
        predicate_error: Text of a predicate error, if any.
        elapsed_ms: Wall time spent in the attempt.
    """

    attempt: int
    strategy: str
    outcome: AttemptOutcome
    detail: str = ""
    ignored_failures: list[str] = field(default_factory=list)
    strategy_error: str | None = None
    predicate_error: str | None = None
    elapsed_ms: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "attempt": self.attempt,
            "strategy": self.strategy,
            "outcome": self.outcome.value,
            "detail": self.detail,
            "ignored_failures": list(self.ignored_failures),
            "strategy_error": self.strategy_error,
            "predicate_error": self.predicate_error,
            "elapsed_ms": self.elapsed_ms,
        }


@dataclass
class Success:
    """An action whose success predicate held.

    Attributes:
        attempts_used: Attempt on which the predicate first held.
        strategy_used: Strategy applied on that attempt.
        records: All attempt records up to and including that attempt.
    """

    attempts_used: int
    strategy_used: str
    records: list[AttemptRecord] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return True


@dataclass
class Exhausted:
    """An action that used its whole retry budget without success.

    Attributes:
        action: Name of the action.
        records: One record per attempt.
    """

    action: str
    records: list[AttemptRecord] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return False

    @property
    def predicate_errors(self) -> list[str]:
        """Predicate errors captured across attempts."""
        return [r.predicate_error for r in self.records if r.predicate_error]

    def to_error(self) -> ExhaustedRetries:
        """Build the exception reported to scenario code."""
        return ExhaustedRetries(self.action, self.records)


Outcome = Union[Success, Exhausted]


@dataclass
class ScenarioResult:
    """Result of running one scenario.

    Attributes:
        scenario_id: Identifier from the scenario registry.
        passed: Whether every expectation held.
        message: Human-readable summary or failure reason.
        duration_ms: Wall time of the scenario.
        artifacts: Paths of screenshots/HTML dumps saved on failure.
    """

    scenario_id: str
    passed: bool
    message: str
    duration_ms: int = 0
    artifacts: list[Path] = field(default_factory=list)


class BrowserProtocol(Protocol):
    """Protocol for browser automation.

    Defines the interface that browser implementations must provide
    for the executor, the form page object and the scenario runner.
    """

    async def launch(self) -> None:
        """Launch the browser instance."""
        ...

    async def navigate(self, url: str, timeout: int = 60000) -> None:
        """Navigate to a URL.

        Raises:
            NavigationError: If the page does not load.
            IgnorableExternalFailure: If only allow-listed resources failed.
        """
        ...

    async def block_requests(self, patterns: tuple[str, ...]) -> None:
        """Answer requests whose URL contains any pattern with an empty 200."""
        ...

    async def query_state(self, selector: str) -> ElementState:
        """Observe the first element matching selector."""
        ...

    async def count(self, selector: str) -> int:
        """Number of elements matching selector."""
        ...

    async def fill(self, selector: str, value: str) -> None:
        """Replace an input's value."""
        ...

    async def type_text(self, selector: str, text: str) -> None:
        """Type text key by key into an element."""
        ...

    async def click(
        self, selector: str, force: bool = False, timeout: int | None = None
    ) -> None:
        """Click the first element matching selector.

        Raises:
            ElementNotFound: If the element cannot be clicked in time.
        """
        ...

    async def click_label(self, text: str) -> None:
        """Click the label whose text is exactly ``text``."""
        ...

    async def click_option(self, menu_selector: str, text: str) -> None:
        """Click the entry containing ``text`` inside a dropdown menu."""
        ...

    async def focus(self, selector: str) -> None:
        """Focus an element."""
        ...

    async def press(self, selector: str, key: str) -> None:
        """Press a key on an element."""
        ...

    async def scroll_into_view(self, selector: str) -> None:
        """Scroll an element into the viewport."""
        ...

    async def scroll_to_bottom(self) -> None:
        """Scroll the window to the bottom of the page."""
        ...

    async def select_option(self, selector: str, value: str) -> None:
        """Select an option of a native select element."""
        ...

    async def set_input_files(self, selector: str, path: Path) -> None:
        """Attach a file to a file input."""
        ...

    async def remove_elements(self, selector: str) -> int:
        """Remove every matching element; returns how many were removed."""
        ...

    async def table_rows(self, selector: str) -> list[list[str]]:
        """Cell texts of every row matching selector."""
        ...

    async def text_content(self) -> str:
        """Get visible text content of the page body."""
        ...

    async def html(self) -> str:
        """Get full page HTML."""
        ...

    async def url(self) -> str:
        """Get current URL."""
        ...

    async def screenshot(self, path: str | None = None) -> bytes:
        """Capture a screenshot."""
        ...

    async def close(self) -> None:
        """Close the browser and release resources."""
        ...
