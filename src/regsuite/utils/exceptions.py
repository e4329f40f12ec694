"""Exception hierarchy for regsuite."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from regsuite.core.protocols import AttemptRecord


class RegSuiteError(Exception):
    """Base exception for all regsuite errors."""


class TransientError(RegSuiteError):
    """Retry-able errors such as slow pages or elements not yet rendered."""


class PermanentError(RegSuiteError):
    """Non-retry-able errors that require configuration or code changes."""


class ConfigurationError(PermanentError):
    """Invalid or missing configuration."""


class InvalidConfiguration(ConfigurationError):  # noqa: N818
    """Execution options violate their constraints.

    Raised before any browser interaction takes place.
    """


class FixtureError(PermanentError):
    """A fixture record is missing a field the caller requires."""


class ElementNotFound(TransientError):  # noqa: N818
    """Element not found in page, may succeed on retry."""


class NavigationError(TransientError):
    """Page navigation failed, may succeed on retry.

    Attributes:
        url: The page that was being loaded.
        failed_urls: Resource URLs that failed or were still pending when
            navigation gave up. Empty when unknown.
    """

    def __init__(
        self, message: str, url: str = "", failed_urls: list[str] | None = None
    ) -> None:
        self.url = url
        self.failed_urls = list(failed_urls or [])
        super().__init__(message)


class IgnorableExternalFailure(RegSuiteError):  # noqa: N818
    """A failure caused only by allow-listed third-party resources.

    Never counts against an action's retry budget.
    """

    def __init__(self, urls: list[str]) -> None:
        self.urls = list(urls)
        shown = ", ".join(self.urls[:3])
        more = f" (+{len(self.urls) - 3} more)" if len(self.urls) > 3 else ""
        super().__init__(f"Ignored third-party failure: {shown}{more}")


class PredicateEvaluationFailed(TransientError):  # noqa: N818
    """The success predicate itself raised while being evaluated."""

    def __init__(self, action: str, error: BaseException) -> None:
        self.action = action
        self.error = error
        super().__init__(
            f"Success predicate for '{action}' raised "
            f"{type(error).__name__}: {error}"
        )


class ExhaustedRetries(RegSuiteError):  # noqa: N818
    """An action never satisfied its success predicate within its budget.

    Attributes:
        action: Name of the action.
        records: Every attempt record, in order.
    """

    def __init__(self, action: str, records: list[AttemptRecord]) -> None:
        self.action = action
        self.records = list(records)
        message = f"'{action}' did not succeed after {len(self.records)} attempt(s)"
        if self.records:
            last = self.records[-1]
            message += (
                f"; last attempt used '{last.strategy}' and observed: "
                f"{last.detail or last.outcome.value}"
            )
        super().__init__(message)

    @property
    def predicate_errors(self) -> list[str]:
        """Predicate errors captured across attempts."""
        return [r.predicate_error for r in self.records if r.predicate_error]


class ExpectationError(RegSuiteError):
    """A scenario expectation about page state did not hold."""
