"""Unit tests for the exception hierarchy."""

import pytest

from regsuite.core.protocols import AttemptOutcome, AttemptRecord
from regsuite.utils.exceptions import (
    ConfigurationError,
    ElementNotFound,
    ExhaustedRetries,
    ExpectationError,
    FixtureError,
    IgnorableExternalFailure,
    InvalidConfiguration,
    NavigationError,
    PermanentError,
    PredicateEvaluationFailed,
    RegSuiteError,
    TransientError,
)


class TestHierarchy:
    """Transient/permanent classification."""

    @pytest.mark.parametrize(
        "exc_class", [ElementNotFound, PredicateEvaluationFailed, NavigationError]
    )
    def test_transient(self, exc_class) -> None:
        assert issubclass(exc_class, TransientError)
        assert issubclass(exc_class, RegSuiteError)

    @pytest.mark.parametrize(
        "exc_class", [ConfigurationError, InvalidConfiguration, FixtureError]
    )
    def test_permanent(self, exc_class) -> None:
        assert issubclass(exc_class, PermanentError)

    def test_terminal_errors_are_neither(self) -> None:
        for exc_class in (ExhaustedRetries, IgnorableExternalFailure, ExpectationError):
            assert not issubclass(exc_class, (TransientError, PermanentError))
            assert issubclass(exc_class, RegSuiteError)


class TestNavigationError:
    def test_defaults(self) -> None:
        error = NavigationError("Timed out")
        assert error.url == ""
        assert error.failed_urls == []
        assert str(error) == "Timed out"

    def test_failed_urls_copied(self) -> None:
        urls = ["https://ads.example/x.js"]
        error = NavigationError("Timed out", url="https://demoqa.com", failed_urls=urls)
        urls.append("other")
        assert error.failed_urls == ["https://ads.example/x.js"]


class TestIgnorableExternalFailure:
    def test_message_truncates(self) -> None:
        error = IgnorableExternalFailure([f"https://ads{i}.example" for i in range(5)])
        assert "(+2 more)" in str(error)
        assert len(error.urls) == 5


class TestPredicateEvaluationFailed:
    def test_wraps_original(self) -> None:
        original = KeyError("modal")
        error = PredicateEvaluationFailed("verify submission", original)
        assert error.error is original
        assert "verify submission" in str(error)
        assert "KeyError" in str(error)


class TestExhaustedRetries:
    def test_message_uses_last_record(self) -> None:
        records = [
            AttemptRecord(1, "click", AttemptOutcome.PREDICATE_FALSE, detail="modal not present"),
            AttemptRecord(
                2, "scroll_click", AttemptOutcome.PREDICATE_ERROR,
                detail="predicate raised", predicate_error="predicate raised",
            ),
        ]
        error = ExhaustedRetries("submit form", records)

        assert "'submit form' did not succeed after 2 attempt(s)" in str(error)
        assert "scroll_click" in str(error)
        assert "predicate raised" in str(error)
        assert error.predicate_errors == ["predicate raised"]

    def test_without_records(self) -> None:
        error = ExhaustedRetries("visit", [])
        assert str(error) == "'visit' did not succeed after 0 attempt(s)"
        assert error.predicate_errors == []
