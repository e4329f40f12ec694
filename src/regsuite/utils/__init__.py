"""Utilities module for regsuite."""

from .config import AppConfig, ConfigLoader
from .exceptions import (
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
from .session import AttemptEntry, ScenarioEntry, SessionLogger

__all__ = [
    "AppConfig",
    "AttemptEntry",
    "ConfigLoader",
    "ConfigurationError",
    "ElementNotFound",
    "ExhaustedRetries",
    "ExpectationError",
    "FixtureError",
    "IgnorableExternalFailure",
    "InvalidConfiguration",
    "NavigationError",
    "PermanentError",
    "PredicateEvaluationFailed",
    "RegSuiteError",
    "ScenarioEntry",
    "SessionLogger",
    "TransientError",
]
