"""Core module for regsuite.

This module exports the reliable action executor and the foundational types
and protocols used throughout the suite.
"""

from regsuite.core.executor import (
    Action,
    ExecutionOptions,
    IgnorableFailurePolicy,
    ReliableActionExecutor,
)
from regsuite.core.protocols import (
    AttemptOutcome,
    AttemptRecord,
    BrowserProtocol,
    ElementState,
    Exhausted,
    Outcome,
    ScenarioResult,
    Success,
)

__all__ = [
    "Action",
    "AttemptOutcome",
    "AttemptRecord",
    "BrowserProtocol",
    "ElementState",
    "ExecutionOptions",
    "Exhausted",
    "IgnorableFailurePolicy",
    "Outcome",
    "ReliableActionExecutor",
    "ScenarioResult",
    "Success",
]
