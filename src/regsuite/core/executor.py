"""Reliable action executor.

Runs a flake-prone browser interaction as a bounded loop of escalating
strategies, stopping as soon as the action's success predicate holds. The
same loop backs navigation, form submission and result verification.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from urllib.parse import urlparse

from regsuite.core.protocols import (
    AttemptOutcome,
    AttemptRecord,
    Exhausted,
    Outcome,
    Success,
)
from regsuite.utils.exceptions import (
    IgnorableExternalFailure,
    InvalidConfiguration,
    NavigationError,
    PredicateEvaluationFailed,
    TransientError,
)

logger = logging.getLogger(__name__)

Strategy = Callable[[], Awaitable[None]]
Predicate = Callable[[], Awaitable[bool]]
Observer = Callable[[], Awaitable[str]]


@dataclass
class Action:
    """A retryable unit of work against the live browser session.

    Attributes:
        name: Identifier used in logs and error messages.
        strategies: Named ways to attempt the action, in declared order.
        predicate: Side-effect-free check of whether the action succeeded.
        observe: Optional description of the current page state, recorded
            on attempts that do not succeed.
    """

    name: str
    strategies: dict[str, Strategy]
    predicate: Predicate
    observe: Observer | None = None


@dataclass
class ExecutionOptions:
    """Retry budget and timing for one execution.

    Attributes:
        max_attempts: Number of attempts before giving up (>= 1).
        strategy_order: Strategy names to apply; the last one repeats when
            attempts outnumber strategies.
        inter_attempt_delay_ms: Pause between attempts.
        predicate_timeout_ms: How long each attempt waits for the predicate.
        poll_interval_ms: Pause between predicate evaluations.
    """

    max_attempts: int = 3
    strategy_order: list[str] = field(default_factory=list)
    inter_attempt_delay_ms: int = 1000
    predicate_timeout_ms: int = 1000
    poll_interval_ms: int = 100

    def validate(self, action: Action) -> None:
        """Check the options against their constraints and the action.

        Raises:
            InvalidConfiguration: If any constraint is violated.
        """
        if self.max_attempts < 1:
            raise InvalidConfiguration(
                f"max_attempts must be >= 1, got {self.max_attempts}"
            )
        if not self.strategy_order:
            raise InvalidConfiguration("strategy_order must not be empty")
        unknown = [s for s in self.strategy_order if s not in action.strategies]
        if unknown:
            raise InvalidConfiguration(
                f"Strategies not registered on '{action.name}': {unknown}"
            )
        if self.inter_attempt_delay_ms < 0:
            raise InvalidConfiguration("inter_attempt_delay_ms must be >= 0")
        if self.predicate_timeout_ms < 0:
            raise InvalidConfiguration("predicate_timeout_ms must be >= 0")
        if self.poll_interval_ms <= 0:
            raise InvalidConfiguration("poll_interval_ms must be > 0")

    def strategy_for(self, attempt: int) -> str:
        """Strategy name for a 1-based attempt number."""
        return self.strategy_order[min(attempt, len(self.strategy_order)) - 1]


class IgnorableFailurePolicy:
    """Pre-declared allow-list of failure causes that never count as failures.

    A failure is ignorable only when every URL it names matches the
    allow-list. Errors that name no URL are never ignorable.

    Attributes:
        patterns: Host substrings such as ``"doubleclick"``.
    """

    def __init__(self, patterns: tuple[str, ...] | list[str]) -> None:
        self.patterns = tuple(p.lower() for p in patterns if p)

    def matches_url(self, url: str) -> bool:
        """Whether a resource URL belongs to an allow-listed host."""
        host = urlparse(url).netloc.lower() or url.lower()
        return any(pattern in host for pattern in self.patterns)

    def is_ignorable(self, error: BaseException) -> bool:
        """Whether an error was caused only by allow-listed resources."""
        if isinstance(error, IgnorableExternalFailure):
            return True
        if isinstance(error, NavigationError) and error.failed_urls:
            return all(self.matches_url(u) for u in error.failed_urls)
        return False

    def failure_urls(self, error: BaseException) -> list[str]:
        if isinstance(error, IgnorableExternalFailure):
            return list(error.urls)
        if isinstance(error, NavigationError):
            return list(error.failed_urls)
        return [str(error)]


class ReliableActionExecutor:
    """Runs actions until their success predicate holds or the budget runs out.

    The executor is strictly sequential: one strategy at a time, and the
    caller runs one action to completion before starting the next.

    Example:
        >>> executor = ReliableActionExecutor(IgnorableFailurePolicy(["ads"]))
        >>> outcome = await executor.execute(action, ExecutionOptions(
        ...     max_attempts=3, strategy_order=["click", "scroll_click"]))
    """

    def __init__(self, ignorable: IgnorableFailurePolicy | None = None) -> None:
        self.ignorable = ignorable or IgnorableFailurePolicy(())

    async def execute(self, action: Action, options: ExecutionOptions) -> Outcome:
        """Execute an action with escalating strategies.

        Args:
            action: The action to perform.
            options: Retry budget and timing.

        Returns:
            Success on the first attempt whose predicate held, otherwise
            Exhausted with one record per attempt.

        Raises:
            InvalidConfiguration: If options are invalid. Nothing is executed.
        """
        options.validate(action)
        records: list[AttemptRecord] = []
        attempt = 0

        while True:
            attempt += 1
            strategy_name = options.strategy_for(attempt)
            logger.info(
                "%s: attempt %d/%d using '%s'",
                action.name, attempt, options.max_attempts, strategy_name,
            )
            record = await self._attempt(action, options, attempt, strategy_name)
            records.append(record)

            if record.outcome is AttemptOutcome.SATISFIED:
                return Success(attempt, strategy_name, records)

            if attempt >= options.max_attempts:
                logger.warning(
                    "%s: exhausted %d attempt(s); last observed: %s",
                    action.name, attempt, record.detail or record.outcome.value,
                )
                return Exhausted(action.name, records)

            await asyncio.sleep(options.inter_attempt_delay_ms / 1000)

            # A late success belongs to the previous attempt; the next strategy
            # must not run on a page that already satisfies the predicate.
            if await self._holds_now(action):
                logger.info(
                    "%s: attempt %d satisfied after its predicate window",
                    action.name, attempt,
                )
                records[-1] = replace(
                    record,
                    outcome=AttemptOutcome.SATISFIED,
                    detail="satisfied after predicate window",
                )
                return Success(attempt, strategy_name, records)

    async def run(self, action: Action, options: ExecutionOptions) -> Success:
        """Execute an action and raise if it never succeeds.

        Raises:
            ExhaustedRetries: If the retry budget is used up.
            InvalidConfiguration: If options are invalid.
        """
        outcome = await self.execute(action, options)
        if isinstance(outcome, Exhausted):
            raise outcome.to_error()
        return outcome

    async def wait_for(
        self,
        action: Action,
        timeout_ms: int,
        poll_interval_ms: int = 100,
    ) -> bool:
        """Poll an action's predicate until it holds or the timeout elapses.

        The predicate is always evaluated at least once.

        Raises:
            PredicateEvaluationFailed: If the predicate raises.
        """
        deadline = time.monotonic() + timeout_ms / 1000
        while True:
            try:
                if await action.predicate():
                    return True
            except Exception as e:
                raise PredicateEvaluationFailed(action.name, e) from e
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            await asyncio.sleep(min(poll_interval_ms / 1000, remaining))

    async def _attempt(
        self,
        action: Action,
        options: ExecutionOptions,
        attempt: int,
        strategy_name: str,
    ) -> AttemptRecord:
        started = time.monotonic()
        record = AttemptRecord(
            attempt=attempt,
            strategy=strategy_name,
            outcome=AttemptOutcome.PREDICATE_FALSE,
        )

        try:
            await action.strategies[strategy_name]()
        except (TransientError, IgnorableExternalFailure) as e:
            if self.ignorable.is_ignorable(e):
                urls = self.ignorable.failure_urls(e)
                logger.debug("%s: ignoring third-party failure %s", action.name, urls)
                record.ignored_failures.extend(urls)
            else:
                logger.info("%s: strategy '%s' failed: %s", action.name, strategy_name, e)
                record.strategy_error = f"{type(e).__name__}: {e}"
                record.outcome = AttemptOutcome.STRATEGY_ERROR

        try:
            satisfied = await self.wait_for(
                action, options.predicate_timeout_ms, options.poll_interval_ms
            )
        except PredicateEvaluationFailed as e:
            record.outcome = AttemptOutcome.PREDICATE_ERROR
            record.predicate_error = str(e)
            record.detail = str(e)
            record.elapsed_ms = int((time.monotonic() - started) * 1000)
            return record

        if satisfied:
            record.outcome = AttemptOutcome.SATISFIED
            record.detail = ""
        else:
            record.detail = await self._observe(action, record)
        record.elapsed_ms = int((time.monotonic() - started) * 1000)
        return record

    async def _holds_now(self, action: Action) -> bool:
        try:
            return bool(await action.predicate())
        except Exception as e:
            logger.debug("%s: predicate re-check raised %s", action.name, e)
            return False

    async def _observe(self, action: Action, record: AttemptRecord) -> str:
        if record.strategy_error:
            fallback = record.strategy_error
        else:
            fallback = "success predicate not satisfied"
        if action.observe is None:
            return fallback
        try:
            observed = await action.observe()
        except Exception as e:
            logger.debug("%s: observer raised %s", action.name, e)
            return fallback
        if record.strategy_error:
            return f"{observed} ({record.strategy_error})"
        return observed
