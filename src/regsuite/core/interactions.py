"""Reliable navigation, submission and verification of the registration form.

Each interaction is an Action run by the ReliableActionExecutor:
- visit: a single ``direct_load`` strategy; allow-listed third-party
  failures are filtered out instead of retried
- submit: ``click`` -> ``scroll_click`` -> ``keyboard_submit``
- verify: ``reassert`` -> ``resubmit``, then a weaker text check
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from regsuite.core.executor import (
    Action,
    ExecutionOptions,
    IgnorableFailurePolicy,
    ReliableActionExecutor,
)
from regsuite.core.protocols import (
    AttemptRecord,
    BrowserProtocol,
    Outcome,
    Success,
)
from regsuite.form.page import FALLBACK_CONFIRMATION_TEXTS, RegistrationFormPage
from regsuite.utils.config import AppConfig

logger = logging.getLogger(__name__)

NAVIGATION_STRATEGIES = ["direct_load"]
SUBMIT_STRATEGIES = ["click", "scroll_click", "keyboard_submit"]
VERIFY_STRATEGIES = ["reassert", "resubmit"]
VERIFY_ATTEMPTS = 3


@dataclass
class Confirmation:
    """How a submission was confirmed.

    Attributes:
        method: ``"modal"`` when the success predicate held, ``"text"`` when
            only the weaker textual check passed.
        records: Attempt records of the verification action.
    """

    method: str
    records: list[AttemptRecord] = field(default_factory=list)


class ReliableInteractions:
    """The three retried interactions a scenario is built from.

    Attributes:
        browser: Browser automation interface.
        form: Page object for the registration form.
        config: Application configuration (budgets and timeouts).
        executor: Executor running every action.
    """

    def __init__(
        self,
        browser: BrowserProtocol,
        form: RegistrationFormPage,
        config: AppConfig,
        executor: ReliableActionExecutor | None = None,
    ) -> None:
        self.browser = browser
        self.form = form
        self.config = config
        self.executor = executor or ReliableActionExecutor(
            IgnorableFailurePolicy(config.ignorable_domains)
        )

    async def visit(self, url: str | None = None) -> Success:
        """Load the form page, retrying on navigation failures.

        Raises:
            ExhaustedRetries: If the form never loads.
        """
        target = url or self.config.form_url
        form_root = self.form.selectors.form

        async def direct_load() -> None:
            await self.browser.navigate(target, timeout=self.config.page_timeout)

        async def form_loaded() -> bool:
            return (await self.browser.query_state(form_root)).exists

        async def observe() -> str:
            return (await self.browser.query_state(form_root)).describe()

        action = Action(
            name=f"visit {target}",
            strategies={"direct_load": direct_load},
            predicate=form_loaded,
            observe=observe,
        )
        options = ExecutionOptions(
            max_attempts=self.config.max_attempts,
            strategy_order=list(NAVIGATION_STRATEGIES),
            inter_attempt_delay_ms=self.config.retry_delay,
            predicate_timeout_ms=self.config.element_timeout,
        )
        return await self.executor.run(action, options)

    async def submit(self) -> Outcome:
        """Submit the form with escalating strategies.

        Returns the outcome rather than raising: a rejected form is an
        expected result for validation scenarios.
        """
        submit = self.form.selectors.submit

        async def click() -> None:
            await self.browser.click(submit, force=True)

        async def scroll_click() -> None:
            await self.browser.scroll_to_bottom()
            await self.browser.scroll_into_view(submit)
            await self.browser.click(submit, force=True)

        async def keyboard_submit() -> None:
            await self.browser.focus(submit)
            await self.browser.press(submit, "Enter")

        action = Action(
            name="submit form",
            strategies={
                "click": click,
                "scroll_click": scroll_click,
                "keyboard_submit": keyboard_submit,
            },
            predicate=self.form.confirmation_visible,
            observe=self.form.describe_confirmation,
        )
        options = ExecutionOptions(
            max_attempts=self.config.max_attempts,
            strategy_order=list(SUBMIT_STRATEGIES),
            inter_attempt_delay_ms=self.config.retry_delay,
            predicate_timeout_ms=self.config.confirm_timeout,
        )
        return await self.executor.execute(action, options)

    async def verify(self) -> Confirmation:
        """Confirm the submission, re-submitting if confirmation never shows.

        Raises:
            ExhaustedRetries: If neither the modal nor any confirmation text
                appears.
        """
        submit = self.form.selectors.submit

        async def reassert() -> None:
            return None

        async def resubmit() -> None:
            await self.browser.scroll_into_view(submit)
            await self.browser.click(submit, force=True)

        async def confirmed() -> bool:
            if await self.form.confirmation_visible():
                return True
            return await self.form.confirmation_text_present()

        action = Action(
            name="verify submission",
            strategies={"reassert": reassert, "resubmit": resubmit},
            predicate=confirmed,
            observe=self.form.describe_confirmation,
        )
        options = ExecutionOptions(
            max_attempts=VERIFY_ATTEMPTS,
            strategy_order=list(VERIFY_STRATEGIES),
            inter_attempt_delay_ms=self.config.retry_delay,
            predicate_timeout_ms=self.config.confirm_timeout,
        )
        outcome = await self.executor.execute(action, options)
        if isinstance(outcome, Success):
            return Confirmation(method="modal", records=outcome.records)

        if await self.form.confirmation_text_present(FALLBACK_CONFIRMATION_TEXTS):
            logger.info("Confirmation modal missing, but confirmation text found")
            return Confirmation(method="text", records=outcome.records)
        raise outcome.to_error()
