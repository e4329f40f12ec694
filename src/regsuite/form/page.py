"""Page object for the student registration form."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from regsuite.core.protocols import BrowserProtocol, ElementState
from regsuite.form.selectors import ERROR_COLOR, FORM_SELECTORS, FormSelectors
from regsuite.form.student import DateOfBirth, StudentRecord

logger = logging.getLogger(__name__)

CONFIRMATION_TEXT = "Thanks for submitting"
# Weaker markers accepted once the confirmation modal never showed up.
FALLBACK_CONFIRMATION_TEXTS = (
    "Thanks for submitting",
    "Thank you",
    "successfully submitted",
)


class RegistrationFormPage:
    """Fills, inspects and reads back the registration form.

    Every method talks to the page through BrowserProtocol, so the same
    page object drives Playwright in production and mocks in unit tests.

    Attributes:
        browser: Browser automation interface.
        selectors: Selector set for the form.
        settle_delay: Seconds to let react-select menus settle after a pick.
    """

    def __init__(
        self,
        browser: BrowserProtocol,
        selectors: FormSelectors = FORM_SELECTORS,
        settle_delay: float = 0.5,
    ) -> None:
        self.browser = browser
        self.selectors = selectors
        self.settle_delay = settle_delay

    async def clean_up(self) -> int:
        """Remove ad iframes, the footer and the fixed banner.

        Returns:
            Number of elements removed.
        """
        removed = 0
        for selector in self.selectors.overlays:
            removed += await self.browser.remove_elements(selector)
        logger.debug("Removed %d overlay element(s)", removed)
        return removed

    async def fill_personal_details(self, record: StudentRecord) -> None:
        """Fill names, e-mail, gender and mobile, skipping empty fields."""
        s = self.selectors
        if record.first_name:
            await self.browser.type_text(s.first_name, record.first_name)
        if record.last_name:
            await self.browser.type_text(s.last_name, record.last_name)
        if record.email:
            await self.browser.fill(s.email, "")
            await self.browser.type_text(s.email, record.email)
        if record.gender:
            await self.browser.click_label(record.gender)
        if record.mobile:
            await self.browser.type_text(s.mobile, record.mobile)

    async def set_date_of_birth(self, dob: DateOfBirth) -> None:
        """Pick a date through the datepicker widget."""
        s = self.selectors
        await self.browser.click(s.date_of_birth)
        await self.browser.select_option(s.year_select, dob.year)
        await self.browser.select_option(s.month_select, str(dob.month_index))
        await self.browser.click(s.day(dob.day))

    async def select_subjects(self, subjects: tuple[str, ...] | list[str]) -> None:
        """Type each subject and pick it from the autocomplete menu."""
        for subject in subjects:
            await self.browser.type_text(self.selectors.subjects_input, subject)
            await self.browser.click_option(self.selectors.subjects_menu, subject)

    async def select_hobbies(self, hobbies: tuple[str, ...] | list[str]) -> None:
        """Tick each hobby checkbox through its label."""
        for hobby in hobbies:
            await self.browser.click_label(hobby)

    async def upload_picture(self, path: Path) -> None:
        """Attach a file to the picture input."""
        await self.browser.set_input_files(self.selectors.picture, path)
        logger.debug("Attached %s", path.name)

    async def set_address(self, record: StudentRecord) -> None:
        """Fill the address and pick state, then city."""
        s = self.selectors
        if record.current_address:
            await self.browser.type_text(s.current_address, record.current_address)
        if record.state:
            await self.select_state(record.state)
        if record.city:
            await self.browser.click(s.city)
            await self.browser.type_text(s.city_input, record.city)
            await self.browser.click_option(s.dropdown_menu, record.city)

    async def select_state(self, state: str) -> None:
        s = self.selectors
        await self.browser.click(s.state, force=True)
        await self.browser.type_text(s.state_input, state)
        await self.browser.click_option(s.dropdown_menu, state)
        await asyncio.sleep(self.settle_delay)

    async def fill(self, record: StudentRecord, picture: Path | None = None) -> None:
        """Fill every section present in the record, in page order."""
        await self.fill_personal_details(record)
        if record.date_of_birth:
            await self.set_date_of_birth(record.date_of_birth)
        if record.subjects:
            await self.select_subjects(record.subjects)
        if record.hobbies:
            await self.select_hobbies(record.hobbies)
        if picture is not None:
            await self.upload_picture(picture)
        await self.set_address(record)

    async def close_modal(self) -> None:
        await self.browser.click(self.selectors.close_modal, force=True)

    async def confirmation_visible(self) -> bool:
        """Whether the confirmation modal title is present."""
        state = await self.browser.query_state(self.selectors.modal_title)
        return state.exists

    async def confirmation_text_present(
        self, markers: tuple[str, ...] = (CONFIRMATION_TEXT,)
    ) -> bool:
        """Whether the page text contains any confirmation marker."""
        text = await self.browser.text_content()
        return any(marker in text for marker in markers)

    async def describe_confirmation(self) -> str:
        return (await self.browser.query_state(self.selectors.modal_title)).describe()

    async def submitted_rows(self) -> dict[str, str]:
        """Label-to-value rows of the confirmation table.

        Reads the modal table, falling back to any ``.table-responsive``.
        Returns an empty dict when neither is present.
        """
        rows = await self.browser.table_rows(self.selectors.modal_rows)
        if not rows:
            rows = await self.browser.table_rows(self.selectors.fallback_rows)
        return {cells[0]: cells[1] for cells in rows if len(cells) >= 2}

    async def field_state(self, selector: str) -> ElementState:
        return await self.browser.query_state(selector)

    async def has_error(self, selector: str) -> bool:
        """Whether an element is painted in the invalid color.

        Inputs signal errors through their border, labels through their text.
        """
        state = await self.browser.query_state(selector)
        if not state.exists:
            return False
        return state.border_color == ERROR_COLOR or state.color == ERROR_COLOR

    def error_selectors(self, field: str) -> tuple[str, ...]:
        """Selectors that should turn red when a field is invalid."""
        if field == "gender":
            return self.selectors.gender_labels
        return (self.selectors.field(field),)
