"""Field-interaction checks for scenarios that do not submit the form."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from regsuite.core.interactions import ReliableInteractions
from regsuite.form.page import RegistrationFormPage
from regsuite.form.student import DateOfBirth, StudentRecord
from regsuite.utils.exceptions import ExpectationError


@dataclass
class CheckContext:
    """Everything a field check may touch."""

    form: RegistrationFormPage
    interactions: ReliableInteractions
    record: StudentRecord


Check = Callable[[CheckContext], Awaitable[None]]


def expect(condition: bool, message: str) -> None:
    """Raise ExpectationError unless condition holds."""
    if not condition:
        raise ExpectationError(message)


async def _value(form: RegistrationFormPage, selector: str) -> str:
    return (await form.field_state(selector)).value or ""


async def valid_name_inputs(ctx: CheckContext) -> None:
    form = ctx.form
    await form.fill_personal_details(
        StudentRecord(first_name="ValidFirstName", last_name="ValidLastName")
    )
    first = await _value(form, form.selectors.first_name)
    last = await _value(form, form.selectors.last_name)
    expect(first == "ValidFirstName", f"first name field holds '{first}'")
    expect(last == "ValidLastName", f"last name field holds '{last}'")


async def single_gender_option(ctx: CheckContext) -> None:
    form = ctx.form
    radios = form.selectors.gender_radios
    for chosen, label in enumerate(("Male", "Female", "Other")):
        await form.browser.click_label(label)
        for index, selector in enumerate(radios):
            checked = (await form.field_state(selector)).checked
            expect(
                checked == (index == chosen),
                f"after choosing {label}, {selector} checked={checked}",
            )


async def mobile_digits_only(ctx: CheckContext) -> None:
    form = ctx.form
    mobile = form.selectors.mobile
    await form.browser.type_text(mobile, "abcdef!@#$")
    value = await _value(form, mobile)
    expect(value == "", f"non-numeric input left '{value}' in the mobile field")

    await form.browser.type_text(mobile, "123abc456")
    value = await _value(form, mobile)
    expect(value == "123456", f"mixed input left '{value}' in the mobile field")

    await form.browser.fill(mobile, "")
    await form.browser.type_text(mobile, "1234567890")
    value = await _value(form, mobile)
    expect(value == "1234567890", f"10-digit input left '{value}'")


async def future_date_blocked(ctx: CheckContext) -> None:
    form = ctx.form
    s = form.selectors
    browser = form.browser
    await browser.click(s.date_of_birth)
    initial = await _value(form, s.date_of_birth)

    await browser.click(s.next_month, force=True)
    enabled = await browser.count(s.enabled_day_in_month)
    if enabled:
        await browser.click(f":nth-match({s.enabled_day_in_month}, {enabled})", force=True)

    await browser.click(s.date_of_birth)
    await browser.click(s.next_month, force=True)
    await browser.click(s.day_in_month, force=True)

    value = await _value(form, s.date_of_birth)
    await browser.press(s.date_of_birth, "Escape")
    expect(value == initial, f"date changed from '{initial}' to '{value}'")


async def leap_year_dates(ctx: CheckContext) -> None:
    form = ctx.form
    s = form.selectors
    leap_day = DateOfBirth(day="29", month="February", year="2024")
    await form.set_date_of_birth(leap_day)
    value = await _value(form, s.date_of_birth)
    expect(value == leap_day.input_value, f"date input shows '{value}'")

    await form.browser.click(s.date_of_birth)
    await form.browser.select_option(s.year_select, "2023")
    await form.browser.select_option(s.month_select, "1")
    found = await form.browser.count(s.day("29"))
    await form.browser.press(s.date_of_birth, "Escape")
    expect(found == 0, "29 February is offered in 2023")


async def city_disabled_initially(ctx: CheckContext) -> None:
    form = ctx.form
    control = await form.field_state(form.selectors.city_control)
    expect(control.exists, "city dropdown control not found")
    expect(
        control.has_class(form.selectors.disabled_control_class),
        "city dropdown is enabled before a state is chosen",
    )


async def city_enabled_after_state(ctx: CheckContext) -> None:
    form = ctx.form
    s = form.selectors
    state, city = ctx.record.require("state", "city")

    await form.browser.click(s.state, force=True)
    await form.browser.click_option(s.dropdown_menu, state)
    await asyncio.sleep(form.settle_delay)

    control = await form.field_state(s.city_control)
    expect(
        not control.has_class(s.disabled_control_class),
        f"city dropdown still disabled after choosing {state}",
    )

    await form.browser.click(s.city, force=True)
    await asyncio.sleep(form.settle_delay)
    menu = await form.field_state(s.dropdown_menu)
    expect(menu.visible, "city menu did not open")
    expect(city in menu.text, f"city menu does not offer {city}")
    await form.browser.click_option(s.dropdown_menu, city)


async def client_side_email_validation(ctx: CheckContext) -> None:
    form = ctx.form
    email = form.selectors.email
    (address,) = ctx.record.require("email")
    await form.browser.type_text(email, "invalid-email")
    await ctx.interactions.submit()
    expect(await form.has_error(email), "invalid e-mail was not flagged")

    await form.browser.fill(email, "")
    await form.browser.type_text(email, address)


CHECKS: dict[str, Check] = {
    "valid_name_inputs": valid_name_inputs,
    "single_gender_option": single_gender_option,
    "mobile_digits_only": mobile_digits_only,
    "future_date_blocked": future_date_blocked,
    "leap_year_dates": leap_year_dates,
    "city_disabled_initially": city_disabled_initially,
    "city_enabled_after_state": city_enabled_after_state,
    "client_side_email_validation": client_side_email_validation,
}
