"""Scenario registry: the table of registration form scenarios.

Each scenario is data: how to derive its input record from the default
fixture, and what the page should look like afterwards. Field-interaction
scenarios name a check from ``regsuite.scenarios.checks`` instead.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from typing import Any

from regsuite.form.student import StudentRecord

GROUPS = ("positive", "negative", "field")

_ALL_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "gender",
    "mobile",
    "date_of_birth",
    "subjects",
    "hobbies",
    "picture",
    "current_address",
    "state",
    "city",
)
_CONTACT = ("first_name", "last_name", "gender", "mobile")


@dataclass(frozen=True)
class Expectation:
    """What a scenario expects after submitting.

    Attributes:
        submitted: Whether the confirmation modal should appear.
        invalid_fields: Fields that should be painted as invalid.
        row_overrides: Confirmation rows that differ from the record's
            expected rows.
    """

    submitted: bool = True
    invalid_fields: tuple[str, ...] = ()
    row_overrides: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Scenario:
    """One row of the scenario table.

    Attributes:
        id: Stable identifier used on the command line.
        title: Human-readable description.
        group: One of ``positive``, ``negative`` or ``field``.
        overrides: Field values replacing the default record's.
        only: When set, every other field is left empty.
        omit: Fields left empty.
        expect: Expected outcome of a submission.
        check: Name of a field check; such scenarios do not submit.
    """

    id: str
    title: str
    group: str
    overrides: dict[str, Any] = field(default_factory=dict)
    only: tuple[str, ...] | None = None
    omit: tuple[str, ...] = ()
    expect: Expectation = field(default_factory=Expectation)
    check: str | None = None

    def build_record(self, base: StudentRecord) -> StudentRecord:
        """Derive this scenario's input record from the default record."""
        record = base.with_overrides(**self.overrides)
        if self.only is not None:
            record = record.without(*(f for f in _ALL_FIELDS if f not in self.only))
        if self.omit:
            record = record.without(*self.omit)
        return record


SCENARIO_REGISTRY: list[Scenario] = [
    # Positive scenarios
    Scenario(
        id="full-submission",
        title="Submit a form with every field filled",
        group="positive",
    ),
    Scenario(
        id="special-char-names",
        title="Accept names with an apostrophe and a hyphen",
        group="positive",
        overrides={
            "first_name": "O'Malley",
            "last_name": "Smith-Jones",
            "hobbies": ["Sports"],
            "subjects": ["Maths"],
        },
        omit=("picture",),
    ),
    Scenario(
        id="long-domain-email",
        title="Accept an e-mail with a long domain",
        group="positive",
        overrides={
            "email": "test@verylongdomainnamethatisdefinitelyovertencharacterslong.com",
            "hobbies": ["Reading"],
            "subjects": ["Physics"],
        },
        omit=("picture",),
    ),
    Scenario(
        id="hyphen-subdomain-email",
        title="Accept an e-mail with a hyphenated domain and subdomain",
        group="positive",
        overrides={
            "email": "test.name-tag@example-domain.co.uk",
            "hobbies": ["Reading"],
            "subjects": ["Physics"],
        },
        omit=("picture",),
    ),
    Scenario(
        id="single-hobby",
        title="Allow selecting a single hobby",
        group="positive",
        overrides={"hobbies": ["Music"], "subjects": ["Chemistry"]},
        omit=("picture",),
    ),
    Scenario(
        id="long-address",
        title="Accept a 200-character address",
        group="positive",
        overrides={
            "current_address": "A" * 200,
            "hobbies": ["Sports"],
            "subjects": ["Arts"],
        },
        omit=("picture",),
    ),
    Scenario(
        id="picture-upload",
        title="Submit with an uploaded picture",
        group="positive",
        only=_CONTACT
        + ("picture", "date_of_birth", "current_address", "state", "city"),
    ),
    Scenario(
        id="invalid-file-type",
        title="Submit with a non-image upload; picture row stays empty",
        group="positive",
        overrides={"picture": "example.json"},
        expect=Expectation(submitted=True, row_overrides={"Picture": ""}),
    ),
    # Negative scenarios
    Scenario(
        id="empty-form",
        title="Flag required fields when submitting an empty form",
        group="negative",
        only=(),
        expect=Expectation(
            submitted=False,
            invalid_fields=("first_name", "last_name", "gender", "mobile"),
        ),
    ),
    Scenario(
        id="missing-first-name",
        title="Flag an empty first name",
        group="negative",
        only=("last_name", "gender", "mobile"),
        expect=Expectation(submitted=False, invalid_fields=("first_name",)),
    ),
    Scenario(
        id="missing-last-name",
        title="Flag an empty last name",
        group="negative",
        only=("first_name", "gender", "mobile"),
        expect=Expectation(submitted=False, invalid_fields=("last_name",)),
    ),
    Scenario(
        id="invalid-email",
        title="Flag an invalid e-mail format",
        group="negative",
        overrides={"email": "invalid-email-format"},
        only=_CONTACT + ("email",),
        expect=Expectation(submitted=False, invalid_fields=("email",)),
    ),
    Scenario(
        id="plus-sign-email",
        title="Do not submit with a plus-sign e-mail",
        group="negative",
        overrides={"email": "test.user+tag@example.com", "hobbies": ["Reading"]},
        only=_CONTACT
        + ("email", "date_of_birth", "hobbies", "current_address", "state", "city"),
        expect=Expectation(submitted=False),
    ),
    Scenario(
        id="missing-gender",
        title="Flag every gender option when none is selected",
        group="negative",
        only=("first_name", "last_name", "mobile"),
        expect=Expectation(submitted=False, invalid_fields=("gender",)),
    ),
    Scenario(
        id="short-mobile",
        title="Do not submit with a 5-digit mobile number",
        group="negative",
        overrides={"mobile": "12345"},
        only=_CONTACT,
        expect=Expectation(submitted=False),
    ),
    # Field-specific interactions
    Scenario(
        id="valid-name-inputs",
        title="Accept valid name inputs",
        group="field",
        check="valid_name_inputs",
    ),
    Scenario(
        id="single-gender-option",
        title="Allow only one gender option at a time",
        group="field",
        check="single_gender_option",
    ),
    Scenario(
        id="mobile-digits-only",
        title="Keep only digits in the mobile field",
        group="field",
        check="mobile_digits_only",
    ),
    Scenario(
        id="future-date-blocked",
        title="Prevent selecting future dates",
        group="field",
        check="future_date_blocked",
    ),
    Scenario(
        id="leap-year-dates",
        title="Handle 29 February in leap and non-leap years",
        group="field",
        check="leap_year_dates",
    ),
    Scenario(
        id="city-disabled-initially",
        title="City dropdown starts disabled",
        group="field",
        check="city_disabled_initially",
    ),
    Scenario(
        id="city-enabled-after-state",
        title="City dropdown enables after a state is selected",
        group="field",
        check="city_enabled_after_state",
    ),
    Scenario(
        id="client-side-email-validation",
        title="Validate the e-mail format client-side",
        group="field",
        check="client_side_email_validation",
    ),
]


def get_all_scenarios() -> list[Scenario]:
    """Get all scenarios in table order."""
    return list(SCENARIO_REGISTRY)


def get_scenarios(group: str | None = None) -> list[Scenario]:
    """Get scenarios of one group, or all of them.

    Raises:
        ValueError: If the group is unknown.
    """
    if group is None:
        return get_all_scenarios()
    if group not in GROUPS:
        raise ValueError(f"Unknown group '{group}'. Expected one of {GROUPS}")
    return [s for s in SCENARIO_REGISTRY if s.group == group]


def get_scenario_by_id(scenario_id: str) -> Scenario | None:
    """Get a scenario by its ID (case-insensitive).

    Args:
        scenario_id: The scenario ID to look up.

    Returns:
        Scenario if found, None otherwise.
    """
    scenario_id_lower = scenario_id.lower()
    for scenario in SCENARIO_REGISTRY:
        if scenario.id == scenario_id_lower:
            return scenario
    return None


def suggest_scenario(typo: str) -> str | None:
    """Suggest a scenario ID for a typo using fuzzy matching.

    Args:
        typo: The mistyped scenario ID.

    Returns:
        The closest matching scenario ID if found (cutoff=0.6), None otherwise.
    """
    matches = difflib.get_close_matches(
        typo.lower(),
        [s.id for s in SCENARIO_REGISTRY],
        n=1,
        cutoff=0.6,
    )
    return matches[0] if matches else None
