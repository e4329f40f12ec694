"""Page object, selectors and fixture records for the registration form."""

from regsuite.form.page import RegistrationFormPage
from regsuite.form.selectors import ERROR_COLOR, FORM_SELECTORS, FormSelectors
from regsuite.form.student import (
    DateOfBirth,
    FixtureSet,
    StudentRecord,
    load_fixtures,
)

__all__ = [
    "DateOfBirth",
    "ERROR_COLOR",
    "FORM_SELECTORS",
    "FixtureSet",
    "FormSelectors",
    "RegistrationFormPage",
    "StudentRecord",
    "load_fixtures",
]
