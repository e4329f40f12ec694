"""Selector configuration for the student registration form.

Selectors follow the markup of https://demoqa.com/automation-practice-form.
"""

from dataclasses import dataclass

# Bootstrap's invalid-field color, used for both borders and label text.
ERROR_COLOR = "rgb(220, 53, 69)"


@dataclass(frozen=True)
class FormSelectors:
    """CSS selectors for every element the suite touches."""

    form: str = "#userForm"
    first_name: str = "#firstName"
    last_name: str = "#lastName"
    email: str = "#userEmail"
    gender_radios: tuple[str, ...] = (
        "#gender-radio-1",
        "#gender-radio-2",
        "#gender-radio-3",
    )
    gender_labels: tuple[str, ...] = (
        'label[for="gender-radio-1"]',
        'label[for="gender-radio-2"]',
        'label[for="gender-radio-3"]',
    )
    mobile: str = "#userNumber"
    date_of_birth: str = "#dateOfBirthInput"
    year_select: str = ".react-datepicker__year-select"
    month_select: str = ".react-datepicker__month-select"
    next_month: str = '[class*="react-datepicker__navigation--next"]'
    day_in_month: str = (
        ".react-datepicker__day:not(.react-datepicker__day--outside-month)"
    )
    enabled_day_in_month: str = (
        ".react-datepicker__day:not(.react-datepicker__day--disabled)"
        ":not(.react-datepicker__day--outside-month)"
    )
    subjects_input: str = "#subjectsInput"
    subjects_menu: str = ".subjects-auto-complete__menu"
    picture: str = "#uploadPicture"
    current_address: str = "#currentAddress"
    state: str = "#state"
    state_input: str = "#state input"
    city: str = "#city"
    city_input: str = "#city input"
    city_control: str = "#city .css-1pahdxg-control"
    dropdown_menu: str = ".css-26l3qy-menu"
    disabled_control_class: str = "css-1pahdxg-control--is-disabled"
    submit: str = "#submit"
    modal_title: str = "#example-modal-sizes-title-lg"
    modal_rows: str = ".modal-content table tbody tr"
    fallback_rows: str = ".table-responsive tbody tr"
    close_modal: str = "#closeLargeModal"
    overlays: tuple[str, ...] = ("iframe", "footer", "#fixedban")

    def day(self, day: str) -> str:
        """Selector of a zero-padded day cell inside the displayed month."""
        return (
            f".react-datepicker__day--0{day.zfill(2)}"
            ":not(.react-datepicker__day--outside-month)"
        )

    def field(self, name: str) -> str:
        """Selector of a named input field.

        Raises:
            KeyError: If the field has no single selector.
        """
        fields = {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "mobile": self.mobile,
            "current_address": self.current_address,
            "date_of_birth": self.date_of_birth,
        }
        return fields[name]


FORM_SELECTORS = FormSelectors()
