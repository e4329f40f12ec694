"""Terminal accessibility switches for regsuite output.

Colors follow the NO_COLOR convention (https://no-color.org/) and
``TERM=dumb``. ``REGSUITE_PLAIN`` additionally turns off the spinner shown
while scenarios run.
"""

import os

from questionary import Style

PLAIN_ENV = "REGSUITE_PLAIN"

# Picker styling: group separators stand out from the scenario rows.
PICKER_STYLE = [
    ("qmark", "fg:cyan bold"),
    ("question", "fg:cyan bold"),
    ("pointer", "fg:green bold"),
    ("highlighted", "fg:green"),
    ("selected", "fg:green"),
    ("separator", "fg:yellow"),
    ("instruction", "fg:ansibrightblack"),
    ("answer", "fg:cyan"),
]


def should_use_colors() -> bool:
    """Whether ANSI colors may be written.

    NO_COLOR (any value, including empty) and TERM=dumb turn colors off.
    """
    return "NO_COLOR" not in os.environ and os.environ.get("TERM") != "dumb"


def should_use_animations() -> bool:
    """Whether the status spinner may run while scenarios execute."""
    return should_use_colors() and PLAIN_ENV not in os.environ


def get_questionary_style() -> Style | None:
    """Style for the scenario picker, or None when colors are off."""
    if not should_use_colors():
        return None
    return Style(PICKER_STYLE)
