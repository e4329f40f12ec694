"""Student fixture records and the modal rows they should produce."""

from __future__ import annotations

import calendar
import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from regsuite.utils.exceptions import FixtureError

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

# Fixture JSON keys keep the camelCase naming of the form's field ids.
_JSON_KEYS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "gender": "gender",
    "mobile": "mobile",
    "dateOfBirth": "date_of_birth",
    "subjects": "subjects",
    "hobbies": "hobbies",
    "picture": "picture",
    "currentAddress": "current_address",
    "state": "state",
    "city": "city",
}


@dataclass(frozen=True)
class DateOfBirth:
    """A date as the datepicker sees it: day, English month name, year."""

    day: str
    month: str
    year: str

    @property
    def month_index(self) -> int:
        """Zero-based month number, as used by the month select."""
        names = [m.lower() for m in calendar.month_name]
        month = self.month.lower()
        if not month or month not in names:
            raise FixtureError(f"Unknown month name '{self.month}'")
        return names.index(month) - 1

    @property
    def modal_value(self) -> str:
        """Format shown in the confirmation table, e.g. ``05 May,1995``."""
        return f"{self.day.zfill(2)} {self.month},{self.year}"

    @property
    def input_value(self) -> str:
        """Format shown in the date input, e.g. ``05 May 1995``."""
        return f"{self.day.zfill(2)} {self.month[:3]} {self.year}"


@dataclass(frozen=True)
class StudentRecord:
    """Input record for one form fill. Empty fields are skipped when filling."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    gender: str | None = None
    mobile: str | None = None
    date_of_birth: DateOfBirth | None = None
    subjects: tuple[str, ...] = ()
    hobbies: tuple[str, ...] = ()
    picture: str | None = None
    current_address: str | None = None
    state: str | None = None
    city: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StudentRecord:
        """Build a record from fixture JSON.

        Raises:
            FixtureError: If a key is not a known form field.
        """
        unknown = sorted(set(data) - set(_JSON_KEYS))
        if unknown:
            raise FixtureError(f"Unknown fixture fields: {unknown}")
        values: dict[str, Any] = {_JSON_KEYS[k]: v for k, v in data.items()}
        dob = values.get("date_of_birth")
        if isinstance(dob, dict):
            try:
                values["date_of_birth"] = DateOfBirth(
                    day=str(dob["day"]), month=dob["month"], year=str(dob["year"])
                )
            except KeyError as e:
                raise FixtureError(f"dateOfBirth is missing {e}") from e
        for key in ("subjects", "hobbies"):
            if key in values:
                values[key] = tuple(values[key] or ())
        return cls(**values)

    def with_overrides(self, **changes: Any) -> StudentRecord:
        """Copy with some fields replaced."""
        for key in ("subjects", "hobbies"):
            if key in changes:
                changes[key] = tuple(changes[key] or ())
        return replace(self, **changes)

    def without(self, *names: str) -> StudentRecord:
        """Copy with the named fields emptied."""
        defaults = {f.name: f.default for f in fields(self)}
        missing = [n for n in names if n not in defaults]
        if missing:
            raise FixtureError(f"Unknown fields: {missing}")
        return replace(self, **{n: defaults[n] for n in names})

    def require(self, *names: str) -> tuple[str, ...]:
        """Return the named fields, checking that each is present.

        Returns:
            The field values, in the order named.

        Raises:
            FixtureError: If any field is empty.
        """
        absent = [n for n in names if not getattr(self, n)]
        if absent:
            raise FixtureError(f"Fixture record is missing {absent}")
        return tuple(getattr(self, n) for n in names)

    def expected_rows(self) -> dict[str, str]:
        """Rows the confirmation table should show, keyed by label.

        Only fields present in the record are included.
        """
        rows: dict[str, str] = {}
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        if name:
            rows["Student Name"] = name
        if self.email:
            rows["Student Email"] = self.email
        if self.gender:
            rows["Gender"] = self.gender
        if self.mobile:
            rows["Mobile"] = self.mobile
        if self.date_of_birth:
            rows["Date of Birth"] = self.date_of_birth.modal_value
        if self.subjects:
            rows["Subjects"] = ", ".join(self.subjects)
        if self.hobbies:
            rows["Hobbies"] = ", ".join(self.hobbies)
        if self.picture:
            rows["Picture"] = Path(self.picture).name
        if self.current_address:
            rows["Address"] = self.current_address
        if self.state and self.city:
            rows["State and City"] = f"{self.state} {self.city}"
        return rows


@dataclass
class FixtureSet:
    """The default student record plus the directory holding its files."""

    record: StudentRecord
    directory: Path = field(default=FIXTURES_DIR)

    def resolve(self, name: str) -> Path:
        """Absolute path of a fixture file.

        Raises:
            FixtureError: If the file does not exist.
        """
        path = self.directory / name
        if not path.is_file():
            raise FixtureError(f"Fixture file not found: {path}")
        return path


def load_fixtures(directory: Path | None = None) -> FixtureSet:
    """Load ``student_data.json`` from a fixture directory.

    Raises:
        FixtureError: If the file is missing or not valid JSON.
    """
    directory = directory or FIXTURES_DIR
    path = directory / "student_data.json"
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise FixtureError(f"Fixture file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise FixtureError(f"Invalid fixture JSON in {path}: {e}") from e
    return FixtureSet(record=StudentRecord.from_dict(data), directory=directory)
