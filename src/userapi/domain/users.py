"""User models, date-of-birth parsing, and the age rule.

Dates travel as ``YYYY-MM-DD`` strings everywhere outside the storage
edge. Parsing is strict: two-digit month and day, a real calendar date.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime

from pydantic import BaseModel, Field

DATE_FORMAT = "%Y-%m-%d"
NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 100

_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


# ---------------------------------------------------------------------------
# Date handling
# ---------------------------------------------------------------------------


def parse_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string.

    Raises ValueError for any other representation, including
    ``2020-1-5`` and impossible dates such as ``2021-02-30``.
    """
    if not _DATE_RE.match(value):
        msg = f"invalid date format: {value!r} (expected YYYY-MM-DD)"
        raise ValueError(msg)
    return datetime.strptime(value, DATE_FORMAT).date()


def format_date(value: date) -> str:
    # Four-digit year even below 1000.
    return value.isoformat()


def calculate_age(dob: date, today: date) -> int:
    """Years between *dob* and *today*, compared by day-of-year.

    The birthday counts as passed unless today's day-of-year is strictly
    lower than the birth date's day-of-year. Across a leap-year boundary
    this can differ by one from a (month, day) comparison.

    Examples:
        >>> calculate_age(date(1990, 5, 10), date(2024, 5, 10))
        34
        >>> calculate_age(date(1990, 5, 10), date(2023, 5, 10))
        33
    """
    age = today.year - dob.year
    if today.timetuple().tm_yday < dob.timetuple().tm_yday:
        age -= 1
    return age


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationResult:
    """Result of a request validation check."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    date_of_birth: date | None = None


# ---------------------------------------------------------------------------
# Records and payloads
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UserRecord:
    """A row from the ``users`` table, with the date already formatted."""

    id: int
    name: str
    date_of_birth: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserRequest(BaseModel):
    """Create/update payload. Field rules are enforced by :meth:`validate_fields`."""

    name: str
    date_of_birth: str

    def validate_fields(self) -> ValidationResult:
        """Check name length and parse the date of birth."""
        errors: list[str] = []
        if not NAME_MIN_LENGTH <= len(self.name) <= NAME_MAX_LENGTH:
            errors.append(
                f"name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
            )

        dob: date | None = None
        try:
            dob = parse_date(self.date_of_birth)
        except ValueError:
            errors.append("invalid date format")

        return ValidationResult(valid=not errors, errors=errors, date_of_birth=dob)


class UserResponse(BaseModel):
    """Outbound user representation. ``age`` is only set on reads."""

    id: int
    name: str
    date_of_birth: str
    age: int | None = None

    @classmethod
    def from_record(cls, record: UserRecord, *, today: date) -> UserResponse:
        """Build a read response with ``age`` derived from the stored date."""
        dob = parse_date(record.date_of_birth)
        return cls(
            id=record.id,
            name=record.name,
            date_of_birth=record.date_of_birth,
            age=calculate_age(dob, today),
        )

    def to_data(self) -> dict[str, object]:
        """Serialize, omitting ``age`` when it was not derived."""
        return self.model_dump(exclude_none=True)


class UserListResponse(BaseModel):
    """One page of users plus the totals needed to navigate."""

    users: list[UserResponse] = Field(default_factory=list)
    page: int
    page_size: int
    total: int
    total_pages: int

    def to_data(self) -> dict[str, object]:
        return self.model_dump(exclude_none=True)
