"""Calendar date value used for account open/close dates."""

from datetime import date
from functools import total_ordering

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Indexed by date.weekday(); fixed so output never depends on the locale
DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


@total_ordering
class Date(BaseModel):
    """
    An immutable calendar date.

    Displays as YYYY-MM-DD and knows its day of the week.
    """
    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)

    @model_validator(mode='after')
    def validate_calendar_day(self) -> 'Date':
        """Reject days that do not exist in the given month (e.g. Feb 30)."""
        try:
            date(self.year, self.month, self.day)
        except ValueError as e:
            raise ValueError(
                f"{self.year:04d}-{self.month:02d}-{self.day:02d} is not a valid date"
            ) from e
        return self

    @classmethod
    def from_date(cls, value: date) -> 'Date':
        return cls(year=value.year, month=value.month, day=value.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def day_of_week(self) -> str:
        """Get the English name of the weekday, e.g. 'Monday'."""
        return DAY_NAMES[self.to_date().weekday()]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self.to_date() < other.to_date()

    def __str__(self) -> str:
        return self.to_date().isoformat()
