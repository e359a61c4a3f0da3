"""Account holder models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from bank.models.calendar_date import Date


class Name(BaseModel):
    """A person's first and last name."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    first: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Given name"
    )
    last: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Family name"
    )

    def full_name(self) -> str:
        return f"{self.first} {self.last}"


class Person(BaseModel):
    """
    A bank client.

    Accounts hold a reference to a Person; they never copy or modify it.
    """
    model_config = ConfigDict(frozen=True)

    name: Name
    birth_date: Optional[Date] = Field(
        default=None,
        description="Date of birth if known"
    )

    def full_name(self) -> str:
        return self.name.full_name()
