"""
Collaborator Contracts

An account only needs a name from its owner and a weekday and display
string from its dates. These protocols describe exactly that, so any
object providing them can be attached to an account.
"""

from datetime import date
from typing import Protocol, runtime_checkable


@runtime_checkable
class Owner(Protocol):
    """Party holding an account."""

    def full_name(self) -> str:
        ...


@runtime_checkable
class CalendarDate(Protocol):
    """
    Date value attached to an account.

    str() must return the display form of the date. day_of_week() and
    str() are all an account displays; to_date() is only used to check
    that a close date does not precede the open date.
    """

    def day_of_week(self) -> str:
        ...

    def to_date(self) -> date:
        ...
