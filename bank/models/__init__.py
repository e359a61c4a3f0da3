"""
Data Models Package

This package contains the account model and its collaborators.
The account depends only on the contracts in bank.models.contracts;
Person and Date are the stock implementations.
"""

from bank.models.account import (
    AccountError,
    AccountErrorKind,
    AccountStatus,
    BankAccount,
    InsufficientFundsError,
    InvalidArgumentError,
    UnauthorizedError,
    WithdrawalResult,
)
from bank.models.calendar_date import Date
from bank.models.contracts import CalendarDate, Owner
from bank.models.person import Name, Person

__all__ = [
    # Account
    "AccountError",
    "AccountErrorKind",
    "AccountStatus",
    "BankAccount",
    "InsufficientFundsError",
    "InvalidArgumentError",
    "UnauthorizedError",
    "WithdrawalResult",
    # Collaborators
    "CalendarDate",
    "Date",
    "Name",
    "Owner",
    "Person",
]
