"""Shared fixtures for the bank test suite."""

from decimal import Decimal

import pytest
import structlog

from bank.config import get_settings
from bank.models import BankAccount, Date, Name, Person


@pytest.fixture(autouse=True)
def reset_logging_and_settings():
    """Keep structlog configuration and cached settings test-local."""
    get_settings.cache_clear()
    yield
    structlog.reset_defaults()
    get_settings.cache_clear()


@pytest.fixture
def owner() -> Person:
    return Person(name=Name(first="Albert", last="Einstein"))


@pytest.fixture
def opened_on() -> Date:
    # A Monday
    return Date(year=2020, month=1, day=6)


@pytest.fixture
def closed_on() -> Date:
    # A Friday
    return Date(year=2023, month=3, day=17)


@pytest.fixture
def account(owner: Person, opened_on: Date) -> BankAccount:
    return BankAccount(
        id="123456",
        opened_on=opened_on,
        owner=owner,
        balance=Decimal("100.00"),
        pin=4321,
    )
