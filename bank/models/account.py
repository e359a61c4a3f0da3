"""
Bank Account Model

A bank account tied to one owner. It supports two behaviors:
1. PIN-gated withdrawal
2. A human-readable summary of the account

DESIGN DECISION: Withdrawal failures are RETURNED as a WithdrawalResult,
not raised. Callers that prefer exceptions call raise_for_error().

Only the balance ever changes after construction, and only through
withdraw().
"""

from decimal import Decimal, InvalidOperation, localcontext
from enum import Enum
from threading import Lock
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)

from bank.audit.logger import AuditLogger
from bank.models.contracts import CalendarDate, Owner


ACCOUNT_ID_MIN_LENGTH = 6
ACCOUNT_ID_MAX_LENGTH = 7

Amount = Union[Decimal, int, float, str]


# =============================================================================
# ENUMS
# =============================================================================

class AccountStatus(str, Enum):
    """Presentation-only state; there is no open/close transition."""
    OPEN = "open"
    CLOSED = "closed"


class AccountErrorKind(str, Enum):
    """Why an account operation was refused."""
    INVALID_ARGUMENT = "invalid_argument"
    UNAUTHORIZED = "unauthorized"
    INSUFFICIENT_FUNDS = "insufficient_funds"


# =============================================================================
# ERRORS
# =============================================================================

class AccountError(Exception):
    """Base exception for refused account operations."""
    kind: AccountErrorKind


class InvalidArgumentError(AccountError, ValueError):
    """Malformed input, e.g. a negative withdrawal amount."""
    kind = AccountErrorKind.INVALID_ARGUMENT


class UnauthorizedError(AccountError):
    """PIN did not match."""
    kind = AccountErrorKind.UNAUTHORIZED


class InsufficientFundsError(AccountError):
    """Withdrawal exceeds the current balance."""
    kind = AccountErrorKind.INSUFFICIENT_FUNDS


_ERRORS_BY_KIND: dict[AccountErrorKind, type[AccountError]] = {
    AccountErrorKind.INVALID_ARGUMENT: InvalidArgumentError,
    AccountErrorKind.UNAUTHORIZED: UnauthorizedError,
    AccountErrorKind.INSUFFICIENT_FUNDS: InsufficientFundsError,
}


# =============================================================================
# RESULTS
# =============================================================================

class WithdrawalResult(BaseModel):
    """
    Outcome of a withdrawal attempt.

    On failure the balance is exactly what it was before the attempt.
    """
    model_config = ConfigDict(frozen=True)

    success: bool
    error_kind: Optional[AccountErrorKind] = None
    error_message: Optional[str] = None

    amount: Optional[Decimal] = Field(
        default=None,
        description="Requested amount, if it could be read as a number"
    )
    balance: Decimal = Field(
        ...,
        description="Balance after the attempt"
    )

    @classmethod
    def ok(cls, amount: Decimal, balance: Decimal) -> 'WithdrawalResult':
        return cls(success=True, amount=amount, balance=balance)

    @classmethod
    def failed(
        cls,
        kind: AccountErrorKind,
        message: str,
        balance: Decimal,
        amount: Optional[Decimal] = None,
    ) -> 'WithdrawalResult':
        return cls(
            success=False,
            error_kind=kind,
            error_message=message,
            amount=amount,
            balance=balance,
        )

    def raise_for_error(self) -> None:
        """Raise the matching AccountError if the withdrawal failed."""
        if self.success:
            return
        raise _ERRORS_BY_KIND[self.error_kind](self.error_message)


# =============================================================================
# ACCOUNT
# =============================================================================

class BankAccount(BaseModel):
    """
    A bank account held by one owner.

    Owner and dates are shared references: the account stores the objects
    it was given and never copies or modifies them.

    Usage:
        account = BankAccount(
            id="123456",
            opened_on=Date(year=2020, month=1, day=6),
            owner=person,
            balance=Decimal("100.00"),
            pin=4321,
        )
        result = account.withdraw(30, pin=4321)
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
    )

    id: str = Field(
        ...,
        frozen=True,
        description="Account number (6 or 7 characters)"
    )
    opened_on: CalendarDate = Field(
        ...,
        frozen=True,
        description="Date the account was opened"
    )
    closed_on: Optional[CalendarDate] = Field(
        default=None,
        frozen=True,
        description="Date the account was closed; None while open"
    )
    owner: Owner = Field(
        ...,
        frozen=True,
        description="Client who owns the account"
    )
    balance: Decimal = Field(
        ...,
        description="Balance in USD; changed only by withdraw()"
    )
    pin: int = Field(
        ...,
        frozen=True,
        repr=False,
        exclude=True,
        description="Withdrawal PIN"
    )

    _lock: Lock = PrivateAttr(default_factory=Lock)
    _audit: AuditLogger = PrivateAttr(default_factory=AuditLogger)

    @field_validator('id', mode='before')
    @classmethod
    def validate_id(cls, v: Any) -> Any:
        """Account number must be present and 6 or 7 characters long."""
        if (
            v is None
            or not isinstance(v, str)
            or not ACCOUNT_ID_MIN_LENGTH <= len(v) <= ACCOUNT_ID_MAX_LENGTH
        ):
            raise ValueError(
                f"Account number must be {ACCOUNT_ID_MIN_LENGTH} "
                f"or {ACCOUNT_ID_MAX_LENGTH} characters"
            )
        return v

    @model_validator(mode='after')
    def validate_dates(self) -> 'BankAccount':
        """An account cannot close before it opened."""
        if self.closed_on is not None:
            if self.closed_on.to_date() < self.opened_on.to_date():
                raise ValueError("Account cannot be closed before it was opened")
        return self

    def __init__(self, **data: Any) -> None:
        # All validators have passed once super().__init__ returns
        super().__init__(**data)
        self._audit.log_account_opened(
            account_id=self.id,
            owner_name=self.owner.full_name(),
            opened_on=str(self.opened_on),
            closed_on=str(self.closed_on) if self.closed_on is not None else None,
        )

    def __deepcopy__(self, memo: Optional[dict[int, Any]] = None) -> 'BankAccount':
        memo = {} if memo is None else memo
        # Copies get their own lock and share the audit logger
        memo[id(self._lock)] = Lock()
        memo[id(self._audit)] = self._audit
        return super().__deepcopy__(memo)

    @property
    def status(self) -> AccountStatus:
        return AccountStatus.OPEN if self.closed_on is None else AccountStatus.CLOSED

    @property
    def is_open(self) -> bool:
        return self.closed_on is None

    def withdraw(self, amount: Amount, pin: int) -> WithdrawalResult:
        """
        Withdraw an amount if the PIN matches.

        Checks run in a fixed order: PIN, funds, then sign. A zero amount
        passes both amount checks and leaves the balance unchanged.

        Args:
            amount: Amount in USD
            pin: PIN attempt

        Returns:
            WithdrawalResult describing the outcome
        """
        with self._lock:
            result = self._withdraw_locked(amount, pin)

        if result.success:
            self._audit.log_withdrawal_completed(
                account_id=self.id,
                amount=result.amount,
                balance=result.balance,
            )
        else:
            self._audit.log_withdrawal_rejected(
                account_id=self.id,
                error_code=result.error_kind.value,
                error_message=result.error_message,
                balance=result.balance,
                amount=result.amount,
            )
        return result

    def _withdraw_locked(self, amount: Amount, pin: int) -> WithdrawalResult:
        if pin != self.pin:
            return WithdrawalResult.failed(
                AccountErrorKind.UNAUTHORIZED,
                "Invalid PIN",
                balance=self.balance,
            )

        value = _to_decimal(amount)
        if value is None:
            return WithdrawalResult.failed(
                AccountErrorKind.INVALID_ARGUMENT,
                f"Amount must be a finite number, got {amount!r}",
                balance=self.balance,
            )

        if value > self.balance:
            return WithdrawalResult.failed(
                AccountErrorKind.INSUFFICIENT_FUNDS,
                "Insufficient funds for withdrawal",
                balance=self.balance,
                amount=value,
            )

        if value < 0:
            return WithdrawalResult.failed(
                AccountErrorKind.INVALID_ARGUMENT,
                "Amount cannot be negative",
                balance=self.balance,
                amount=value,
            )

        self.balance = _exact_difference(self.balance, value)
        return WithdrawalResult.ok(amount=value, balance=self.balance)

    def describe(self) -> str:
        """
        Get a one-sentence summary of the account.

        Example:
            "Jane Doe had $100.00 USD in account #123456 which he opened on
            Monday 2020-01-06 and is still open."
        """
        details = (
            f"{self.owner.full_name()} had ${self.balance} USD "
            f"in account #{self.id} "
            f"which he opened on {self.opened_on.day_of_week()} {self.opened_on}"
        )

        if self.closed_on is not None:
            details += f" and closed {self.closed_on.day_of_week()} {self.closed_on}."
        else:
            details += " and is still open."

        return details

    def __str__(self) -> str:
        return self.describe()


def _to_decimal(amount: Amount) -> Optional[Decimal]:
    """Read an amount as a finite Decimal, or None if it is not one."""
    if isinstance(amount, bool):
        return None
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        return None
    return value if value.is_finite() else None


def _exact_difference(minuend: Decimal, subtrahend: Decimal) -> Decimal:
    """Subtract without rounding, whatever the size of the operands."""
    exponent = min(minuend.as_tuple().exponent, subtrahend.as_tuple().exponent, 0)
    integer_digits = max(minuend.adjusted(), subtrahend.adjusted(), 0) + 2
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, integer_digits - exponent)
        return minuend - subtrahend
