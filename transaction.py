from __future__ import annotations

"""Charges and payments posted to a credit card account."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation

from time_helper import add_days, to_utc

CHARGE = "charge"
PAYMENT = "payment"
KINDS = (CHARGE, PAYMENT)


def to_money(value: Decimal | float | int | str, name: str = "amount") -> Decimal:
    """Convert ``value`` to ``Decimal`` the way the rest of the project does."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Invalid {name}: {value!r}") from exc


@dataclass(frozen=True)
class Transaction:
    """A single charge or payment. ``amount`` is always positive."""

    amount: Decimal
    kind: str  # "charge" or "payment"
    timestamp: datetime

    @property
    def signed_amount(self) -> Decimal:
        """Effect on the balance: charges add, payments subtract."""
        if self.kind == CHARGE:
            return self.amount
        return -self.amount


def create_transaction(
    amount: Decimal | float | int | str,
    kind: str,
    days_since_start: int,
    account_start: datetime,
) -> Transaction:
    """Build a transaction dated ``days_since_start`` days after ``account_start``.

    The time of day of ``account_start`` is kept so the transaction is never
    dated before the account opened.
    """

    if kind not in KINDS:
        raise ValueError(f"Unknown transaction kind: {kind!r}")
    if isinstance(days_since_start, bool) or not isinstance(days_since_start, int):
        raise ValueError(f"Day must be an integer, got {days_since_start!r}")
    if days_since_start < 0:
        raise ValueError(f"Day must not be negative, got {days_since_start}")
    value = to_money(amount)
    if not value.is_finite() or value <= 0:
        raise ValueError(f"Amount must be positive, got {amount!r}")
    try:
        timestamp = add_days(to_utc(account_start), days_since_start)
    except OverflowError:
        raise ValueError(f"Day {days_since_start} is past the last representable date") from None
    return Transaction(amount=value, kind=kind, timestamp=timestamp)
