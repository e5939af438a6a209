from __future__ import annotations

"""A single credit card account.

The account keeps a ledger of charges and payments and answers what the
outstanding balance is on any day after it opened. Interest accrues daily at
``apr / 365`` and is billed at the close of every 30-day cycle.

New transactions are validated before they are kept: a charge that would
take the balance over the credit limit, or a payment that would take it
below zero, is rolled back and reported as ``False``. Back-dated entries are
treated as corrections to the history and are recorded through
:meth:`CreditCardAccount.apply_correction`.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from cycles import DAYS_PER_CYCLE, cycle_of
from interest import accrue_cycle, daily_rate, net_change, recompute_range, within_limits
from ledger import Ledger
from time_helper import parse_timestamp
from transaction import CHARGE, PAYMENT, Transaction, create_transaction, to_money

logger = logging.getLogger(__name__)


class CreditCardAccount:
    """Ledger, limits and cached balance of one card.

    Parameters
    ----------
    apr:
        Annual percentage rate as a fraction, ``0 <= apr < 1``.
    credit_limit:
        Highest balance the account may carry. Must be positive.
    start_date:
        When the account opened. Anything :func:`time_helper.parse_timestamp`
        accepts.
    enforce_limits_on_corrections:
        Reject corrections that leave the balance outside ``[0, credit_limit]``
        instead of always recording them.
    """

    def __init__(
        self,
        apr: Decimal | float | str,
        credit_limit: Decimal | float | int | str,
        start_date,
        enforce_limits_on_corrections: bool = False,
    ):
        apr = to_money(apr, "APR")
        if not apr.is_finite() or not Decimal("0") <= apr < Decimal("1"):
            raise ValueError(f"APR must be in [0, 1), got {apr}")
        credit_limit = to_money(credit_limit, "credit limit")
        if not credit_limit.is_finite() or credit_limit <= 0:
            raise ValueError(f"Credit limit must be positive, got {credit_limit}")

        self._apr = apr
        self._credit_limit = credit_limit
        self._start_date = parse_timestamp(start_date)
        self._rate = daily_rate(apr)
        self._ledger = Ledger(self._start_date)
        self._balance = Decimal("0")
        self._balance_as_of: Optional[datetime] = None
        # Balance right after the latest ledger entry: closed cycles with
        # interest, the open cycle with raw amounts only.
        self._tail_balance = Decimal("0")
        self.enforce_limits_on_corrections = enforce_limits_on_corrections

    # ------------------------------------------------------------------
    # Accessors

    @property
    def apr(self) -> Decimal:
        return self._apr

    @property
    def credit_limit(self) -> Decimal:
        return self._credit_limit

    @property
    def start_date(self) -> datetime:
        return self._start_date

    @property
    def transaction_count(self) -> int:
        return len(self._ledger)

    @property
    def cycle_count(self) -> int:
        return self._ledger.cycle_count()

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self._ledger.snapshot()

    def current_balance(self) -> Tuple[Decimal, Optional[datetime]]:
        """Balance on the day of the last accepted transaction, and that transaction's time.

        The time is ``None`` until a transaction has been accepted.
        """
        return self._balance, self._balance_as_of

    # ------------------------------------------------------------------
    # Transactions

    def add_charge(self, amount, day: int) -> bool:
        return self.add_transaction(amount, day, CHARGE)

    def add_payment(self, amount, day: int) -> bool:
        return self.add_transaction(amount, day, PAYMENT)

    def add_transaction(self, amount, day: int, kind: str) -> bool:
        """Record a charge or payment made ``day`` days after opening.

        Returns ``True`` when the transaction was kept. A transaction dated
        before the latest one already on the ledger is recorded as a
        correction.
        """
        transaction = create_transaction(amount, kind, day, self._start_date)
        index = self._ledger.insertion_point(transaction.timestamp)
        if index < len(self._ledger):
            logger.warning(
                "Back-dated %s of %s on day %d recorded as a correction",
                kind,
                transaction.amount,
                day,
            )
            return self._insert_correction(transaction, index)
        return self._append(transaction, day)

    def apply_correction(self, amount, day: int, kind: str) -> bool:
        """Insert a transaction into the history and recompute the balance.

        Corrections are not subject to the credit limit unless the account
        enforces limits on corrections, in which case one that leaves the
        balance out of bounds is rolled back and ``False`` is returned.
        """
        transaction = create_transaction(amount, kind, day, self._start_date)
        index = self._ledger.insertion_point(transaction.timestamp)
        return self._insert_correction(transaction, index)

    def _append(self, transaction: Transaction, day: int) -> bool:
        ledger = self._ledger
        cycle = cycle_of(transaction.timestamp, self._start_date)
        balance = self._tail_balance

        last_cycle = ledger.cycle_count() - 1
        if len(ledger) and cycle > last_cycle:
            # The open cycle closes with this transaction. Back its raw
            # amounts out of the cached balance and run it with interest.
            begin, end = ledger.cycle_range(last_cycle)
            balance -= net_change(ledger, begin, end)
            balance = recompute_range(ledger, self._rate, balance, begin, end, cycle)

        index = ledger.insert(len(ledger), transaction)
        balance = recompute_range(ledger, self._rate, balance, index, len(ledger), cycle)

        if not within_limits(balance, self._credit_limit):
            ledger.remove(index)
            logger.info(
                "Rejected %s of %s on day %d: balance would be %s (limit %s)",
                transaction.kind,
                transaction.amount,
                day,
                balance,
                self._credit_limit,
            )
            return False

        self._tail_balance = balance
        self._balance = balance
        self._balance_as_of = transaction.timestamp
        logger.debug("Accepted %s of %s on day %d, balance %s", transaction.kind, transaction.amount, day, balance)
        return True

    def _insert_correction(self, transaction: Transaction, index: int) -> bool:
        ledger = self._ledger
        ledger.insert(index, transaction)
        balance = self._recompute_all()

        if not within_limits(balance, self._credit_limit):
            if self.enforce_limits_on_corrections:
                ledger.remove(index)
                logger.info(
                    "Rejected correction %s of %s: balance would be %s (limit %s)",
                    transaction.kind,
                    transaction.amount,
                    balance,
                    self._credit_limit,
                )
                return False
            logger.warning(
                "Correction leaves balance %s outside [0, %s]", balance, self._credit_limit
            )

        self._tail_balance = balance
        self._balance = self.balance_on_day(ledger.day_at(index))
        self._balance_as_of = transaction.timestamp
        return True

    def _recompute_all(self) -> Decimal:
        """Balance right after the latest transaction, from an empty account."""
        ledger = self._ledger
        return recompute_range(
            ledger, self._rate, Decimal("0"), 0, len(ledger), ledger.cycle_count() - 1
        )

    # ------------------------------------------------------------------
    # Queries

    def balance_on_day(self, day: int) -> Decimal:
        """Outstanding balance at the end of ``day`` days after opening.

        Interest of a cycle is only included once the cycle has closed, so
        a day inside the cycle of the latest transaction shows no interest
        for that cycle.
        """
        if isinstance(day, bool) or not isinstance(day, int):
            raise ValueError(f"Day must be an integer, got {day!r}")
        if day < 0:
            raise ValueError(f"Day must not be negative, got {day}")

        target_cycle = day // DAYS_PER_CYCLE
        last = self._ledger.last_at_or_before_day(day)
        end = 0 if last is None else last + 1
        return recompute_range(self._ledger, self._rate, Decimal("0"), 0, end, target_cycle)

    def projected_cycle_interest(self) -> Decimal:
        """Interest the open cycle will be billed if nothing else is posted."""
        ledger = self._ledger
        if not len(ledger):
            return Decimal("0")
        begin, end = ledger.cycle_range(ledger.cycle_count() - 1)
        opening = self._tail_balance - net_change(ledger, begin, end)
        return accrue_cycle(ledger, self._rate, opening, begin, end, just_interest=True)
