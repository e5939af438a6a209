from __future__ import annotations

"""Interest and balance calculation for a credit card ledger.

Interest is computed daily on the balance at the close of each day but is
only added to the balance when a 30-day cycle closes, so it compounds once
per cycle. A cycle with no transactions earns ``balance * rate * 30``.

The functions here work on index ranges of a :class:`ledger.Ledger`. The
balance returned for a cycle that is still open (the cycle being asked about
and with nothing after it) carries the raw effect of its transactions and no
interest: interest for a cycle is only realized when the cycle closes.
"""

import logging
from decimal import Decimal

from cycles import DAYS_PER_CYCLE
from ledger import Ledger

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = Decimal("365")
LIMIT_TOLERANCE = Decimal("0.000001")


def daily_rate(apr: Decimal) -> Decimal:
    return apr / DAYS_PER_YEAR


def end_day_interest(balance: Decimal, rate: Decimal) -> Decimal:
    """Interest for one day closing at ``balance``."""
    return balance * rate


def flat_cycle_interest(balance: Decimal, rate: Decimal) -> Decimal:
    """Interest for a whole cycle without transactions."""
    return end_day_interest(balance, rate) * DAYS_PER_CYCLE


def within_limits(balance: Decimal, credit_limit: Decimal) -> bool:
    return balance >= 0 and balance - credit_limit <= LIMIT_TOLERANCE


def net_change(ledger: Ledger, start: int, end: int) -> Decimal:
    """Sum of the signed amounts of ``ledger[start:end]``."""
    return sum((ledger[i].signed_amount for i in range(start, end)), Decimal("0"))


# ---------------------------------------------------------------------------
# Cycle accrual


def accrue_cycle(
    ledger: Ledger,
    rate: Decimal,
    balance: Decimal,
    start: int,
    end: int,
    just_interest: bool = False,
) -> Decimal:
    """Return the balance at the close of the cycle holding ``ledger[start:end]``.

    Parameters
    ----------
    ledger:
        Ledger holding the transactions.
    rate:
        Daily interest rate (``apr / 365``).
    balance:
        Balance when the cycle opens.
    start, end:
        Index range of the cycle's transactions. All of them must belong to
        the same cycle.
    just_interest:
        Return only the interest billed for the cycle instead of the
        closing balance.

    Interest for the days between two transactions is charged on the
    balance at the start of that gap. The interest is accumulated apart
    from the balance and added once, at the close of the cycle.
    """

    interest = Decimal("0")
    previous_day = 0
    for index in range(start, end):
        day = ledger.day_in_cycle_at(index)
        interest += end_day_interest(balance, rate) * (day - previous_day)
        previous_day = day
        balance += ledger[index].signed_amount

    interest += end_day_interest(balance, rate) * (DAYS_PER_CYCLE - previous_day)

    if just_interest:
        return interest
    return balance + interest


# ---------------------------------------------------------------------------
# Range recomputation


def recompute_range(
    ledger: Ledger,
    rate: Decimal,
    balance: Decimal,
    start: int,
    end: int,
    target_cycle: int,
) -> Decimal:
    """Apply ``ledger[start:end]`` to ``balance`` and bring it to ``target_cycle``.

    Walks the range one cycle at a time. Cycles skipped between two
    transactions earn flat interest, one cycle at a time so that they
    compound. A cycle is closed, and runs through :func:`accrue_cycle`, when
    later transactions follow it in the range or when ``target_cycle`` lies
    beyond it. The last group of transactions in ``target_cycle`` belongs to
    a cycle that is still open and only contributes its raw amounts. Whole
    cycles left between the last transaction and ``target_cycle`` earn flat
    interest as well.
    """

    end = min(end, len(ledger))
    # First cycle whose interest has not been applied to ``balance`` yet.
    pending = ledger.cycle_at(start) if start < end else target_cycle

    index = start
    while index < end:
        cycle = ledger.cycle_at(index)

        while pending < cycle:
            balance += flat_cycle_interest(balance, rate)
            pending += 1

        cycle_end = min(ledger.cycle_range(cycle, index)[1], end)
        if cycle_end < end or cycle < target_cycle:
            balance = accrue_cycle(ledger, rate, balance, index, cycle_end)
            pending = cycle + 1
            logger.debug("Cycle %d closed at %s", cycle, balance)
        else:
            balance += net_change(ledger, index, cycle_end)
            pending = cycle
        index = cycle_end

    while pending < target_cycle:
        balance += flat_cycle_interest(balance, rate)
        pending += 1

    return balance
