from __future__ import annotations

"""Billing cycle arithmetic.

Cycles are 30 days long and cycle 0 starts on the day the account opens.
Interest is billed at the close of each cycle; the opening day is day 0 of
cycle 0, so day 30 is day 0 of cycle 1.
"""

from datetime import datetime

from time_helper import day_difference

DAYS_PER_CYCLE = 30


def day_of(t: datetime, start: datetime) -> int:
    """Days between the account opening and ``t``."""
    return day_difference(t, start)


def cycle_of(t: datetime, start: datetime) -> int:
    return day_of(t, start) // DAYS_PER_CYCLE


def day_in_cycle(t: datetime, start: datetime) -> int:
    """Day within the cycle (0-29) that ``t`` falls on."""
    return day_of(t, start) % DAYS_PER_CYCLE
