import os
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(Path(__file__).resolve().parent, "..")))

from account import CreditCardAccount
from time_helper import UTC, add_days
from transaction import CHARGE

START = datetime(2012, 2, 27, tzinfo=UTC)


def _account():
    return CreditCardAccount(0.35, 1000.0, START)


def _assert_unchanged(account, balance, day, count):
    current, as_of = account.current_balance()
    assert current == balance
    assert as_of == add_days(START, day)
    assert account.transaction_count == count


def test_rejected_transactions_leave_state_untouched():
    account = _account()
    assert account.add_charge(500.0, 0)

    # Payment that would put the balance at -100
    assert not account.add_payment(600, 0)
    _assert_unchanged(account, Decimal("500"), 0, 1)

    assert not account.add_payment(1600, 20)
    _assert_unchanged(account, Decimal("500"), 0, 1)

    # Charges over the credit limit
    assert not account.add_charge(600, 1)
    _assert_unchanged(account, Decimal("500"), 0, 1)

    assert not account.add_charge(700, 0)
    _assert_unchanged(account, Decimal("500"), 0, 1)


def test_interest_from_closing_cycle_counts_against_limit():
    account = _account()
    account.add_charge(500.0, 0)
    assert account.add_charge(460, 8)
    # 960 plus 24.09 of interest billed on day 30 leaves no room for 40.
    assert not account.add_charge(40, 31)
    _assert_unchanged(account, Decimal("960"), 8, 2)
    assert account.add_charge(15, 31)


def test_charge_up_to_limit_is_accepted():
    account = _account()
    assert account.add_charge(1000, 3)
    assert account.current_balance()[0] == Decimal("1000")
    assert not account.add_charge("0.01", 3)


def test_rejection_of_new_cycle_keeps_open_cycle():
    account = _account()
    account.add_charge(990, 0)
    assert not account.add_charge(10, 45)
    assert account.cycle_count == 1
    assert account.balance_on_day(29) == Decimal("990")
    # The cached balance still works as the base for the next append.
    assert account.add_payment(100, 29)
    assert account.current_balance()[0] == Decimal("890")


@pytest.mark.parametrize(
    "apr, limit",
    [(1, 1000), (-0.1, 1000), (0.35, 0), (0.35, -5), ("abc", 1000), ("nan", 1000)],
)
def test_bad_account_terms(apr, limit):
    with pytest.raises(ValueError):
        CreditCardAccount(apr, limit, START)


def test_bad_transaction_arguments():
    account = _account()
    with pytest.raises(ValueError):
        account.add_charge(0, 1)
    with pytest.raises(ValueError):
        account.add_charge(-5, 1)
    with pytest.raises(ValueError):
        account.add_payment("ten", 1)
    with pytest.raises(ValueError):
        account.add_charge(5, -1)
    with pytest.raises(ValueError):
        account.add_charge(5, 1.5)
    with pytest.raises(ValueError):
        account.add_transaction(5, 1, "refund")
    with pytest.raises(ValueError):
        account.balance_on_day(-1)
    assert account.transaction_count == 0


def test_day_past_the_last_calendar_date():
    account = _account()
    account.add_charge(100, 0)
    with pytest.raises(ValueError, match="last representable date"):
        account.add_charge(5, 3000000)
    with pytest.raises(ValueError, match="last representable date"):
        account.apply_correction(5, 3000000, CHARGE)
    _assert_unchanged(account, Decimal("100"), 0, 1)
