from __future__ import annotations

"""Time ordered store of an account's transactions.

The ledger owns its transactions in a single list sorted by timestamp.
Callers address transactions by index and receive half-open ``[begin, end)``
index ranges, in the same way slicing a list works.
"""

from datetime import datetime
from typing import Callable, Iterator, List, Optional, Tuple

from cycles import cycle_of, day_in_cycle, day_of
from transaction import Transaction


class Ledger:
    def __init__(self, start_date: datetime):
        self.start_date = start_date
        self._transactions: List[Transaction] = []

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions)

    def __getitem__(self, index: int) -> Transaction:
        return self._transactions[index]

    # ------------------------------------------------------------------
    # Per-transaction cycle helpers

    def cycle_at(self, index: int) -> int:
        return cycle_of(self._transactions[index].timestamp, self.start_date)

    def day_at(self, index: int) -> int:
        return day_of(self._transactions[index].timestamp, self.start_date)

    def day_in_cycle_at(self, index: int) -> int:
        return day_in_cycle(self._transactions[index].timestamp, self.start_date)

    def cycle_count(self) -> int:
        """Cycle of the most recent transaction plus one; 0 when empty."""
        if not self._transactions:
            return 0
        return self.cycle_at(len(self._transactions) - 1) + 1

    # ------------------------------------------------------------------
    # Searching

    def _find(self, predicate: Callable[[int], bool], begin: int = 0) -> int:
        """Index of the first transaction at or after ``begin`` matching ``predicate``.

        Returns ``len(self)`` when nothing matches.
        """
        for index in range(begin, len(self._transactions)):
            if predicate(index):
                return index
        return len(self._transactions)

    def find_cycle_start(self, cycle: int, begin: int = 0) -> int:
        """First transaction whose cycle is ``cycle`` or later.

        The search starts at ``begin``, which must not lie past the answer.
        """
        if cycle >= self.cycle_count():
            return len(self._transactions)
        return self._find(lambda i: self.cycle_at(i) >= cycle, begin)

    def cycle_range(self, cycle: int, begin: int = 0) -> Tuple[int, int]:
        """``[begin, end)`` indexes of the transactions posted in ``cycle``.

        An empty cycle yields an empty range positioned where its
        transactions would be. ``begin`` is a search hint, as for
        :meth:`find_cycle_start`.
        """
        begin = self.find_cycle_start(cycle, begin)
        if begin == len(self._transactions) or self.cycle_at(begin) != cycle:
            return begin, begin
        end = self.find_cycle_start(cycle + 1, begin)
        # Walk back from the next cycle's start to the last one in this cycle.
        while end > begin and self.cycle_at(end - 1) != cycle:
            end -= 1
        return begin, end

    def last_at_or_before_day(self, day: int) -> Optional[int]:
        """Index of the most recent transaction on or before ``day``, or None."""
        if not self._transactions or self.day_at(0) > day:
            return None
        return self._find(lambda i: self.day_at(i) > day) - 1

    # ------------------------------------------------------------------
    # Insertion

    def insertion_point(self, timestamp: datetime) -> int:
        """Index a transaction dated ``timestamp`` would be inserted at.

        Transactions sharing a timestamp keep their insertion order: the new
        one goes after the existing ones.
        """
        if not self._transactions or self._transactions[-1].timestamp <= timestamp:
            return len(self._transactions)
        return self._find(lambda i: self._transactions[i].timestamp > timestamp)

    def insert(self, index: int, transaction: Transaction) -> int:
        self._transactions.insert(index, transaction)
        return index

    def insert_sorted(self, transaction: Transaction) -> int:
        """Insert ``transaction`` keeping timestamp order and return its index."""
        return self.insert(self.insertion_point(transaction.timestamp), transaction)

    def remove(self, index: int) -> Transaction:
        return self._transactions.pop(index)

    def snapshot(self) -> Tuple[Transaction, ...]:
        return tuple(self._transactions)
