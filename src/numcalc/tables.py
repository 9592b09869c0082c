# -----------------------------------------------------------------------------
#  tables.py
#  Memoized triangular recurrence tables: set partitions and integer partitions
# -----------------------------------------------------------------------------

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from time import perf_counter

from numcalc.errors import DomainError, LimitExceeded
from numcalc.runtime import current as _rt_current


class CombinatorialTable(ABC):
    """
    Append-only triangle T(n, k), 1 <= k <= n, with the row sums kept alongside.

    ``_rows[n-1][k-1]`` holds T(n, k) and ``_row_sums[n-1]`` the total of row n.
    Rows are built once, in order, the first time anything at or below them
    is asked for. Either operand being 0 gives 1 (so T(n, 0) = 1 for n > 0);
    callers rely on that convention.
    """

    name = "table"

    def __init__(self, max_row: int):
        self.max_row = max_row
        self._rows: list[list[int]] = [[1]]
        self._row_sums: list[int] = [1]

    def __len__(self) -> int:
        return len(self._rows)

    @abstractmethod
    def _cell(self, i: int, j: int) -> int:
        """Interior value at 0-based row i, column j (0 < j < i)."""

    def _check(self, n: int) -> None:
        if n > self.max_row:
            raise LimitExceeded(self.name, self.max_row, n)

    def _extend(self, n: int) -> None:
        built = len(self._rows)
        if n <= built:
            return
        t0 = perf_counter()
        for i in range(built, n):
            row = [1]
            total = 2
            self._rows.append(row)
            for j in range(1, i):
                cur = self._cell(i, j)
                row.append(cur)
                total += cur
            row.append(1)
            self._row_sums.append(total)
        if _rt_current().debug:
            print(
                f"[table] {self.name}: rows {built + 1}..{n} in {(perf_counter() - t0) * 1000:.1f} ms",
                file=sys.stderr,
            )

    def value(self, n: int, k: int) -> int:
        self._check(n)
        if n < 0 or k < 0 or k > n:
            return 0
        if n == 0 or k == 0:
            return 1
        self._extend(n)
        return self._rows[n - 1][k - 1]

    def total(self, n: int) -> int:
        self._check(n)
        if n < 0:
            raise DomainError(f"{self.name} is undefined for negative n")
        if n == 0:
            return 1
        self._extend(n)
        return self._row_sums[n - 1]


class SetPartitionTable(CombinatorialTable):
    """Stirling numbers of the second kind S(n, k); row sums are the Bell numbers."""

    name = "set partition"

    def _cell(self, i: int, j: int) -> int:
        # S(n, k) = k·S(n-1, k) + S(n-1, k-1)
        prev = self._rows[i - 1]
        return (j + 1) * prev[j] + prev[j - 1]


class IntPartitionTable(CombinatorialTable):
    """Partitions of n into exactly k parts; row sums are p(n)."""

    name = "integer partition"

    def _cell(self, i: int, j: int) -> int:
        # P(n, k) = P(n-1, k-1) + P(n-k, k), the second term vanishing when k > n-k
        cur = self._rows[i - 1][j - 1]
        if 2 * j < i:
            cur += self._rows[i - j - 1][j]
        return cur
