# -----------------------------------------------------------------------------
#  primes.py
#  Prime cache, Sieve of Atkin and the deterministic primality oracle
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
import sys
from bisect import bisect_left, bisect_right
from collections.abc import Iterator
from enum import Enum
from math import isqrt
from time import perf_counter

import gmpy2

from numcalc.limits import DEFAULT_LIMITS, OperationLimits
from numcalc.runtime import current as _rt_current


class Primality(Enum):
    PRIME = "Prime"
    COMPOSITE = "Composite"
    INDETERMINATE = "Indeterminate"

    def __str__(self) -> str:
        return self.value


# Every odd composite below the left-hand bound is exposed by at least one
# of the witnesses on that line. Only change this for proven results.
WITNESS_DATA = """
# bound                       witnesses
2047                          2
1373653                       2 3
9080191                       31 73
25326001                      2 3 5
3215031751                    2 3 5 7
4759123141                    2 7 61
1122004669633                 2 13 23 1662803
2152302898747                 2 3 5 7 11
3474749660383                 2 3 5 7 11 13
341550071728321               2 3 5 7 11 13 17
3825123056546413051           2 3 5 7 11 13 17 19 23
318665857834031151167461      2 3 5 7 11 13 17 19 23 29 31 37
999999999999999999999999      2 3 5 7 11 13 17 19 23 29 31 37 41
"""

# n mod 60 classes flipped by each quadratic form of the Sieve of Atkin
_FORM_4X2_PLUS_Y2 = frozenset({1, 13, 17, 29, 37, 41, 49, 53})
_FORM_3X2_PLUS_Y2 = frozenset({7, 19, 31, 43})
_FORM_3X2_MINUS_Y2 = frozenset({11, 23, 47, 59})

# bound plus at least one witness
_MIN_COLS = 2


class WitnessTable:
    """Ordered map: exclusive upper bound -> Miller-Rabin witness bases."""

    def __init__(self, text: str = WITNESS_DATA):
        rows: dict[int, tuple[int, ...]] = {}
        for raw in text.splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            parts = re.split(r"\s+", line)
            if len(parts) < _MIN_COLS:
                continue
            rows[int(parts[0])] = tuple(int(p) for p in parts[1:])
        if not rows:
            raise ValueError("witness table is empty")
        self._bounds = sorted(rows)
        self._witnesses = [rows[b] for b in self._bounds]

    @property
    def largest_bound(self) -> int:
        return self._bounds[-1]

    def witnesses_for(self, n: int) -> tuple[int, ...] | None:
        """Witnesses of the smallest bound strictly greater than n, or None past the table."""
        i = bisect_right(self._bounds, n)
        if i == len(self._bounds):
            return None
        return self._witnesses[i]

    def __iter__(self) -> Iterator[tuple[int, tuple[int, ...]]]:
        return iter(zip(self._bounds, self._witnesses))

    def __len__(self) -> int:
        return len(self._bounds)


def sieve_of_atkin(limit: int) -> bytearray:
    """
    Return a flag array over [0, limit] in which primes >= 7 are set.

    2, 3 and 5 are never flagged; callers seed them separately.
    """
    sieve = bytearray(limit + 1)
    if limit < 7:
        return sieve
    root = isqrt(limit)

    # 4x^2 + y^2, y odd
    for x in range(1, root + 1):
        xx4 = 4 * x * x
        if xx4 + 1 > limit:
            break
        for y in range(1, root + 1, 2):
            n = xx4 + y * y
            if n > limit:
                break
            if n % 60 in _FORM_4X2_PLUS_Y2:
                sieve[n] ^= 1

    # 3x^2 + y^2, x odd, y even
    for x in range(1, root + 1, 2):
        xx3 = 3 * x * x
        if xx3 + 4 > limit:
            break
        for y in range(2, root + 1, 2):
            n = xx3 + y * y
            if n > limit:
                break
            if n % 60 in _FORM_3X2_PLUS_Y2:
                sieve[n] ^= 1

    # 3x^2 - y^2, x > y, opposite parity; n grows as y shrinks
    for x in range(2, root + 1):
        xx3 = 3 * x * x
        if 2 * x * x + 2 * x - 1 > limit:
            break
        for y in range(x - 1, 0, -2):
            n = xx3 - y * y
            if n > limit:
                break
            if n % 60 in _FORM_3X2_MINUS_Y2:
                sieve[n] ^= 1

    # Remaining false positives are divisible by the square of a prime
    for r in range(7, root + 1):
        if sieve[r]:
            sq = r * r
            sieve[sq::sq] = bytes(len(range(sq, limit + 1, sq)))

    return sieve


class PrimeCache:
    """
    Ascending primes plus a frontier: every prime <= frontier is present.

    Only extend() mutates it, and it only ever grows.
    """

    def __init__(self) -> None:
        self._primes: list[int] = [2, 3, 5]
        self.frontier = 5

    def __contains__(self, n: object) -> bool:
        if not isinstance(n, int):
            return False
        i = bisect_left(self._primes, n)
        return i < len(self._primes) and self._primes[i] == n

    def __iter__(self) -> Iterator[int]:
        return iter(self._primes)

    def __len__(self) -> int:
        return len(self._primes)

    @property
    def largest(self) -> int:
        return self._primes[-1]

    def count_upto(self, n: int) -> int:
        return bisect_right(self._primes, n)

    def upto(self, n: int) -> list[int]:
        return self._primes[: self.count_upto(n)]

    def extend(self, limit: int) -> int:
        """
        Make the cache complete up to limit and return the number of primes <= limit.

        Below the frontier this is a lookup; above it the Sieve of Atkin runs
        over [0, limit] and only primes past the old frontier are appended.
        """
        if limit <= self.frontier:
            return self.count_upto(limit)

        debug = _rt_current().debug
        t0 = perf_counter()
        sieve = sieve_of_atkin(limit)
        start = self.frontier + 1
        before = len(self._primes)
        self._primes.extend(n for n in range(max(start, 7), limit + 1) if sieve[n])
        self.frontier = limit

        if debug:
            print(
                f"[sieve] {start}..{limit}: +{len(self._primes) - before} primes "
                f"in {(perf_counter() - t0) * 1000:.1f} ms (cache {len(self._primes)})",
                file=sys.stderr,
            )
        return len(self._primes)


def miller_rabin(n: int, witnesses: tuple[int, ...]) -> bool:
    """Strong-probable-prime test of odd n > 2 against each witness base."""
    n_minus_1 = n - 1
    r = gmpy2.bit_scan1(n_minus_1)
    d = n_minus_1 >> r
    for a in witnesses:
        if a % n == 0:
            continue
        x = gmpy2.powmod(a, d, n)
        if x == 1 or x == n_minus_1:
            continue
        for _ in range(r - 1):
            x = gmpy2.powmod(x, 2, n)
            if x == n_minus_1:
                break
            if x == 1:
                return False
        else:
            return False
    return True


def lucas_lehmer(n: int, cache: PrimeCache, table: WitnessTable,
                 limits: OperationLimits = DEFAULT_LIMITS) -> Primality:
    """Decide 2^p - 1; composite exponents give composite numbers."""
    p = n.bit_length()
    if p == 2:
        return Primality.PRIME
    if is_prime(p, cache, table, limits) is not Primality.PRIME:
        return Primality.COMPOSITE
    m = gmpy2.mpz(n)
    s = gmpy2.mpz(4)
    for _ in range(p - 2):
        s = (s * s - 2) % m
    return Primality.PRIME if s == 0 else Primality.COMPOSITE


def is_prime(x: int, cache: PrimeCache, table: WitnessTable,
             limits: OperationLimits = DEFAULT_LIMITS) -> Primality:
    """
    Deterministic primality of |x|.

    Order of checks:
      1. 2 is prime; 0, 1 and even numbers are composite.
      2. 2^p - 1 goes to Lucas-Lehmer (indeterminate past the Mersenne limit).
      3. Past the witness table the answer is indeterminate.
      4. Cached primes answer directly.
      5. Miller-Rabin with the witnesses for the smallest bound above x.
    """
    x = abs(x)
    if x == 2:
        return Primality.PRIME
    if x < 2 or x % 2 == 0:
        return Primality.COMPOSITE

    debug = _rt_current().debug

    if x.bit_length() == gmpy2.popcount(x):
        if x > limits.mersenne:
            verdict = Primality.INDETERMINATE
        else:
            verdict = lucas_lehmer(x, cache, table, limits)
        if debug:
            print(f"[prime] 2^{x.bit_length()}-1: Lucas-Lehmer -> {verdict}", file=sys.stderr)
        return verdict

    if x >= table.largest_bound:
        return Primality.INDETERMINATE
    if x in cache:
        return Primality.PRIME

    witnesses = table.witnesses_for(x)
    verdict = Primality.PRIME if miller_rabin(x, witnesses) else Primality.COMPOSITE
    if debug:
        print(f"[prime] Miller-Rabin bases {list(witnesses)} -> {verdict}", file=sys.stderr)
    return verdict
