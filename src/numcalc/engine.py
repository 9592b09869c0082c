# src/numcalc/engine.py
"""
The computation engine: one object owning every cache the math needs.

All operations are synchronous and bounded by ``self.limits``. The prime
cache and the two partition tables only grow. Nothing here is thread-safe
by itself; callers sharing an engine across threads hold ``engine.lock``
for the whole call (``registry.evaluate`` does this).
"""

from __future__ import annotations

import threading
from math import prod

from numcalc import arithmetic, factorization, sequences, symbols
from numcalc.errors import DomainError
from numcalc.fmt import format_divisors, format_factorization, format_residues
from numcalc.limits import DEFAULT_LIMITS, OperationLimits
from numcalc.primes import PrimeCache, Primality, WitnessTable, is_prime
from numcalc.tables import IntPartitionTable, SetPartitionTable


class Engine:
    def __init__(self, limits: OperationLimits | None = None):
        self.limits = limits or DEFAULT_LIMITS
        self.primes = PrimeCache()
        self.witnesses = WitnessTable()
        self.set_partitions = SetPartitionTable(self.limits.set_partition)
        self.int_partitions = IntPartitionTable(self.limits.int_partition)
        self.lock = threading.RLock()

    # --- arithmetic -----------------------------------------------------------

    def add(self, x: int, y: int) -> int:
        return x + y

    def subtract(self, x: int, y: int) -> int:
        return x - y

    def multiply(self, x: int, y: int) -> int:
        return x * y

    def negate(self, x: int) -> int:
        return -x

    def divide(self, x: int, y: int) -> int:
        return arithmetic.divide(x, y)

    def mod(self, x: int, y: int) -> int:
        return arithmetic.mod(x, y)

    def mod_inverse(self, x: int, y: int) -> int:
        return arithmetic.mod_inverse(x, y)

    def power(self, x: int, y: int) -> int:
        return arithmetic.power(x, y, self.limits)

    def isqrt(self, n: int) -> int:
        return arithmetic.isqrt(n, self.limits)

    def gcd(self, a: int, b: int) -> int:
        return arithmetic.gcd(a, b)

    def lcm(self, a: int, b: int) -> int:
        return arithmetic.lcm(a, b)

    def polygon(self, s: int, n: int) -> int:
        return arithmetic.polygon(s, n)

    def polygon_centered(self, s: int, n: int) -> int:
        return arithmetic.polygon_centered(s, n)

    # --- primes ---------------------------------------------------------------

    def is_prime(self, x: int) -> Primality:
        return is_prime(x, self.primes, self.witnesses, self.limits)

    def generate_primes(self, limit: int) -> int:
        """Number of primes <= limit, sieving only past the cache frontier."""
        self.limits.check("prime_generation", limit)
        if limit < 2:
            return 0
        return self.primes.extend(limit)

    def primorial(self, n: int) -> int:
        self.limits.check("sequence", n)
        if n < 0:
            raise DomainError(f"n# is undefined for negative n, got {n}")
        self.primes.extend(n)
        return prod(self.primes.upto(n))

    # --- factorization --------------------------------------------------------

    def factor(self, n: int) -> dict[int, int]:
        return factorization.factor(n, self.primes, self.limits)

    def divisors(self, n: int) -> list[int]:
        return factorization.divisors(n, self.primes, self.limits)

    def sum_divisors(self, k: int, n: int) -> int:
        return factorization.sum_divisors(k, n, self.primes, self.limits)

    def little_omega(self, n: int) -> int:
        return factorization.little_omega(n, self.primes, self.limits)

    def big_omega(self, n: int) -> int:
        return factorization.big_omega(n, self.primes, self.limits)

    def jordan_totient(self, a: int, k: int) -> int:
        return factorization.jordan_totient(a, k, self.primes, self.witnesses, self.limits)

    def totient(self, n: int) -> int:
        return self.jordan_totient(n, 1)

    def mobius(self, n: int) -> int:
        return factorization.mobius(n, self.primes, self.limits)

    def carmichael(self, n: int) -> int:
        return factorization.carmichael(n, self.primes, self.witnesses, self.limits)

    # --- partition tables -----------------------------------------------------

    def set_partition(self, n: int, k: int | None = None) -> int:
        """S(n, k), or the Bell number B(n) when k is omitted."""
        if k is None:
            return self.set_partitions.total(n)
        return self.set_partitions.value(n, k)

    def int_partition(self, n: int, k: int | None = None) -> int:
        """Partitions of n into exactly k parts, or p(n) when k is omitted."""
        if k is None:
            return self.int_partitions.total(n)
        return self.int_partitions.value(n, k)

    # --- sequences ------------------------------------------------------------

    def factorial(self, n: int) -> int:
        return sequences.factorial(n, self.limits)

    def double_factorial(self, n: int) -> int:
        return sequences.double_factorial(n, self.limits)

    def derangement(self, n: int) -> int:
        return sequences.derangement(n, self.limits)

    def permutation(self, n: int, k: int) -> int:
        return sequences.permutation(n, k, self.limits)

    def binomial(self, n: int, k: int) -> int:
        return sequences.binomial(n, k, self.limits)

    def catalan(self, n: int) -> int:
        return sequences.catalan(n, self.limits)

    def fibonacci(self, n: int, first: int = 0, second: int = 1) -> int:
        return sequences.fibonacci(n, first, second, self.limits)

    def lucas(self, n: int) -> int:
        return sequences.lucas(n, self.limits)

    # --- residues -------------------------------------------------------------

    def jacobi(self, a: int, m: int) -> int:
        return symbols.jacobi(a, m)

    def quad_residue(self, m: int) -> set[int]:
        return symbols.quad_residue(m, self.limits)

    # --- display forms --------------------------------------------------------

    def stringify_prime(self, x: int) -> str:
        """'Prime', 'Composite', 'Indeterminate', or 'N/A' for 0 and 1."""
        if x in (0, 1):
            return "N/A"
        return str(self.is_prime(x))

    def stringify_factors(self, n: int) -> str:
        if abs(n) <= 1:
            raise DomainError(f"{n} has no prime factors")
        return format_factorization(self.factor(n))

    def stringify_divisors(self, n: int) -> str:
        if abs(n) <= 1:
            raise DomainError(f"{n} has no nontrivial divisors")
        return format_divisors(self.divisors(n))

    def stringify_quad_residue(self, m: int) -> str:
        return format_residues(self.quad_residue(m))
