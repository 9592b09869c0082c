# -----------------------------------------------------------------------------
#  factorization.py
#  Trial-division factorization and the divisor-based functions built on it
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterator
from functools import reduce

from sympy import lcm

from numcalc.errors import DomainError, NegativeExponent
from numcalc.limits import DEFAULT_LIMITS, OperationLimits
from numcalc.primes import PrimeCache, Primality, WitnessTable, is_prime


def _trial_divisors(cache: PrimeCache) -> Iterator[int]:
    """Cached primes in ascending order, then every odd number past the largest."""
    yield from cache
    c = cache.largest + 2
    while True:
        yield c
        c += 2


def factor(n: int, cache: PrimeCache, limits: OperationLimits = DEFAULT_LIMITS) -> dict[int, int]:
    """
    Return the factorization of |n| as an ascending {prime: exponent} map.

    0 and 1 give {}. Once a candidate's square passes the remaining cofactor,
    that cofactor is prime and closes the map.
    """
    n = abs(n)
    limits.check("factorization", n)
    fac: dict[int, int] = {}
    if n < 2:
        return fac
    for p in _trial_divisors(cache):
        if p * p > n:
            break
        while n % p == 0:
            fac[p] = fac.get(p, 0) + 1
            n //= p
    if n > 1:
        fac[n] = fac.get(n, 0) + 1
    return fac


def divisors(n: int, cache: PrimeCache, limits: OperationLimits = DEFAULT_LIMITS) -> list[int]:
    """All positive divisors of |n| in ascending order."""
    if n == 0:
        raise DomainError("every integer divides 0")
    items = list(factor(n, cache, limits).items())
    out: list[int] = []
    _expand_divisors(items, 0, 1, out)
    return sorted(out)


def _expand_divisors(items: list[tuple[int, int]], i: int, acc: int, out: list[int]) -> None:
    # one level per distinct prime: pick p^0..p^e and recurse on the rest
    if i == len(items):
        out.append(acc)
        return
    p, e = items[i]
    pk = 1
    for _ in range(e + 1):
        _expand_divisors(items, i + 1, acc * pk, out)
        pk *= p


def sum_divisors(k: int, n: int, cache: PrimeCache, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    """σ_k(n) = ∏ (1 + p^k + p^2k + … + p^ek); σ_0 is the divisor count."""
    if k < 0:
        raise NegativeExponent(f"negative divisor power {k}")
    limits.check("exponent", k)
    n = abs(n)
    limits.check("factorization", n)
    if n == 0:
        return 0
    s = 1
    for p, e in factor(n, cache, limits).items():
        pk = p**k
        term = cur = 1
        for _ in range(e):
            cur *= pk
            term += cur
        s *= term
    return s


def little_omega(n: int, cache: PrimeCache, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    return len(factor(n, cache, limits))


def big_omega(n: int, cache: PrimeCache, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    return sum(factor(n, cache, limits).values())


def jordan_totient(a: int, k: int, cache: PrimeCache, table: WitnessTable,
                   limits: OperationLimits = DEFAULT_LIMITS) -> int:
    """
    J_k(a) = a^k ∏ (1 - p^-k) over the distinct primes p of a.

    The product is kept as an exact numerator/denominator pair; J_1 is
    Euler's totient.
    """
    if a < 1 or k < 1:
        raise DomainError(f"Jordan's totient needs a >= 1 and k >= 1, got a={a}, k={k}")
    limits.check("factorization", a)
    limits.check("exponent", k)
    if is_prime(a, cache, table, limits) is Primality.PRIME:
        return a**k - 1
    numer = a**k
    denom = 1
    for p in factor(a, cache, limits):
        pk = p**k
        numer *= pk - 1
        denom *= pk
    return numer // denom


def mobius(n: int, cache: PrimeCache, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    """μ(n): 0 at the first repeated prime, else (-1)^(number of primes)."""
    n = abs(n)
    if n == 0:
        raise DomainError("the Möbius function is undefined at 0")
    limits.check("factorization", n)
    count = 0
    for p in _trial_divisors(cache):
        if p * p > n:
            break
        if n % p == 0:
            n //= p
            if n % p == 0:
                return 0
            count += 1
    if n > 1:
        count += 1
    return -1 if count % 2 else 1


def carmichael(n: int, cache: PrimeCache, table: WitnessTable,
               limits: OperationLimits = DEFAULT_LIMITS) -> int:
    """
    λ(n): n-1 for primes, n/4 for powers of two above 4, otherwise the lcm
    of φ(p^e) over the prime powers of n. A factor 2^e with e >= 3 inside a
    composite contributes 2^(e-1), so λ(24) = 4.
    """
    if n < 1:
        raise DomainError(f"the Carmichael function needs n >= 1, got {n}")
    limits.check("factorization", n)
    if n == 1:
        return 1
    if n == 4:
        return 2
    if is_prime(n, cache, table, limits) is Primality.PRIME:
        return n - 1
    if n & (n - 1) == 0:
        return n // 4
    # (p-1)p^(e-1) for every prime power, 2^e included
    parts = [(p - 1) * p ** (e - 1) for p, e in factor(n, cache, limits).items()]
    return reduce(lambda acc, v: int(lcm(acc, v)), parts, 1)
