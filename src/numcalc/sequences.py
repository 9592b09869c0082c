# -----------------------------------------------------------------------------
#  sequences.py
#  Factorial family, counting sequences and linear recurrences
# -----------------------------------------------------------------------------

from __future__ import annotations

from math import prod

from numcalc.errors import DomainError
from numcalc.limits import DEFAULT_LIMITS, OperationLimits


def _check_n(n: int, what: str, limits: OperationLimits) -> None:
    limits.check("sequence", n)
    if n < 0:
        raise DomainError(f"{what} is undefined for negative n, got {n}")


def _check_nk(n: int, k: int, what: str, limits: OperationLimits) -> None:
    limits.check("sequence", n)
    if n < 0 or k < 0:
        raise DomainError(f"{what} needs n, k >= 0, got n={n}, k={k}")


def factorial(n: int, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    _check_n(n, "n!", limits)
    return prod(range(2, n + 1))


def double_factorial(n: int, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    """Product of the integers <= n with the parity of n."""
    _check_n(n, "n!!", limits)
    return prod(range(2 + n % 2, n + 1, 2))


def derangement(n: int, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    """!n = (n-1)(!(n-1) + !(n-2)), !0 = 1, !1 = 0."""
    _check_n(n, "!n", limits)
    if n == 0:
        return 1
    prev2, prev1 = 1, 0
    for i in range(2, n + 1):
        prev2, prev1 = prev1, (i - 1) * (prev1 + prev2)
    return prev1


def permutation(n: int, k: int, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    """P(n, k) as the partial product k·(k+1)·…·n; 0 when k > n."""
    _check_nk(n, k, "P(n,k)", limits)
    if k > n:
        return 0
    return prod(range(k, n + 1))


def _binomial(n: int, k: int) -> int:
    if k > n:
        return 0
    k = min(k, n - k)
    numer = denom = 1
    for i in range(1, k + 1):
        numer *= n + 1 - i
        denom *= i
    return numer // denom


def binomial(n: int, k: int, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    """C(n, k) by the multiplicative formula over min(k, n-k) terms."""
    _check_nk(n, k, "C(n,k)", limits)
    return _binomial(n, k)


def catalan(n: int, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    _check_n(n, "C_n", limits)
    # 2n may pass the sequence limit; n is what the limit bounds
    return _binomial(2 * n, n) // (n + 1)


def fibonacci(n: int, first: int = 0, second: int = 1, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    """
    n-th term of a(i) = a(i-1) + a(i-2) seeded with a(0)=first, a(1)=second.

    (0, 1) gives Fibonacci numbers, (2, 1) Lucas numbers.
    """
    _check_n(n, "F_n", limits)
    if n == 0:
        return first
    a, b = first, second
    for _ in range(n - 1):
        a, b = b, a + b
    return b


def lucas(n: int, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    return fibonacci(n, 2, 1, limits)
