# -----------------------------------------------------------------------------
#  arithmetic.py
#  Domain-checked wrappers around the big-integer primitives
# -----------------------------------------------------------------------------

from __future__ import annotations

from math import gcd as _gcd

from numcalc.errors import DivisionByZero, DomainError, InvalidModulus, NegativeExponent, NotCoprime
from numcalc.limits import DEFAULT_LIMITS, OperationLimits


def divide(x: int, y: int) -> int:
    """x / y truncated toward zero."""
    if y == 0:
        raise DivisionByZero("division by zero")
    q = abs(x) // abs(y)
    return q if (x < 0) == (y < 0) else -q


def mod(x: int, y: int) -> int:
    """x mod y for a positive modulus; always in [0, y-1]."""
    if y < 1:
        raise InvalidModulus(f"modulus must be positive, got {y}")
    return x % y


def mod_inverse(x: int, y: int) -> int:
    """z with x*z = 1 (mod y)."""
    if y < 1:
        raise InvalidModulus(f"modulus must be positive, got {y}")
    if _gcd(x, y) != 1:
        raise NotCoprime(f"{x} has no inverse modulo {y} (gcd is {_gcd(x, y)})")
    return pow(x, -1, y)


def power(x: int, y: int, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    if y < 0:
        raise NegativeExponent(f"negative exponent {y}")
    limits.check("exponent", y)
    return x**y


def isqrt(n: int, limits: OperationLimits = DEFAULT_LIMITS) -> int:
    """
    Largest r with r*r <= n, by Newton's method.

    Starts from n itself; each step at least halves the overshoot, so the
    iteration count is about log2 of the digit count plus the bit length.
    """
    if n < 0:
        raise DomainError("square root of a negative number")
    limits.check("isqrt", n)
    if n == 0:
        return 0
    x = n
    y = (x + n // x) // 2
    while x > y:
        x = y
        y = (x + n // x) // 2
    return x


def gcd(a: int, b: int) -> int:
    return _gcd(a, b)


def lcm(a: int, b: int) -> int:
    if a == 0 or b == 0:
        raise DomainError("lcm is undefined when an operand is 0")
    return abs(a * b) // _gcd(a, b)


def polygon(s: int, n: int) -> int:
    """n-th s-gonal number: (s-2)*n*(n-1)/2 + n."""
    if s < 3:
        raise DomainError(f"a polygon needs at least 3 sides, got {s}")
    # n*(n-1) is always even
    return (s - 2) * (n * (n - 1) // 2) + n


def polygon_centered(s: int, n: int) -> int:
    """n-th centered s-gonal number: s*n*(n-1)/2 + 1."""
    if s < 3:
        raise DomainError(f"a polygon needs at least 3 sides, got {s}")
    return s * (n * (n - 1) // 2) + 1
