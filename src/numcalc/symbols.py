# -----------------------------------------------------------------------------
#  symbols.py
#  Jacobi symbol and quadratic residues
# -----------------------------------------------------------------------------

from __future__ import annotations

from math import gcd

from numcalc.errors import DomainError
from numcalc.limits import DEFAULT_LIMITS, OperationLimits


def jacobi(a: int, m: int) -> int:
    """
    Jacobi symbol (a/m) for odd positive m, by the reciprocity loop.

    Each pass strips the factors of two from a (sign flips per factor when
    m ≡ 3, 5 mod 8), stops on a = 1 or a shared factor, flips again when
    a ≡ m ≡ 3 mod 4, then swaps a and m.
    """
    if m < 1 or m % 2 == 0:
        raise DomainError(f"the Jacobi symbol needs an odd positive modulus, got {m}")
    r = 1
    while True:
        a %= m
        if a == 0:
            return r if m == 1 else 0
        twos = (a & -a).bit_length() - 1
        a >>= twos
        if twos % 2 and m % 8 in (3, 5):
            r = -r
        if a == 1:
            return r
        if gcd(a, m) != 1:
            return 0
        if a % 4 == 3 and m % 4 == 3:
            r = -r
        a, m = m, a


def quad_residue(m: int, limits: OperationLimits = DEFAULT_LIMITS) -> set[int]:
    """{i² mod m : 1 <= i <= m/2}; the upper half mirrors the lower one."""
    if m < 1:
        raise DomainError(f"modulus must be positive, got {m}")
    limits.check("quad_residue", m)
    return {i * i % m for i in range(1, m // 2 + 1)}
