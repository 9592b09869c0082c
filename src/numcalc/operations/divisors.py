# -----------------------------------------------------------------------------
#  divisors.py
#  Factorization and the multiplicative functions derived from it
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import TYPE_CHECKING

from numcalc.registry import operation

if TYPE_CHECKING:
    from numcalc.engine import Engine

CATEGORY = "Divisors and Multiplicative Functions"
LIMIT = "factorization"


@operation(
    label="factor",
    symbol="Factors",
    description="Prime factorization, e.g. 2^3 × 3^2 × 5.",
    category=CATEGORY,
    limit=LIMIT,
    aliases=("factors", "factorize"),
)
def factor(engine: Engine, n: int) -> str:
    return engine.stringify_factors(n)


@operation(
    label="divisors",
    symbol="Divisors",
    description="List of all positive divisors.",
    category=CATEGORY,
    limit=LIMIT,
)
def divisors(engine: Engine, n: int) -> str:
    return engine.stringify_divisors(n)


@operation(
    label="num_divisors",
    symbol="σ₀(n)",
    description="Number of divisors.",
    category=CATEGORY,
    limit=LIMIT,
    aliases=("tau", "sigma0"),
)
def num_divisors(engine: Engine, n: int) -> int:
    return engine.sum_divisors(0, n)


@operation(
    label="sum_divisors",
    symbol="σ₁(n)",
    description="Sum of divisors.",
    category=CATEGORY,
    limit=LIMIT,
    aliases=("sigma", "sigma1"),
)
def sum_divisors(engine: Engine, n: int) -> int:
    return engine.sum_divisors(1, n)


@operation(
    label="sigma_k",
    symbol="σₖ(n)",
    description="Sum of the divisors of n, each raised to the power k (operands: k n).",
    category=CATEGORY,
    limit=LIMIT,
)
def sigma_k(engine: Engine, k: int, n: int) -> int:
    return engine.sum_divisors(k, n)


@operation(
    label="little_omega",
    symbol="ω(n)",
    description="Number of distinct prime factors.",
    category=CATEGORY,
    limit=LIMIT,
    aliases=("omega",),
)
def little_omega(engine: Engine, n: int) -> int:
    return engine.little_omega(n)


@operation(
    label="big_omega",
    symbol="Ω(n)",
    description="Number of prime factors counted with multiplicity.",
    category=CATEGORY,
    limit=LIMIT,
)
def big_omega(engine: Engine, n: int) -> int:
    return engine.big_omega(n)


@operation(
    label="totient",
    symbol="φ(n)",
    description="Euler's totient function.",
    category=CATEGORY,
    limit=LIMIT,
    aliases=("phi",),
)
def totient(engine: Engine, n: int) -> int:
    return engine.totient(n)


@operation(
    label="jordan_totient",
    symbol="Jₖ(n)",
    description="Jordan's totient function (operands: n k).",
    category=CATEGORY,
    limit=LIMIT,
    aliases=("jordan",),
)
def jordan_totient(engine: Engine, n: int, k: int) -> int:
    return engine.jordan_totient(n, k)


@operation(
    label="mobius",
    symbol="μ(n)",
    description="Möbius function.",
    category=CATEGORY,
    limit=LIMIT,
    aliases=("mu", "moebius"),
)
def mobius(engine: Engine, n: int) -> int:
    return engine.mobius(n)


@operation(
    label="carmichael",
    symbol="λ(n)",
    description="Carmichael function.",
    category=CATEGORY,
    limit=LIMIT,
    aliases=("lambda",),
)
def carmichael(engine: Engine, n: int) -> int:
    return engine.carmichael(n)
