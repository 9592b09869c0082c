# -----------------------------------------------------------------------------
#  primes.py
#  Primality, prime counting and primorials
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import TYPE_CHECKING

from numcalc.primes import Primality
from numcalc.registry import operation

if TYPE_CHECKING:
    from numcalc.engine import Engine

CATEGORY = "Primes"


@operation(
    label="is_prime",
    symbol="Prime?",
    description="Deterministic primality test (Miller-Rabin, Lucas-Lehmer for 2^p-1).",
    category=CATEGORY,
    limit="mersenne",
    aliases=("prime", "isprime"),
)
def is_prime(engine: Engine, n: int) -> Primality:
    return engine.is_prime(n)


@operation(
    label="primes",
    symbol="π(n)",
    description="Number of primes ≤ n (Sieve of Atkin).",
    category=CATEGORY,
    limit="prime_generation",
    aliases=("pi", "generate_primes"),
)
def primes(engine: Engine, n: int) -> int:
    return engine.generate_primes(n)


@operation(
    label="primorial",
    symbol="n#",
    description="Product of all primes ≤ n.",
    category=CATEGORY,
    limit="sequence",
)
def primorial(engine: Engine, n: int) -> int:
    return engine.primorial(n)
