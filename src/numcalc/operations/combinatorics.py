# -----------------------------------------------------------------------------
#  combinatorics.py
#  Counting: factorials, selections, partitions and figurate numbers
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import TYPE_CHECKING

from numcalc.registry import operation

if TYPE_CHECKING:
    from numcalc.engine import Engine

CATEGORY = "Combinatorics"


@operation(
    label="factorial",
    symbol="n!",
    description="Factorial.",
    category=CATEGORY,
    limit="sequence",
    aliases=("fact",),
)
def factorial(engine: Engine, n: int) -> int:
    return engine.factorial(n)


@operation(
    label="double_factorial",
    symbol="n!!",
    description="Double factorial.",
    category=CATEGORY,
    limit="sequence",
)
def double_factorial(engine: Engine, n: int) -> int:
    return engine.double_factorial(n)


@operation(
    label="derangement",
    symbol="!n",
    description="Derangements: permutations with no fixed point.",
    category=CATEGORY,
    limit="sequence",
    aliases=("subfactorial",),
)
def derangement(engine: Engine, n: int) -> int:
    return engine.derangement(n)


@operation(
    label="permutation",
    symbol="P(n,k)",
    description="k-permutation, the product k·(k+1)·…·n.",
    category=CATEGORY,
    limit="sequence",
    aliases=("perm",),
)
def permutation(engine: Engine, n: int, k: int) -> int:
    return engine.permutation(n, k)


@operation(
    label="binomial",
    symbol="C(n,k)",
    description="Binomial coefficient.",
    category=CATEGORY,
    limit="sequence",
    aliases=("choose", "binom"),
)
def binomial(engine: Engine, n: int, k: int) -> int:
    return engine.binomial(n, k)


@operation(
    label="catalan",
    symbol="Cₙ",
    description="Catalan number.",
    category=CATEGORY,
    limit="sequence",
)
def catalan(engine: Engine, n: int) -> int:
    return engine.catalan(n)


@operation(
    label="bell",
    symbol="Bₙ",
    description="Bell number: partitions of an n-element set.",
    category=CATEGORY,
    limit="set_partition",
)
def bell(engine: Engine, n: int) -> int:
    return engine.set_partition(n)


@operation(
    label="stirling2",
    symbol="S(n,k)",
    description="Stirling number of the second kind.",
    category=CATEGORY,
    limit="set_partition",
    aliases=("set_partition",),
)
def stirling2(engine: Engine, n: int, k: int) -> int:
    return engine.set_partition(n, k)


@operation(
    label="partitions",
    symbol="p(n)",
    description="Number of integer partitions of n.",
    category=CATEGORY,
    limit="int_partition",
)
def partitions(engine: Engine, n: int) -> int:
    return engine.int_partition(n)


@operation(
    label="partitions_k",
    symbol="pₖ(n)",
    description="Partitions of n into exactly k parts.",
    category=CATEGORY,
    limit="int_partition",
    aliases=("int_partition",),
)
def partitions_k(engine: Engine, n: int, k: int) -> int:
    return engine.int_partition(n, k)


@operation(
    label="polygon",
    symbol="p(s,n)",
    description="n-th s-gonal number.",
    category=CATEGORY,
    aliases=("polygonal",),
)
def polygon(engine: Engine, s: int, n: int) -> int:
    return engine.polygon(s, n)


@operation(
    label="polygon_centered",
    symbol="pc(s,n)",
    description="n-th centered s-gonal number.",
    category=CATEGORY,
    aliases=("centered_polygonal",),
)
def polygon_centered(engine: Engine, s: int, n: int) -> int:
    return engine.polygon_centered(s, n)
