# -----------------------------------------------------------------------------
#  arithmetic.py
#  Basic arithmetic, division, modular arithmetic, powers and roots
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import TYPE_CHECKING

from numcalc.registry import operation

if TYPE_CHECKING:
    from numcalc.engine import Engine

CATEGORY = "Arithmetic"


@operation(
    label="add",
    symbol="x + y",
    description="Sum.",
    category=CATEGORY,
    aliases=("plus",),
)
def add(engine: Engine, x: int, y: int) -> int:
    return engine.add(x, y)


@operation(
    label="subtract",
    symbol="x - y",
    description="Difference.",
    category=CATEGORY,
    aliases=("sub", "minus"),
)
def subtract(engine: Engine, x: int, y: int) -> int:
    return engine.subtract(x, y)


@operation(
    label="multiply",
    symbol="x × y",
    description="Product.",
    category=CATEGORY,
    aliases=("mul", "times"),
)
def multiply(engine: Engine, x: int, y: int) -> int:
    return engine.multiply(x, y)


@operation(
    label="negate",
    symbol="±x",
    description="Change of sign.",
    category=CATEGORY,
    aliases=("neg",),
)
def negate(engine: Engine, x: int) -> int:
    return engine.negate(x)


@operation(
    label="divide",
    symbol="x ÷ y",
    description="Integer division, truncated toward zero.",
    category=CATEGORY,
    aliases=("div",),
)
def divide(engine: Engine, x: int, y: int) -> int:
    return engine.divide(x, y)


@operation(
    label="mod",
    symbol="x mod y",
    description="Remainder for a positive modulus, in [0, y-1].",
    category=CATEGORY,
)
def mod(engine: Engine, x: int, y: int) -> int:
    return engine.mod(x, y)


@operation(
    label="mod_inverse",
    symbol="x⁻¹ mod y",
    description="Modular multiplicative inverse.",
    category=CATEGORY,
    aliases=("inverse", "modinv"),
)
def mod_inverse(engine: Engine, x: int, y: int) -> int:
    return engine.mod_inverse(x, y)


@operation(
    label="power",
    symbol="x^y",
    description="Exact power.",
    category=CATEGORY,
    limit="exponent",
    aliases=("pow",),
)
def power(engine: Engine, x: int, y: int) -> int:
    return engine.power(x, y)


@operation(
    label="isqrt",
    symbol="⌊√n⌋",
    description="Integer square root (Newton iteration).",
    category=CATEGORY,
    limit="isqrt",
    aliases=("sqrt",),
)
def isqrt(engine: Engine, n: int) -> int:
    return engine.isqrt(n)


@operation(
    label="gcd",
    symbol="gcd(a,b)",
    description="Greatest common divisor.",
    category=CATEGORY,
)
def gcd(engine: Engine, a: int, b: int) -> int:
    return engine.gcd(a, b)


@operation(
    label="lcm",
    symbol="lcm(a,b)",
    description="Least common multiple.",
    category=CATEGORY,
)
def lcm(engine: Engine, a: int, b: int) -> int:
    return engine.lcm(a, b)


@operation(
    label="square",
    symbol="n^2",
    description="Square.",
    category=CATEGORY,
    aliases=("squared",),
)
def square(engine: Engine, n: int) -> int:
    return engine.power(n, 2)


@operation(
    label="cube",
    symbol="n^3",
    description="Cube.",
    category=CATEGORY,
    aliases=("cubed",),
)
def cube(engine: Engine, n: int) -> int:
    return engine.power(n, 3)


@operation(
    label="power_of_two",
    symbol="2^n",
    description="Power of 2.",
    category=CATEGORY,
    limit="exponent",
    aliases=("two_to_the_n", "pow2"),
)
def power_of_two(engine: Engine, n: int) -> int:
    return engine.power(2, n)


@operation(
    label="power_of_three",
    symbol="3^n",
    description="Power of 3.",
    category=CATEGORY,
    limit="exponent",
    aliases=("three_to_the_n", "pow3"),
)
def power_of_three(engine: Engine, n: int) -> int:
    return engine.power(3, n)


@operation(
    label="power_swapped",
    symbol="y^x",
    description="Exact power with the operands swapped: y raised to x.",
    category=CATEGORY,
    limit="exponent",
    aliases=("y_to_the_x", "rpow"),
)
def power_swapped(engine: Engine, x: int, y: int) -> int:
    return engine.power(y, x)
