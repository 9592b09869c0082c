# -----------------------------------------------------------------------------
#  sequences.py
#  Second-order linear recurrences
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import TYPE_CHECKING

from numcalc.registry import operation

if TYPE_CHECKING:
    from numcalc.engine import Engine

CATEGORY = "Sequences"


@operation(
    label="fibonacci",
    symbol="Fₙ",
    description="Fibonacci number.",
    category=CATEGORY,
    limit="sequence",
    aliases=("fib",),
)
def fibonacci(engine: Engine, n: int) -> int:
    return engine.fibonacci(n)


@operation(
    label="lucas",
    symbol="Lₙ",
    description="Lucas number.",
    category=CATEGORY,
    limit="sequence",
)
def lucas(engine: Engine, n: int) -> int:
    return engine.lucas(n)
