# -----------------------------------------------------------------------------
#  residues.py
#  Jacobi symbol and quadratic residues
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import TYPE_CHECKING

from numcalc.registry import operation

if TYPE_CHECKING:
    from numcalc.engine import Engine

CATEGORY = "Residues"


@operation(
    label="jacobi",
    symbol="(a/m)",
    description="Jacobi symbol for an odd modulus m.",
    category=CATEGORY,
)
def jacobi(engine: Engine, a: int, m: int) -> int:
    return engine.jacobi(a, m)


@operation(
    label="quad_residues",
    symbol="Q.R.",
    description="Nonzero quadratic residues modulo m.",
    category=CATEGORY,
    limit="quad_residue",
    aliases=("qr", "quad_residue"),
)
def quad_residues(engine: Engine, m: int) -> str:
    return engine.stringify_quad_residue(m)
