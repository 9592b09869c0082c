# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
import re
import sys

from numcalc.runtime import CFG

# Presentation-layer operand rule: optional minus sign, then digits only
_OPERAND_RE = re.compile(r"-?[0-9]+")
MAX_OPERAND_DIGITS = 10_000


class UserInputError(Exception):
    pass


def dec_digits(n: int) -> int:
    """Exact decimal digit count without str(); handles n >= 0."""
    n = abs(n)
    if n == 0:
        return 1
    # floor(log10(n)) ~= floor(bitlen*log10(2))
    bl = n.bit_length()
    est = int((bl * 30103) // 100000)
    # bring into correct decade with at most a couple of steps
    p10 = 10 ** est
    if n < p10:
        while n < p10:
            est -= 1
            p10 //= 10
    else:
        p10 *= 10
        while n >= p10:
            est += 1
            p10 *= 10
    return est + 1


def parse_operand(text: str, label: str = "operand") -> int:
    """
    Convert a decimal string into an int.

    Accepts an optional leading '-' followed by 1..MAX_OPERAND_DIGITS digits.
    Surrounding whitespace and '_' digit separators are ignored.
    """
    s = (text or "").strip().replace("_", "")
    if not _OPERAND_RE.fullmatch(s):
        raise UserInputError(f"Invalid input: {label} {text!r} is not an integer.")
    limit = int(CFG("BEHAVIOUR.MAX_DIGITS", MAX_OPERAND_DIGITS))
    ndig = len(s) - (1 if s.startswith("-") else 0)
    if ndig > limit:
        raise UserInputError(f"Invalid input: {label} has {ndig} digits, at most {limit} are accepted.")
    ensure_int_str_digits(ndig)
    return int(s)


def ensure_int_str_digits(limit: int = 0) -> None:
    """Raise Python's int<->str guard to at least limit digits (0 = no guard)."""
    if os.environ.get("PYTHONINTMAXSTRDIGITS"):
        return
    try:
        cur = sys.get_int_max_str_digits()
    except AttributeError:
        return
    if cur and (limit == 0 or cur < limit):
        sys.set_int_max_str_digits(limit)


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    """{'A': {'B': 1}} -> {'A.B': 1}"""
    out: dict[str, object] = {}
    for k, v in d.items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
