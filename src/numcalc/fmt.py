# src/numcalc/fmt.py
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from numcalc.runtime import CFG
from numcalc.utility import dec_digits

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def abbr_int_fast(n: int, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    if not isinstance(n, int):
        return str(n)
    if n == 0:
        return "0"

    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n

    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)

    # compute first/last blocks exactly
    first = a // 10 ** (d - head)
    last = a % 10**tail
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def abbr_int(n: int) -> str:
    """abbr_int_fast with the [FORMATTING] profile settings."""
    return abbr_int_fast(
        n,
        int(CFG("FORMATTING.NUM_ABBR_HEAD", 20)),
        int(CFG("FORMATTING.NUM_ABBR_TAIL", 20)),
        int(CFG("FORMATTING.NUM_ABBR_THRESHOLD", 80)),
        CFG("FORMATTING.ELLIPSIS", "…"),
    )


def strip_ansi(s: str | None) -> str:
    """Return s with ANSI escape sequences removed."""
    return "" if s is None else ANSI_RE.sub("", s)


def format_factorization(fac: Mapping[int, int]) -> str:
    """
    Turn {p: e, ...} into a tidy string like: 2^3 × 3 × 5^2
    """
    parts: list[str] = []
    for p, e in sorted(fac.items()):
        parts.append(f"{p}^{e}" if e > 1 else f"{p}")
    return " × ".join(parts) if parts else "1"


def format_divisors(divs: Iterable[int]) -> str:
    """[1, 2, 3, 6]"""
    return "[" + ", ".join(str(d) for d in sorted(divs)) + "]"


def format_residues(res: Iterable[int]) -> str:
    return format_divisors(res)


def digit_summary(n: int) -> str:
    """'1 digit' / '2,570 digits' for the result footer."""
    d = dec_digits(n)
    return f"{d:,} digit" + ("" if d == 1 else "s")
