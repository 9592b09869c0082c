# src/numcalc/limits.py
from __future__ import annotations

from dataclasses import dataclass, fields, replace

from numcalc.errors import LimitExceeded
from numcalc.runtime import CFG
from numcalc.utility import UserInputError, dec_digits

_LIMIT_TEXT = {
    "exponent": "exponent up to {}",
    "mersenne": "Mersenne numbers up to {}",
}


@dataclass(frozen=True)
class OperationLimits:
    """
    Ceilings on operand size for every public operation.

    An engine takes one of these at construction and never changes it.
    The field names (upper-cased) double as keys of the [LIMITS] profile
    section, e.g. ``LIMITS.FACTORIZATION = 999999``.
    """
    exponent: int = 99_999
    factorization: int = 999_999_999_999            # 12 digits
    mersenne: int = 10**1000 - 1                     # 1000 digits
    sequence: int = 9_999                            # 4 digits, factorial family
    prime_generation: int = 9_999_999                # 7 digits
    int_partition: int = 999
    set_partition: int = 600
    quad_residue: int = 99_999                       # 5 digits
    isqrt: int = 10**2000 - 1                        # 2000 digits

    def check(self, name: str, value: int) -> int:
        """Return value, or raise LimitExceeded if it is above the named ceiling."""
        ceiling = getattr(self, name)
        if value > ceiling:
            raise LimitExceeded(name.replace("_", " "), ceiling, value)
        return value

    def describe(self, name: str) -> str:
        """Human text for one ceiling, e.g. '4 digits' for 9999."""
        value = getattr(self, name)
        digits = dec_digits(value)
        amount = f"{digits} digits" if digits > 1 and value == 10**digits - 1 else str(value)
        return _LIMIT_TEXT.get(name, "{}").format(amount)

    @classmethod
    def from_settings(cls) -> OperationLimits:
        """
        Build limits from the active profile's [LIMITS] section.

        Values may be ints or digit counts written as "NNd" (e.g. "1000d"
        for the largest 1000-digit number).
        """
        raw = CFG("LIMITS", None) or {}
        if not isinstance(raw, dict):
            raise UserInputError("[LIMITS] must be a table.")
        known = {f.name.upper(): f.name for f in fields(cls)}
        overrides: dict[str, int] = {}
        for key, val in raw.items():
            name = known.get(str(key).upper())
            if name is None:
                raise UserInputError(f"unknown limit '{key}' in [LIMITS]; expected one of {', '.join(sorted(known))}.")
            overrides[name] = _parse_limit(key, val)
        return replace(DEFAULT_LIMITS, **overrides)


def _parse_limit(key: str, val: object) -> int:
    if isinstance(val, bool):
        raise UserInputError(f"limit '{key}' must be an integer, not a boolean.")
    if isinstance(val, int):
        if val < 0:
            raise UserInputError(f"limit '{key}' must not be negative.")
        return val
    s = str(val).strip().lower()
    if s.endswith("d") and s[:-1].isdigit():
        return 10 ** int(s[:-1]) - 1
    raise UserInputError(f"limit '{key}' must be an integer or a digit count like \"12d\", got {val!r}.")


DEFAULT_LIMITS = OperationLimits()
