# src/numcalc/errors.py
from __future__ import annotations

from numcalc.utility import dec_digits

_MAX_SHOWN_DIGITS = 24


class EngineError(Exception):
    """Base class for every refusal raised by the engine."""


class DomainError(EngineError):
    """The operands fall outside the mathematical domain of the operation."""


class DivisionByZero(DomainError):
    pass


class InvalidModulus(DomainError):
    pass


class NotCoprime(DomainError):
    pass


class NegativeExponent(DomainError):
    pass


class LimitExceeded(EngineError):
    """
    An operand is larger than the configured ceiling for the operation.

    Keeps the limit name, the ceiling and the offending value so the
    presentation layer can explain the refusal.
    """

    def __init__(self, name: str, limit: int, value: int):
        self.name = name
        self.limit = limit
        self.value = value
        super().__init__(f"{name} limit exceeded (max {_short(limit)}, got {_short(value)})")


def _short(n: int) -> str:
    d = dec_digits(n)
    return str(n) if d <= _MAX_SHOWN_DIGITS else f"{d}-digit number"
