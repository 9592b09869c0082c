# src/numcalc/registry.py
from __future__ import annotations

import inspect
import re
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field, fields
from enum import Enum
from importlib import import_module
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

from numcalc.errors import DomainError, LimitExceeded
from numcalc.limits import OperationLimits
from numcalc.primes import Primality
from numcalc.utility import UserInputError

# --------------------- Discovery → Index ----------------------


@dataclass
class Index:
    funcs: dict[str, Callable[..., Any]]       # label -> func(engine, *operands)
    categories: dict[str, str]                 # label -> category
    descriptions: dict[str, str]               # label -> short description
    symbols: dict[str, str]                    # label -> display symbol
    arities: dict[str, int]                    # label -> number of operands
    limits: dict[str, str] = field(default_factory=dict)   # label -> OperationLimits field
    aliases: dict[str, str] = field(default_factory=dict)  # TOKEN -> label

    # helper for tokenization: "Sum of divisors" / "sum-divisors" -> SUM_DIVISORS
    @staticmethod
    def to_token(name: str) -> str:
        return re.sub(r"[^A-Za-z0-9]+", "_", name).upper().strip("_")

    def resolve(self, name: str) -> str:
        """Map a label, token or alias to the registered label."""
        if name in self.funcs:
            return name
        label = self.aliases.get(self.to_token(name))
        if label is None:
            raise UserInputError(f"unknown operation '{name}'. Use 'list' to see all operations.")
        return label


def _is_operation(obj) -> bool:
    return callable(obj) and getattr(obj, "__is_operation__", False)


def _collect_from_module(mod) -> list[Callable[..., object]]:
    out = []
    for _, o in inspect.getmembers(mod):
        if _is_operation(o):
            out.append(o)
    return out


def _arity(fn: Callable[..., object]) -> int:
    # first parameter is always the engine
    params = list(inspect.signature(fn).parameters.values())[1:]
    return sum(1 for p in params if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD))


# ---------- Decorator (only tags the function; no side effects) ----------

_LIMIT_NAMES = frozenset(f.name for f in fields(OperationLimits))


def operation(*, label: str, category: str, symbol: str = "", description: str = "",
              limit: str | None = None, aliases: tuple[str, ...] = ()):
    if limit is not None and limit not in _LIMIT_NAMES:
        raise ValueError(f"operation '{label}': unknown limit '{limit}'")

    def deco(fn: Callable[..., object]):
        fn.__is_operation__ = True
        fn.label = label
        fn.category = category
        fn.symbol = symbol or label
        fn.description = description
        fn.aliases = tuple(aliases)
        if limit is not None:
            fn.limit = limit
        return fn
    return deco


def discover() -> Index:
    """Import every numcalc.operations module and index its tagged functions."""
    funcs: OrderedDict[str, Callable[..., object]] = OrderedDict()
    cats: dict[str, str] = {}
    desc: dict[str, str] = {}
    syms: dict[str, str] = {}
    arity: dict[str, int] = {}
    lims: dict[str, str] = {}
    alias: dict[str, str] = {}

    pkg_dir = pkg_files("numcalc") / "operations"
    with as_file(pkg_dir) as real:
        for file in sorted(Path(real).glob("*.py")):
            if file.name == "__init__.py":
                continue
            mod = import_module(f"numcalc.operations.{file.stem}")
            for fn in _collect_from_module(mod):
                label = fn.label
                if label in funcs:
                    raise RuntimeError(f"operation '{label}' registered twice ({fn.__module__})")
                funcs[label] = fn
                cats[label] = getattr(fn, "category", "General")
                desc[label] = getattr(fn, "description", "")
                syms[label] = getattr(fn, "symbol", label)
                arity[label] = _arity(fn)
                lim = getattr(fn, "limit", None)
                if lim:
                    lims[label] = lim
                for name in (label, *getattr(fn, "aliases", ())):
                    alias[Index.to_token(name)] = label

    return Index(
        funcs=funcs,
        categories=cats,
        descriptions=desc,
        symbols=syms,
        arities=arity,
        limits=lims,
        aliases=alias,
    )


# --------------------- Evaluation → Outcome ----------------------


class Status(Enum):
    OK = "ok"
    DOMAIN_ERROR = "domain error"
    LIMIT_EXCEEDED = "limit exceeded"
    INDETERMINATE = "indeterminate"


@dataclass
class Outcome:
    label: str
    status: Status
    value: Any = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is Status.OK


def evaluate(index: Index, engine, name: str, *operands: int) -> Outcome:
    """
    Run one operation against engine and wrap the result.

    Domain and limit refusals become an Outcome, as does an undecidable
    primality verdict; anything else propagates. The engine lock is held
    for the whole call.
    """
    label = index.resolve(name)
    want = index.arities[label]
    if len(operands) != want:
        raise UserInputError(
            f"'{label}' takes {want} operand{'s' if want != 1 else ''}, got {len(operands)}."
        )
    fn = index.funcs[label]
    with engine.lock:
        try:
            value = fn(engine, *operands)
        except DomainError as e:
            return Outcome(label, Status.DOMAIN_ERROR, error=e)
        except LimitExceeded as e:
            return Outcome(label, Status.LIMIT_EXCEEDED, error=e)
    if value is Primality.INDETERMINATE:
        return Outcome(label, Status.INDETERMINATE, value=value)
    return Outcome(label, Status.OK, value=value)
