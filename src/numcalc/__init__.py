from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("numcalc")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import has_profile, load_settings
from .engine import Engine
from .errors import (
    DivisionByZero,
    DomainError,
    EngineError,
    InvalidModulus,
    LimitExceeded,
    NegativeExponent,
    NotCoprime,
)
from .limits import DEFAULT_LIMITS, OperationLimits
from .primes import Primality
from .registry import Outcome, Status, discover, evaluate
from .runtime import APPLY, CFG
from .utility import UserInputError, parse_operand
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "DEFAULT_LIMITS",
    "DivisionByZero",
    "DomainError",
    "Engine",
    "EngineError",
    "InvalidModulus",
    "LimitExceeded",
    "NegativeExponent",
    "NotCoprime",
    "OperationLimits",
    "Outcome",
    "Primality",
    "Status",
    "UserInputError",
    "__version__",
    "discover",
    "evaluate",
    "has_profile",
    "load_settings",
    "parse_operand",
    "workspace_dir",
]
