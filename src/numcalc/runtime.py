# runtime.py
from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from importlib.util import find_spec
from typing import Any

from colorama import Fore, Style


@dataclass
class Runtime:
    """
    Settings of the active profile plus the session's debug switch.

    Engines read their limits once, at construction; everything else
    (operand ceiling, abbreviation, tracing) is read through CFG at call time.
    """
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # [tag] trace lines on stderr

    def apply(self, settings: Any) -> None:
        if isinstance(settings, dict):
            self.profile_name = "default"
            section_map = settings
        else:
            self.profile_name = getattr(settings, "name", None) or "default"
            section_map = settings.as_dict()
        self.settings = {str(k).upper(): v for k, v in section_map.items()}

        flag = self.get("BEHAVIOUR.DEBUG")
        if isinstance(flag, bool):
            self.debug = flag

    def get(self, key: str, default: Any = None) -> Any:
        """Dotted lookup into the profile, e.g. 'LIMITS.SEQUENCE'."""
        node: Any = self.settings
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node


_current_runtime: ContextVar[Runtime | None] = ContextVar("numcalc_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


# ---- Dependency check --------------------------------------------------------

def ensure_runtime_deps(strict: bool = True) -> bool:
    """
    Check that the big-integer kernels can be imported.
    Prints the pip command for whatever is missing.
    """
    missing = [name for name in ("gmpy2", "sympy") if find_spec(name) is None]
    if not missing:
        return True

    print(
        f"{Fore.RED}{Style.BRIGHT}numcalc needs {', '.join(missing)}.{Style.RESET_ALL} "
        f"Install with: {Fore.YELLOW}pip install {' '.join(missing)}{Style.RESET_ALL}"
    )
    return not strict
