# src/numcalc/display.py
from __future__ import annotations

import sys
from collections import defaultdict

from colorama import Fore, Style

from numcalc import __version__
from numcalc.config import list_profiles_with_descriptions
from numcalc.fmt import abbr_int, digit_summary
from numcalc.limits import DEFAULT_LIMITS, OperationLimits
from numcalc.registry import Index, Outcome, Status
from numcalc.runtime import current as _rt_current


def _screen_header() -> str:
    return f"{Fore.YELLOW}{Style.BRIGHT}Number Calculator v{__version__}{Style.RESET_ALL}"


def _group_by_category(index: Index) -> dict[str, list[str]]:
    groups: dict[str, list[str]] = defaultdict(list)
    for label in index.funcs:
        groups[index.categories.get(label, "General")].append(label)
    return groups


def _operand_names(index: Index, label: str) -> str:
    return " ".join(["x", "y"][: index.arities[label]])


def show_operation_list(index: Index, limits: OperationLimits = DEFAULT_LIMITS) -> None:
    """Operations grouped by category; ceilings are those of `limits`."""
    groups = _group_by_category(index)
    print(_screen_header())
    print()
    print(f"{Fore.YELLOW}Available operations: {len(index.funcs)}{Style.RESET_ALL}")
    print()
    for cat in sorted(groups, key=str.lower):
        print(f"{Fore.CYAN}{cat}:{Style.RESET_ALL}")
        for lbl in sorted(groups[cat], key=str.lower):
            usage = f"{lbl} {_operand_names(index, lbl)}"
            line = f"  {Fore.GREEN}{usage:<24}{Style.RESET_ALL} {index.symbols.get(lbl, ''):<10}"
            desc = index.descriptions.get(lbl, "")
            if desc:
                line += f" — {desc}"
            key = index.limits.get(lbl)
            if key:
                line += f" {Style.DIM}(limit: {limits.describe(key)}){Style.RESET_ALL}"
            print(line)
        print()


def render_value(value: object, full: bool = False) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        return str(value)
    return str(value) if full else abbr_int(value)


def print_outcome(index: Index, outcome: Outcome, operands: tuple[int, ...], full: bool = False) -> None:
    """
    One result line such as 'φ(n) [360] = 96', with a digit count for long integers.
    Refusals go to stderr in red, an undecided primality test in yellow.
    """
    sym = index.symbols.get(outcome.label, outcome.label)
    args = ", ".join(render_value(x, full) for x in operands)
    head = f"{sym} [{args}]"

    if outcome.status is Status.OK:
        text = render_value(outcome.value, full)
        line = f"{Fore.GREEN}{head}{Style.RESET_ALL} = {text}"
        if isinstance(outcome.value, int) and not isinstance(outcome.value, bool) and len(text) > 20:
            line += f"  {Style.DIM}({digit_summary(outcome.value)}){Style.RESET_ALL}"
        print(line)
    elif outcome.status is Status.INDETERMINATE:
        print(f"{Fore.GREEN}{head}{Style.RESET_ALL} = {Fore.YELLOW}{outcome.value}{Style.RESET_ALL}")
        if _rt_current().debug:
            print("[debug] operand is beyond the deterministic witness table", file=sys.stderr)
    else:
        kind = "Limit exceeded" if outcome.status is Status.LIMIT_EXCEEDED else "Domain error"
        print(f"{Fore.RED}{kind}:{Style.RESET_ALL} {head}: {outcome.error}", file=sys.stderr)


def print_profiles_with_descriptions(active: str | None = None) -> None:
    pairs = list_profiles_with_descriptions()
    if not pairs:
        print("\nAvailable profiles: (none)")
        return
    lines = []
    for name, desc in pairs:
        mark = "*" if active and name == active else " "
        lines.append(f"{mark} {name:13} — {desc}")
    print("\nAvailable profiles:\n  " + "\n  ".join(lines))


def show_intro_help() -> None:
    print()
    print("Enter an operation and its operands, e.g. 'factor 360' or 'binomial 52 5'.")
    print("  h, help       list all operations")
    print("  p, profiles   list profiles; type a profile name to switch")
    print("  full on|off   show results without abbreviation")
    print("  debug on|off  trace sieve, table and primality decisions on stderr")
    print("  q, quit       leave")
