# src/numcalc/cli.py

"""
Number Calculator - exact integer number theory and combinatorics

Description:
    Evaluates one operation (primality, factorization, divisor functions,
    partitions, recurrences, residues, ...) on arbitrary-size integers,
    or runs an interactive session against a single shared engine.

usage: see numcalc -h
"""

from __future__ import annotations

import argparse
import faulthandler
import os
import platform
import sys
import textwrap
import threading
import traceback
from importlib.resources import files as pkg_files

from colorama import Fore, Style
from colorama import init as colorama_init

from numcalc import __version__ as _ver
from numcalc import config as CONFIG
from numcalc.display import (
    print_outcome,
    print_profiles_with_descriptions,
    show_intro_help,
    show_operation_list,
)
from numcalc.engine import Engine
from numcalc.limits import OperationLimits
from numcalc.registry import Index, Status, discover, evaluate
from numcalc.runtime import APPLY, ensure_runtime_deps
from numcalc.runtime import current as _rt_current
from numcalc.utility import (
    UserInputError,
    ensure_int_str_digits,
    flatten_dotted,
    parse_operand,
)
from numcalc.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    faulthandler.enable()

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook

    def _thread_excepthook(args):
        sys.stderr.write("\n[UNCAUGHT THREAD EXCEPTION]\n")
        traceback.print_exception(args.exc_type, args.exc_value, args.exc_traceback, file=sys.stderr)
        sys.stderr.flush()
    threading.excepthook = _thread_excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    if msg.startswith("Invalid input:"):
        msg = msg.replace("Invalid input:", f"{Fore.RED}Invalid input:{Style.RESET_ALL}", 1)
    else:
        msg = f"{Fore.RED}Error:{Style.RESET_ALL} {msg}"
    print(msg, file=sys.stderr)


def _configure_text_streams() -> None:
    if os.environ.get("PYTHONIOENCODING"):
        return
    # only redirected output; a TTY is left as-is
    if sys.stdout.isatty():
        return
    enc = (sys.stdout.encoding or "").lower()
    if platform.system() == "Windows" or enc in ("", "ascii", "us-ascii"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      init
          Create the workspace folder and copy the packaged profiles if missing.

      init overwrite
          Replace the workspace profiles with the packaged ones.
          Requires environment variable NUMCALC_DEV=1.

      list
          List all available operations.

      profiles
          List the profiles in the workspace.

      where
          Show the workspace and package paths.

    examples:
      numcalc is_prime 2305843009213693951
      numcalc factor 360
      numcalc binomial 52 5
      numcalc --profile quick
    """)

    p = argparse.ArgumentParser(
        prog="numcalc",
        description="Number Calculator — exact integer number theory & combinatorics",
        usage=(
            "numcalc [OPERATION X [Y]] [--profile NAME] [--full] [--debug]\n"
            "       numcalc list | profiles | where | init [overwrite]\n"
            "       numcalc -h | --help\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="OPERATION X [Y]",
                   help="operation name followed by its integer operands")
    p.add_argument("--profile", default=None, help="Profile from the workspace (default: 'default')")
    p.add_argument("--full", action="store_true", help="Print long results without abbreviation")
    p.add_argument("--debug", action="store_true", help="Trace sieve, table and primality decisions on stderr")
    p.add_argument("--version", action="version", version=f"numcalc {_ver}")
    return p


def _apply_profile(name: str, debug: bool) -> OperationLimits:
    """Load and install a profile; return the limits a new engine should use."""
    selected = CONFIG.load_settings(name)
    APPLY(selected)
    if debug:
        _rt_current().debug = True
    ensure_int_str_digits()

    if _rt_current().debug:
        print(f"[debug] active profile: {selected.name}", file=sys.stderr)
        if selected._source:
            print(f"[debug] profile file: {selected._source}", file=sys.stderr)
        flat = flatten_dotted(selected.as_dict())
        for k in sorted(flat, key=str.lower):
            print(f"        {k:.<40} {flat[k]!r}", file=sys.stderr)
    return OperationLimits.from_settings()


def _split_operation(index: Index, tokens: list[str]) -> tuple[str, tuple[int, ...]]:
    if not tokens:
        raise UserInputError("no operation given.")
    label = index.resolve(tokens[0])
    want = index.arities[label]
    operands = tokens[1:]
    if len(operands) != want:
        names = ("X", "Y")[:want]
        raise UserInputError(f"usage: {label} {' '.join(names)}")
    return label, tuple(parse_operand(t, label="operand") for t in operands)


def run_once(index: Index, engine: Engine, tokens: list[str], full: bool = False) -> int:
    """Evaluate one 'OP X [Y]' request and print it. Returns the exit code."""
    label, operands = _split_operation(index, tokens)
    outcome = evaluate(index, engine, label, *operands)
    print_outcome(index, outcome, operands, full=full)
    if outcome.status in (Status.OK, Status.INDETERMINATE):
        return 0
    return 1


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        if "--debug" in (argv if argv is not None else sys.argv):
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)
    _configure_text_streams()

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)

    _install_loud_error_handlers(args.debug)

    if not ensure_runtime_deps(strict=True):
        return 1

    items = list(args.items)
    head = items[0].lower() if items else None

    # commands that need no profile
    if head == "init":
        if len(items) == 2 and items[1] == "overwrite":
            if os.environ.get("NUMCALC_DEV") != "1":
                print("Refusing to overwrite: set NUMCALC_DEV=1 to enable developer overwrite.")
                return 2
            ws, copied = seed_workspace(overwrite=True)
            print(f"Workspace ready at: {ws} (overwrote existing files)")
        else:
            ws, _, copied = ensure_workspace_seeded()
            print(f"Workspace ready at: {ws}")
        print(f"Copied -> profiles: {copied.get('profiles', 0)}")
        return 0
    if head == "where":
        print(f"Workspace: {workspace_dir()}")
        print(f"Package:   {pkg_files('numcalc')}")
        return 0

    ensure_workspace_seeded()
    index = discover()
    if args.debug:
        print(f"[debug] discovered operations: {len(index.funcs)}", file=sys.stderr)

    if head == "profiles":
        print_profiles_with_descriptions(args.profile or "default")
        return 0

    profile_name = args.profile or "default"
    if args.profile and not CONFIG.has_profile(args.profile):
        raise UserInputError(
            f"unknown profile '{args.profile}'. Available profiles: {', '.join(CONFIG.list_all_profiles())}"
        )
    limits = _apply_profile(profile_name, args.debug)
    if head == "list":
        show_operation_list(index, limits)
        return 0
    engine = Engine(limits)

    # --- one-shot path ---
    if items:
        return run_once(index, engine, items, full=args.full)

    return _repl(index, engine, profile_name, args)


def _repl(index: Index, engine: Engine, profile_name: str, args) -> int:
    print(f"{Fore.YELLOW}{Style.BRIGHT}Number Calculator v{_ver} — exact integer number theory{Style.RESET_ALL}")

    full = bool(args.full)
    current_profile = profile_name
    while True:
        try:
            prompt = f"\nProfile: {current_profile} — Enter an operation and operands (h=Help, q=Quit): "
            user_input = input(prompt).strip()

            low = user_input.lower()
            if low in {"", "q", "quit"}:
                break

            if low in {"h", "help"}:
                show_operation_list(index, engine.limits)
                show_intro_help()
                continue

            if low in {"p", "profiles"}:
                print_profiles_with_descriptions(current_profile)
                continue

            parts = low.split()
            if parts[0] in {"full", "debug"}:
                rt = _rt_current()
                if len(parts) == 1 or parts[1] == "status":
                    state = full if parts[0] == "full" else rt.debug
                    print(f"{parts[0].capitalize()} is currently {'ON' if state else 'OFF'}.")
                elif parts[1] in {"on", "off"}:
                    flag = parts[1] == "on"
                    if parts[0] == "full":
                        full = flag
                    else:
                        rt.debug = flag
                    print(f"{parts[0].capitalize()} {'enabled' if flag else 'disabled'} for this session.")
                else:
                    print(f"Usage: {parts[0].upper()} [on|off|status]")
                continue

            # profile switch rebuilds the engine, limits are fixed per engine
            if len(parts) == 1 and parts[0] not in index.funcs and CONFIG.has_profile(user_input):
                engine = Engine(_apply_profile(user_input, False))
                current_profile = user_input
                print(f"Applied profile: {current_profile}")
                continue

            run_once(index, engine, user_input.split(), full=full)

        except UserInputError as e:
            _print_user_error(str(e))
            continue
        except (EOFError, KeyboardInterrupt):
            print()
            break
        except Exception as e:
            if _rt_current().debug:
                traceback.print_exc()
            else:
                _print_user_error(f"{e.__class__.__name__}: {e}")
            continue
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
