# tests/test_numcalc.py
"""
Every registered operation, called through the registry the way the CLI calls it.

Run: pytest -v
"""

from __future__ import annotations

import threading

import pytest

from numcalc.engine import Engine
from numcalc.errors import DivisionByZero, LimitExceeded, NegativeExponent, NotCoprime
from numcalc.primes import Primality
from numcalc.limits import DEFAULT_LIMITS, OperationLimits
from numcalc.registry import Status, evaluate
from numcalc.utility import UserInputError

# ---------- results -----------------------------------------------------------

TEST_CASES = [
    # Arithmetic
    ("add",              (2**64, 1),      2**64 + 1),
    ("subtract",         (3, 10),         -7),
    ("multiply",         (-6, 7),         -42),
    ("negate",           (5,),            -5),
    ("negate",           (-5,),           5),
    ("square",           (-12,),          144),
    ("cube",             (-3,),           -27),
    ("power_of_two",     (10,),           1024),
    ("power_of_three",   (5,),            243),
    ("power_swapped",    (3, 2),          8),
    ("divide",           (7, 2),          3),
    ("divide",           (-7, 2),         -3),
    ("divide",           (7, -2),         -3),
    ("mod",              (-7, 3),         2),
    ("mod_inverse",      (3, 11),         4),
    ("power",            (2, 100),        2**100),
    ("power",            (-3, 3),         -27),
    ("isqrt",            (99,),           9),
    ("isqrt",            (10**40,),       10**20),
    ("gcd",              (12, 18),        6),
    ("lcm",              (4, 6),          12),

    # Primes
    ("is_prime",         (2,),            Primality.PRIME),
    ("is_prime",         (1,),            Primality.COMPOSITE),
    ("is_prime",         (97,),           Primality.PRIME),
    ("is_prime",         (100,),          Primality.COMPOSITE),
    ("is_prime",         (2**31 - 1,),    Primality.PRIME),
    ("is_prime",         (3215031751,),   Primality.COMPOSITE),
    ("primes",           (100,),          25),
    ("primes",           (10,),           4),
    ("primorial",        (10,),           210),
    ("primorial",        (30,),           6469693230),

    # Divisors and multiplicative functions
    ("factor",           (360,),          "2^3 × 3^2 × 5"),
    ("factor",           (-97,),          "97"),
    ("divisors",         (12,),           "[1, 2, 3, 4, 6, 12]"),
    ("num_divisors",     (360,),          24),
    ("sum_divisors",     (28,),           56),
    ("sigma_k",          (2, 6),          50),
    ("little_omega",     (360,),          3),
    ("big_omega",        (360,),          6),
    ("totient",          (36,),           12),
    ("jordan_totient",   (6, 2),          24),
    ("mobius",           (30,),           -1),
    ("mobius",           (12,),           0),
    ("mobius",           (1,),            1),
    ("carmichael",       (561,),          80),
    ("carmichael",       (24,),           4),
    ("carmichael",       (48,),           8),
    ("carmichael",       (8,),            2),

    # Combinatorics
    ("factorial",        (10,),           3628800),
    ("double_factorial", (7,),            105),
    ("derangement",      (5,),            44),
    ("permutation",      (5, 3),          60),
    ("permutation",      (3, 5),          0),
    ("binomial",         (52, 5),         2598960),
    ("catalan",          (10,),           16796),
    ("bell",             (4,),            15),
    ("stirling2",        (4, 2),          7),
    ("stirling2",        (4, 0),          1),
    ("partitions",       (5,),            7),
    ("partitions",       (100,),          190569292),
    ("partitions_k",     (5, 2),          2),
    ("polygon",          (3, 4),          10),
    ("polygon",          (5, 3),          12),
    ("polygon_centered", (6, 3),          19),

    # Sequences
    ("fibonacci",        (10,),           55),
    ("lucas",            (10,),           123),

    # Residues
    ("jacobi",           (1001, 9907),    -1),
    ("jacobi",           (2, 15),         1),
    ("quad_residues",    (7,),            "[1, 2, 4]"),
]

TEST_IDS = [f"{op}_{'_'.join(str(x) for x in args)}"[:60] for op, args, _ in TEST_CASES]


@pytest.mark.parametrize("op,operands,expected", TEST_CASES, ids=TEST_IDS)
def test_operation_result(index, engine, op, operands, expected):
    out = evaluate(index, engine, op, *operands)
    assert out.status is Status.OK, f"{op}{operands}: {out.error}"
    assert out.value == expected


# ---------- refusals ----------------------------------------------------------

REFUSALS = [
    ("divide",        (5, 0),          Status.DOMAIN_ERROR),
    ("mod",           (5, 0),          Status.DOMAIN_ERROR),
    ("mod_inverse",   (4, 8),          Status.DOMAIN_ERROR),
    ("power",         (2, -1),         Status.DOMAIN_ERROR),
    ("power",         (2, 100_000),    Status.LIMIT_EXCEEDED),
    ("power_of_two",  (100_000,),      Status.LIMIT_EXCEEDED),
    ("power_of_three", (-1,),          Status.DOMAIN_ERROR),
    ("power_swapped", (100_000, 2),    Status.LIMIT_EXCEEDED),
    ("isqrt",         (-4,),           Status.DOMAIN_ERROR),
    ("lcm",           (0, 5),          Status.DOMAIN_ERROR),
    ("factor",        (10**12,),       Status.LIMIT_EXCEEDED),
    ("factor",        (1,),            Status.DOMAIN_ERROR),
    ("divisors",      (0,),            Status.DOMAIN_ERROR),
    ("totient",       (0,),            Status.DOMAIN_ERROR),
    ("mobius",        (0,),            Status.DOMAIN_ERROR),
    ("carmichael",    (-5,),           Status.DOMAIN_ERROR),
    ("primes",        (10**7,),        Status.LIMIT_EXCEEDED),
    ("factorial",     (-1,),           Status.DOMAIN_ERROR),
    ("factorial",     (10_000,),       Status.LIMIT_EXCEEDED),
    ("stirling2",     (601, 2),        Status.LIMIT_EXCEEDED),
    ("partitions",    (1000,),         Status.LIMIT_EXCEEDED),
    ("polygon",       (2, 5),          Status.DOMAIN_ERROR),
    ("jacobi",        (3, 8),          Status.DOMAIN_ERROR),
    ("quad_residues", (100_000,),      Status.LIMIT_EXCEEDED),
    ("is_prime",      (10**24 + 7,),   Status.INDETERMINATE),
    ("is_prime",      (2**4253 - 1,),  Status.INDETERMINATE),
]

REFUSAL_IDS = [f"{op}_{status.name}" for op, _, status in REFUSALS]


@pytest.mark.parametrize("op,operands,status", REFUSALS, ids=REFUSAL_IDS)
def test_operation_refusal(index, engine, op, operands, status):
    out = evaluate(index, engine, op, *operands)
    assert out.status is status
    assert not out.ok


def test_refusal_carries_typed_error(index, engine):
    assert isinstance(evaluate(index, engine, "divide", 1, 0).error, DivisionByZero)
    assert isinstance(evaluate(index, engine, "mod_inverse", 4, 8).error, NotCoprime)
    assert isinstance(evaluate(index, engine, "power", 2, -1).error, NegativeExponent)

    err = evaluate(index, engine, "factor", 10**12).error
    assert isinstance(err, LimitExceeded)
    assert err.name == "factorization"
    assert err.limit == 999_999_999_999
    assert err.value == 10**12


def test_indeterminate_is_not_composite(index, engine):
    out = evaluate(index, engine, "is_prime", 10**24 + 7)
    assert out.value is Primality.INDETERMINATE
    assert out.error is None


# ---------- registry ----------------------------------------------------------


def test_aliases_resolve_to_labels(index, engine):
    assert evaluate(index, engine, "phi", 36).label == "totient"
    assert evaluate(index, engine, "Sum-Divisors", 28).label == "sum_divisors"
    assert evaluate(index, engine, "pi", 100).value == 25
    assert index.resolve("CHOOSE") == "binomial"


def test_unknown_operation_is_user_error(index, engine):
    with pytest.raises(UserInputError):
        evaluate(index, engine, "no_such_operation", 1)


def test_wrong_arity_is_user_error(index, engine):
    with pytest.raises(UserInputError):
        evaluate(index, engine, "factor", 1, 2)
    with pytest.raises(UserInputError):
        evaluate(index, engine, "binomial", 5)


def test_arities_follow_signatures(index):
    assert index.arities["factor"] == 1
    assert index.arities["binomial"] == 2
    assert index.arities["jordan_totient"] == 2


def test_discovery_counts_rough_sanity(index):
    """Guardrail: every operation module got imported."""
    assert len(index.funcs) >= 45, f"too few operations discovered: {len(index.funcs)}"
    cats = set(index.categories.values())
    assert {"Arithmetic", "Primes", "Combinatorics", "Sequences", "Residues"} <= cats
    assert all(index.symbols[lbl] for lbl in index.funcs)


def test_limit_text_follows_engine_limits(index):
    assert index.limits["factorial"] == "sequence"
    assert index.limits["power_of_two"] == "exponent"
    assert DEFAULT_LIMITS.describe("sequence") == "4 digits"
    assert DEFAULT_LIMITS.describe("set_partition") == "600"
    assert DEFAULT_LIMITS.describe("mersenne") == "Mersenne numbers up to 1000 digits"
    assert OperationLimits(sequence=999).describe("sequence") == "3 digits"


def test_evaluate_waits_for_engine_lock(index):
    engine = Engine()
    held, release = threading.Event(), threading.Event()
    results = []

    def hold_lock():
        with engine.lock:
            held.set()
            release.wait(5)

    holder = threading.Thread(target=hold_lock)
    holder.start()
    assert held.wait(5)

    worker = threading.Thread(target=lambda: results.append(evaluate(index, engine, "factor", 360)))
    worker.start()
    worker.join(0.2)
    assert worker.is_alive()
    assert results == []

    release.set()
    worker.join(5)
    holder.join(5)
    assert results[0].value == "2^3 × 3^2 × 5"
