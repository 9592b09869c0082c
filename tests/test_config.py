# tests/test_config.py
"""
Profiles, runtime settings, limits and operand parsing.

Run: pytest -v
"""

from __future__ import annotations

import pytest

from numcalc.config import has_profile, list_all_profiles, load_settings
from numcalc.engine import Engine
from numcalc.errors import LimitExceeded
from numcalc.fmt import abbr_int, digit_summary, format_factorization
from numcalc.limits import DEFAULT_LIMITS, OperationLimits
from numcalc.runtime import APPLY, CFG
from numcalc.runtime import current as _rt_current
from numcalc.utility import UserInputError, dec_digits, parse_operand
from numcalc.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir

# ---------- operand parsing ---------------------------------------------------

OPERANDS = [
    ("0",            0),
    ("-0",           0),
    ("42",           42),
    ("-42",          -42),
    ("  17 ",        17),
    ("1_000_000",    1_000_000),
    ("007",          7),
]


@pytest.mark.parametrize("text,expected", OPERANDS, ids=[t.strip() or "blank" for t, _ in OPERANDS])
def test_parse_operand_accepts(text, expected):
    assert parse_operand(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "-", "+5", "--5", "1e5", "3.0", "0x1f", "12a", "1 2"])
def test_parse_operand_rejects(text):
    with pytest.raises(UserInputError, match="Invalid input"):
        parse_operand(text)


def test_parse_operand_digit_ceiling():
    assert parse_operand("9" * 10_000) == 10**10_000 - 1
    assert parse_operand("-" + "9" * 10_000) == -(10**10_000 - 1)
    with pytest.raises(UserInputError):
        parse_operand("1" * 10_001)


def test_parse_operand_ceiling_from_profile():
    APPLY({"BEHAVIOUR": {"MAX_DIGITS": 5}})
    assert parse_operand("99999") == 99999
    with pytest.raises(UserInputError):
        parse_operand("100000")


def test_dec_digits():
    for n in (0, 1, 9, 10, 99, 100, 10**50 - 1, 10**50, -12345):
        assert dec_digits(n) == len(str(abs(n)))


# ---------- runtime -----------------------------------------------------------


def test_cfg_dotted_lookup():
    APPLY({"LIMITS": {"SEQUENCE": 50}, "BEHAVIOUR": {"DEBUG": True}})
    assert CFG("LIMITS.SEQUENCE") == 50
    assert CFG("LIMITS.MISSING", "x") == "x"
    assert CFG("NOPE.NOPE") is None
    assert _rt_current().debug is True


# ---------- limits ------------------------------------------------------------


def test_limits_default_when_unset():
    assert OperationLimits.from_settings() == DEFAULT_LIMITS


def test_limits_from_settings():
    APPLY({"LIMITS": {"FACTORIZATION": "6d", "sequence": 50, "Int_Partition": 100}})
    lim = OperationLimits.from_settings()
    assert lim.factorization == 999_999
    assert lim.sequence == 50
    assert lim.int_partition == 100
    assert lim.set_partition == DEFAULT_LIMITS.set_partition


@pytest.mark.parametrize("section", [
    {"LIMITS": {"FACTORISATION": 10}},
    {"LIMITS": {"SEQUENCE": True}},
    {"LIMITS": {"SEQUENCE": -1}},
    {"LIMITS": {"SEQUENCE": "lots"}},
    {"LIMITS": 5},
], ids=["unknown_key", "boolean", "negative", "not_a_number", "not_a_table"])
def test_limits_rejects_bad_values(section):
    APPLY(section)
    with pytest.raises(UserInputError):
        OperationLimits.from_settings()


def test_engine_uses_its_own_limits():
    tight = Engine(OperationLimits(factorization=999_999, sequence=20, set_partition=10))
    with pytest.raises(LimitExceeded):
        tight.factor(1_000_000)
    with pytest.raises(LimitExceeded):
        tight.factorial(21)
    with pytest.raises(LimitExceeded):
        tight.set_partition(11)
    assert tight.factorial(20) == 2432902008176640000

    # a default engine is unaffected
    assert Engine().factor(1_000_000) == {2: 6, 5: 6}


def test_limit_exceeded_message_abbreviates_huge_values():
    with pytest.raises(LimitExceeded) as e:
        Engine().isqrt(10**5000)
    assert "5001-digit number" in str(e.value)
    assert e.value.name == "isqrt"


# ---------- workspace and profiles --------------------------------------------


def test_workspace_follows_env(workspace):
    assert workspace_dir() == workspace.resolve()


def test_seed_copies_packaged_profiles(workspace):
    ensure_workspace_seeded()
    assert (workspace / "profiles" / "default.toml").exists()
    assert (workspace / "profiles" / "quick.toml").exists()

    _, seeded, copied = ensure_workspace_seeded()
    assert not seeded
    assert copied["profiles"] == 0

    _, copied = seed_workspace(overwrite=True)
    assert copied["profiles"] >= 2


def test_default_profile_matches_default_limits():
    ensure_workspace_seeded()
    assert has_profile("default")
    assert "quick" in list_all_profiles()

    settings = load_settings("default")
    assert settings.name == "default"
    assert "PROFILE" not in settings.as_dict()
    APPLY(settings)
    assert OperationLimits.from_settings() == DEFAULT_LIMITS
    assert _rt_current().profile_name == "default"


def test_quick_profile_tightens_limits():
    ensure_workspace_seeded()
    APPLY(load_settings("quick"))
    lim = OperationLimits.from_settings()
    assert lim.sequence == 999
    assert lim.factorization == 999_999_999


def test_missing_profile_is_user_error():
    with pytest.raises(UserInputError, match="not found"):
        load_settings("does-not-exist")


def test_malformed_profile_reports_position(workspace):
    ensure_workspace_seeded()
    (workspace / "profiles" / "broken.toml").write_text("[LIMITS]\nSEQUENCE = = 3\n", encoding="utf-8")
    try:
        with pytest.raises(UserInputError, match="broken.toml.*line 2"):
            load_settings("broken")
    finally:
        (workspace / "profiles" / "broken.toml").unlink()


def test_section_names_are_case_insensitive(workspace):
    ensure_workspace_seeded()
    path = workspace / "profiles" / "lower.toml"
    path.write_text("[limits]\nsequence = 12\n", encoding="utf-8")
    try:
        APPLY(load_settings("lower"))
        assert OperationLimits.from_settings().sequence == 12
    finally:
        path.unlink()


# ---------- formatting --------------------------------------------------------


def test_abbr_int_uses_formatting_section():
    n = 10**100 + 7
    assert abbr_int(n).startswith("1000000000")
    assert "…" in abbr_int(n)
    APPLY({"FORMATTING": {"NUM_ABBR_THRESHOLD": 200}})
    assert abbr_int(n) == str(n)
    assert abbr_int(-5) == "-5"


def test_format_helpers():
    assert format_factorization({}) == "1"
    assert format_factorization({5: 1, 2: 3}) == "2^3 × 5"
    assert digit_summary(7) == "1 digit"
    assert digit_summary(10**2569) == "2,570 digits"
