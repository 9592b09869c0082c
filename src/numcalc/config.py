# src/numcalc/config.py
"""
Profiles: TOML files in <workspace>/profiles that set the operation limits,
the operand ceiling and the result abbreviation for a session.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib as toml
except ImportError:
    import tomli as toml  # type: ignore

from numcalc.utility import UserInputError
from numcalc.workspace import ensure_workspace_seeded, workspace_dir

META_SECTION = "PROFILE"


@dataclass
class Settings:
    """A loaded profile. `data` maps upper-cased section names to their tables."""
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


def _profile_path(name: str) -> Path:
    return workspace_dir() / "profiles" / f"{name}.toml"


def _read_profile(path: Path) -> tuple[dict[str, Any], str, str]:
    """Parse one profile file into (sections, name, description)."""
    try:
        with path.open("rb") as f:
            raw = toml.load(f)
    except toml.TOMLDecodeError as e:
        # the decoder's message already carries "(at line L, column C)"
        raise UserInputError(f"reading {path.name}: {e}") from None

    sections = {str(k).upper(): v for k, v in raw.items()}
    meta = sections.pop(META_SECTION, None)
    if not isinstance(meta, dict):
        meta = {}
    name = str(meta.get("name") or path.stem)
    description = " ".join(str(meta.get("description") or "").split())
    return sections, name, description or "(no description)"


def list_all_profiles() -> list[str]:
    """Profile names (file stems) in the workspace, seeding it first."""
    ensure_workspace_seeded()
    pdir = workspace_dir() / "profiles"
    return sorted(p.stem for p in pdir.glob("*.toml")) if pdir.is_dir() else []


def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    out = []
    for stem in list_all_profiles():
        try:
            _, name, desc = _read_profile(_profile_path(stem))
        except UserInputError:
            name, desc = stem, "(unreadable)"
        out.append((name, desc))
    return sorted(out, key=lambda t: t[0].lower())


def has_profile(name: str) -> bool:
    return _profile_path(name).is_file()


def load_settings(name: str | None) -> Settings:
    """
    Load a profile by name ('default' when empty).

    Section names are case-insensitive. A missing file or malformed TOML
    raises UserInputError.
    """
    name = name or "default"
    path = _profile_path(name)
    if not path.is_file():
        raise UserInputError(f"profile '{name}' not found at {path}")

    data, resolved, description = _read_profile(path)
    return Settings(data=data, name=resolved, description=description, _source=path)
