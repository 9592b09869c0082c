# tests/conftest.py
from __future__ import annotations

import pytest

from numcalc.engine import Engine
from numcalc.registry import discover
from numcalc.runtime import Runtime, _current_runtime


@pytest.fixture(scope="session", autouse=True)
def workspace(tmp_path_factory):
    """Point NUMCALC_HOME at a throwaway folder for the whole run."""
    root = tmp_path_factory.mktemp("numcalc_home")
    with pytest.MonkeyPatch.context() as mp:
        mp.setenv("NUMCALC_HOME", str(root))
        yield root


@pytest.fixture(autouse=True)
def fresh_runtime():
    """Each test starts with empty settings and debug off."""
    token = _current_runtime.set(Runtime())
    yield
    _current_runtime.reset(token)


@pytest.fixture(scope="session")
def index():
    """Discover the operation modules once."""
    return discover()


@pytest.fixture(scope="session")
def engine():
    """One engine shared by the whole session, as the CLI shares one."""
    return Engine()
