import pytest

from cas.builtin.env_builtin import register
from cas.types.environment import Environment

# Configuration comes from the process environment. Clear the CAS_* variables
# so that a developer's shell never changes what the tests observe; tests that
# need a setting apply it with monkeypatch.setenv.


@pytest.fixture(autouse=True)
def _isolate_cas_config(monkeypatch):
    monkeypatch.delenv("CAS_DEFINITIONS_PATH", raising=False)
    monkeypatch.delenv("CAS_MAX_DEPTH", raising=False)


@pytest.fixture
def env():
    """Fresh environment with constants and built-ins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def empty_env():
    return Environment()
