import pytest

from cilisp.diagnostics import Diagnostics
from cilisp.interpreter import Interpreter


@pytest.fixture
def diagnostics():
    """Fresh diagnostics sink per test."""
    return Diagnostics()


@pytest.fixture
def interp(diagnostics):
    return Interpreter(diagnostics=diagnostics, max_depth=100)
