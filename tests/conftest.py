import pytest

from lam.interpreter import Interpreter

# Language-level tests run twice:
# 1) with the compiler and the SECD machine ["vm"]
# 2) with the reference tree-walking evaluator ["eval"]
# Tests that take the `itp` fixture get an Interpreter whose default engine
# has been switched for the current run.


@pytest.fixture(params=["vm", "eval"])
def engine(request):
    return request.param


@pytest.fixture
def itp(engine, monkeypatch):
    monkeypatch.setattr(Interpreter, "DefaultEngine", engine)
    return Interpreter()
