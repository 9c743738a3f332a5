import logging

import pytest

import lam
from lam import config
from lam.compiler.opcodes import Opcode
from lam.errors import LamConfigError, LamUnboundVariable
from lam.interpreter import Interpreter
from lam.types.ast import BinOp, BinaryOp, Int
from lam.types.value import Closure


def test_default_engine_is_the_machine():
    assert Interpreter().engine == "vm"


def test_unknown_engine():
    with pytest.raises(LamConfigError):
        Interpreter("nope")


def test_interpreter_compile_returns_code():
    code = Interpreter().compile("1 + 2")
    assert [ins.op for ins in code] == [Opcode.PUSH_INT, Opcode.PUSH_INT, Opcode.ADD]


def test_eval_across_engines(itp):
    assert itp.eval("let double x = x + x in double 21") == 42


def test_public_api_round_trip():
    term = BinaryOp(BinOp.MUL, Int(6), Int(7))
    assert lam.execute(lam.compile(term)) == 42
    assert lam.run(term) == 42
    assert lam.evaluate(term) == 42
    assert isinstance(lam.run(lam.parse("fun x -> x")), Closure)


def test_public_api_unbound_variable():
    with pytest.raises(LamUnboundVariable):
        lam.compile(lam.parse("x"))


def test_disasm_flag_logs_code(monkeypatch, caplog):
    monkeypatch.setenv("LAM_DISASM", "1")
    caplog.set_level(logging.INFO, logger="lam.compiler.backend_impl")
    assert Interpreter("vm").eval("1 + 2") == 3
    assert any("disassembly" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, False),
        ("", False),
        ("1", True),
        ("TRUE", True),
        (" yes ", True),
        ("on", True),
        ("0", False),
        ("off", False),
    ]
)
def test_flag_from_env(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("LAM_TRACE", raising=False)
    else:
        monkeypatch.setenv("LAM_TRACE", raw)
    assert config.trace_enabled() is expected


@pytest.mark.parametrize("raw,expected", [(None, "vm"), ("  ", "vm"), ("eval", "eval"), (" VM ", "vm")])
def test_default_engine_from_env(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("LAM_ENGINE", raising=False)
    else:
        monkeypatch.setenv("LAM_ENGINE", raw)
    assert config.get_default_engine() == expected


def test_invalid_engine_from_env(monkeypatch):
    monkeypatch.setenv("LAM_ENGINE", "jit")
    with pytest.raises(LamConfigError):
        config.get_default_engine()
