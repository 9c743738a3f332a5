import pytest

import lam
from lam.__main__ import main
from lam.compiler.compiler import compile_module
from lam.compiler.opcodes import Opcode
from lam.errors import LamDepthExceeded
from lam.evaluation.evaluator import evaluate
from lam.interpreter import Interpreter
from lam.types.ast import BinOp, BinaryOp, Bool, IfThenElse, Int, LetIn, Var

# Well past Python's default recursion limit of 1000.
DEPTH = 3000

LONG_SUM = " + ".join(["1"] * DEPTH)


def right_nested_sum(n):
    term = Int(1)
    for _ in range(n - 1):
        term = BinaryOp(BinOp.ADD, Int(1), term)
    return term


def let_chain(n):
    # let x = 1 in let x = x + 1 in ... in x
    term = Var("x")
    for _ in range(n - 1):
        term = LetIn("x", BinaryOp(BinOp.ADD, Var("x"), Int(1)), term)
    return LetIn("x", Int(1), term)


def if_chain(n):
    term = Int(7)
    for _ in range(n):
        term = IfThenElse(Bool(True), term, Int(0))
    return term


def test_long_sum_compiles_and_runs():
    code = compile_module(lam.parse(LONG_SUM))
    assert len(code) == 2 * DEPTH - 1
    assert code[-1].op == Opcode.ADD
    assert lam.execute(code) == DEPTH


@pytest.mark.parametrize(
    "term,expected",
    [
        (right_nested_sum(DEPTH), DEPTH),
        (let_chain(DEPTH), DEPTH),
        (if_chain(DEPTH), 7),
    ]
)
def test_deep_terms_compile_and_run_on_the_machine(term, expected):
    assert lam.run(term) == expected


def test_deep_let_chain_unwinds_its_scopes():
    code = compile_module(let_chain(DEPTH))
    assert sum(ins.op == Opcode.PUSH_SCOPE for ins in code) == DEPTH
    assert sum(ins.op == Opcode.POP_SCOPE for ins in code) == DEPTH


@pytest.mark.parametrize("depth", [1, 10, 100])
def test_parenthesised_expression(itp, depth):
    source = "(" * depth + "1" + ")" * depth
    assert itp.eval(source) == 1


def test_parenthesised_left_nested_sum():
    source = "(" * 100 + "1" + " + 1)" * 100
    assert Interpreter("vm").eval(source) == 101


def test_nesting_beyond_the_reader_is_reported():
    with pytest.raises(LamDepthExceeded):
        lam.parse("(" * 10000 + "1" + ")" * 10000)


def test_reference_evaluator_reports_exhausted_depth():
    with pytest.raises(LamDepthExceeded):
        evaluate(right_nested_sum(DEPTH))


@pytest.fixture
def program(tmp_path):
    def write(source: str):
        path = tmp_path / "deep.lam"
        path.write_text(source, encoding="utf-8")
        return str(path)
    return write


def test_cli_runs_long_sum(program, capsys, monkeypatch):
    monkeypatch.delenv("LAM_ENGINE", raising=False)
    assert main([program(LONG_SUM), "--quiet"]) == 0
    assert capsys.readouterr().out == f"{DEPTH}\n"


def test_cli_prints_long_sum_without_failing(program, capsys, monkeypatch):
    monkeypatch.delenv("LAM_ENGINE", raising=False)
    assert main([program(LONG_SUM)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("term  : ")
    assert f"value : {DEPTH}" in out


def test_cli_reports_depth_on_the_reference_engine(program, capsys):
    assert main([program(LONG_SUM), "--engine", "eval"]) == 1
    assert "error: LamDepthExceeded" in capsys.readouterr().err


def test_cli_reports_unreadable_nesting(program, capsys):
    assert main([program("(" * 10000 + "1" + ")" * 10000), "--quiet"]) == 1
    assert "error: LamDepthExceeded" in capsys.readouterr().err
