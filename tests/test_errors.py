import pytest

from lam.errors import (
    LamCorruptContinuation,
    LamDivisionByZero,
    LamEnvironmentIndexError,
    LamError,
    LamInternalError,
    LamMachineFault,
    LamMalformedProgram,
    LamNotCallable,
    LamStackUnderflow,
    LamSyntaxError,
    LamTypeMismatch,
    LamUnboundVariable,
)
from lam.interpreter import Interpreter


def test_add_int_and_bool_is_type_mismatch(itp):
    with pytest.raises(LamTypeMismatch) as exc:
        itp.eval("1 + true")
    assert (exc.value.operation, exc.value.expected, exc.value.actual) == ("+", "int", "bool")


def test_calling_an_int_is_not_callable(itp):
    with pytest.raises(LamNotCallable) as exc:
        itp.eval("3 4")
    assert exc.value.actual == "int"


def test_division_by_zero(itp):
    with pytest.raises(LamDivisionByZero):
        itp.eval("3 / 0")


def test_unbound_variable(itp):
    with pytest.raises(LamUnboundVariable) as exc:
        itp.eval("x + 1")
    assert exc.value.name == "x"


def test_variable_is_unbound_after_its_let(itp):
    with pytest.raises(LamUnboundVariable) as exc:
        itp.eval("(let x = 1 in x) + x")
    assert exc.value.name == "x"


@pytest.mark.parametrize(
    "source,operation,expected,actual",
    [
        ("if 1 then 2 else 3", "if", "bool", "int"),
        ("not 3", "not", "bool", "int"),
        ("-true", "-", "int", "bool"),
        ("true < false", "<", "int", "bool"),
        ("1 && true", "&&", "bool", "int"),
        ("true || 0", "||", "bool", "int"),
        ("(fun x -> x) = 1", "=", "int", "function"),
        ("1 * (fun x -> x)", "*", "int", "function"),
    ]
)
def test_type_mismatch_reports_operation_and_kinds(itp, source, operation, expected, actual):
    with pytest.raises(LamTypeMismatch) as exc:
        itp.eval(source)
    assert exc.value.operation == operation
    assert exc.value.expected == expected
    assert exc.value.actual == actual


def test_calling_a_bool_is_not_callable(itp):
    with pytest.raises(LamNotCallable) as exc:
        itp.eval("let b = true in b 1")
    assert exc.value.actual == "bool"


def test_unbound_name_in_dead_branch_is_a_compile_error():
    # The compiler resolves every name up front; the tree walker only looks
    # names up when it reaches them.
    source = "if true then 1 else y"
    with pytest.raises(LamUnboundVariable):
        Interpreter(engine="vm").eval(source)
    assert Interpreter(engine="eval").eval(source) == 1


@pytest.mark.parametrize(
    "source",
    [
        "",
        "let x = in 3",
        "(1 + 2",
        "1 +",
        "fun -> 1",
        "let rec f = 1 in f",
        "let x = 1 x",
        "if true then 1",
        "2147483648",
        "1 $ 2",
        "(* unterminated",
        "1 2 )",
    ]
)
def test_syntax_errors(itp, source):
    with pytest.raises(LamSyntaxError):
        itp.eval(source)


def test_error_hierarchy():
    for cls in (LamSyntaxError, LamUnboundVariable, LamMachineFault):
        assert issubclass(cls, LamError)
    for cls in (LamTypeMismatch, LamNotCallable, LamDivisionByZero, LamInternalError):
        assert issubclass(cls, LamMachineFault)
    for cls in (LamEnvironmentIndexError, LamCorruptContinuation, LamMalformedProgram, LamStackUnderflow):
        assert issubclass(cls, LamInternalError)


def test_error_messages_name_the_problem():
    assert str(LamUnboundVariable("foo")) == "Unbound variable: foo"
    assert str(LamTypeMismatch("+", "int", "bool")) == "+: expected int, got bool"
    assert str(LamDivisionByZero()) == "/: division by zero"
    assert "index 3" in str(LamEnvironmentIndexError(3, 1))
