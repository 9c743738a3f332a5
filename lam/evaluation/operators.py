"""Primitive operators shared by the machine and the reference evaluator.

Integers behave like signed 32-bit machine words: results wrap around in
two's complement and division truncates toward zero.
"""

from __future__ import annotations

from typing import Callable

from lam import Value
from lam.errors import LamDivisionByZero, LamTypeMismatch
from lam.types.ast import BinOp, UnOp
from lam.types.value import kind_of

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1


def wrap_i32(n: int) -> int:
    return ((n - INT32_MIN) & 0xFFFFFFFF) + INT32_MIN


def _div(a: int, b: int) -> int:
    if b == 0:
        raise LamDivisionByZero(BinOp.DIV.value)
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return wrap_i32(q)


# op -> (operand kind, implementation)
BINARY: dict[BinOp, tuple[str, Callable[[Value, Value], Value]]] = {
    BinOp.ADD: ("int", lambda a, b: wrap_i32(a + b)),
    BinOp.SUB: ("int", lambda a, b: wrap_i32(a - b)),
    BinOp.MUL: ("int", lambda a, b: wrap_i32(a * b)),
    BinOp.DIV: ("int", _div),
    BinOp.LTE: ("int", lambda a, b: a <= b),
    BinOp.GTE: ("int", lambda a, b: a >= b),
    BinOp.LT: ("int", lambda a, b: a < b),
    BinOp.GT: ("int", lambda a, b: a > b),
    BinOp.EQ: ("int", lambda a, b: a == b),
    BinOp.NEQ: ("int", lambda a, b: a != b),
    # Both operands are already evaluated; no short circuit.
    BinOp.AND: ("bool", lambda a, b: a and b),
    BinOp.OR: ("bool", lambda a, b: a or b),
}

UNARY: dict[UnOp, tuple[str, Callable[[Value], Value]]] = {
    UnOp.NEG: ("int", lambda a: wrap_i32(-a)),
    UnOp.NOT: ("bool", lambda a: not a),
}


def _check(operation: str, expected: str, value: Value) -> None:
    actual = kind_of(value)
    if actual != expected:
        raise LamTypeMismatch(operation, expected, actual)


def apply_binary(op: BinOp, lhs: Value, rhs: Value) -> Value:
    """Apply `op` to two evaluated operands, left operand checked first."""
    expected, fn = BINARY[op]
    _check(op.value, expected, lhs)
    _check(op.value, expected, rhs)
    return fn(lhs, rhs)


def apply_unary(op: UnOp, operand: Value) -> Value:
    expected, fn = UNARY[op]
    _check(op.value, expected, operand)
    return fn(operand)
