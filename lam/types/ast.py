"""Syntax tree for Lam terms.

Terms are immutable once built and carry no back references, so the reader,
the compiler and the reference evaluator can all share subtrees freely.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class UnOp(Enum):
    NEG = "-"
    NOT = "not"


class BinOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    LTE = "<="
    GTE = ">="
    LT = "<"
    GT = ">"
    EQ = "="
    NEQ = "<>"
    AND = "&&"
    OR = "||"


@dataclass(frozen=True)
class Int:
    value: int


@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class Var:
    name: str


@dataclass(frozen=True)
class UnaryOp:
    op: UnOp
    operand: Term


@dataclass(frozen=True)
class BinaryOp:
    op: BinOp
    left: Term
    right: Term


@dataclass(frozen=True)
class Fun:
    """A one-argument function.

    `self_name` is bound to the function itself inside `body`, which is how
    recursion is expressed. Anonymous functions use the empty string, which
    no identifier can spell.
    """
    self_name: str
    param: str
    body: Term


@dataclass(frozen=True)
class App:
    fn: Term
    arg: Term


@dataclass(frozen=True)
class LetIn:
    name: str
    value: Term
    body: Term


@dataclass(frozen=True)
class IfThenElse:
    cond: Term
    then_branch: Term
    else_branch: Term


Term = Union[Int, Bool, Var, UnaryOp, BinaryOp, Fun, App, LetIn, IfThenElse]


def lambda_chain(params: list[str], body: Term) -> Term:
    """Curry `params` into nested anonymous functions around `body`."""
    for param in reversed(params):
        body = Fun("", param, body)
    return body
