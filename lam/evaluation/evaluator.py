"""Reference evaluator for Lam terms.

Walks the syntax tree directly against a name -> value mapping. It exists to
check the compiler and the machine against: for every closed, well-typed
term both must produce the same value. It is deliberately simple and uses
the Python call stack, so a very deep term or deep recursion in a Lam
program can exhaust it where the machine would not. That is reported as
LamDepthExceeded.

Primitive operators come from lam.evaluation.operators, the same module the
machine uses, so both engines agree on overflow, division and type errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Mapping, Optional

from lam import Value
from lam.errors import LamDepthExceeded, LamNotCallable, LamTypeMismatch, LamUnboundVariable
from lam.types.ast import (
    App,
    BinaryOp,
    Bool,
    Fun,
    IfThenElse,
    Int,
    LetIn,
    Term,
    UnaryOp,
    Var,
)
from lam.types.value import kind_of
from lam.evaluation.operators import apply_binary, apply_unary


@dataclass(eq=False)
class Lambda:
    """A function value of the reference evaluator."""

    self_name: str
    param: str
    body: Term
    bindings: Mapping[str, Value]

    kind: ClassVar[str] = "function"

    def __repr__(self) -> str:
        return f"<Lambda {self.self_name or 'fun'} {self.param}>"


def evaluate(term: Term, bindings: Optional[Mapping[str, Value]] = None) -> Value:
    """Evaluate `term` with free variables looked up in `bindings`.

    Mappings are never mutated; every binder builds a new one.
    """
    try:
        return _evaluate(term, {} if bindings is None else bindings)
    except RecursionError as e:
        raise LamDepthExceeded("Evaluation nested too deeply for the reference evaluator") from e


def _evaluate(term: Term, bindings: Mapping[str, Value]) -> Value:
    match term:
        case Int(value) | Bool(value):
            return value

        case Var(name):
            try:
                return bindings[name]
            except KeyError:
                raise LamUnboundVariable(name) from None

        case UnaryOp(op, operand):
            return apply_unary(op, _evaluate(operand, bindings))

        case BinaryOp(op, left, right):
            lhs = _evaluate(left, bindings)
            rhs = _evaluate(right, bindings)
            return apply_binary(op, lhs, rhs)

        case Fun(self_name, param, body):
            return Lambda(self_name, param, body, bindings)

        case App(fn, arg):
            callee = _evaluate(fn, bindings)
            value = _evaluate(arg, bindings)
            if not isinstance(callee, Lambda):
                raise LamNotCallable(kind_of(callee))
            # The function's own name shadows its parameter, as on the machine.
            inner = {**callee.bindings, callee.param: value, callee.self_name: callee}
            return _evaluate(callee.body, inner)

        case LetIn(name, value, body):
            bound = _evaluate(value, bindings)
            return _evaluate(body, {**bindings, name: bound})

        case IfThenElse(cond, then_branch, else_branch):
            test = _evaluate(cond, bindings)
            if type(test) is not bool:
                raise LamTypeMismatch("if", "bool", kind_of(test))
            return _evaluate(then_branch if test else else_branch, bindings)

        case _:
            raise TypeError(f"Cannot evaluate {term!r}")
