from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Tuple, Union

from lam.errors import LamUnboundVariable
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

from .opcodes import Code, Opcode
from .chunk import Chunk

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompileCtx:
    """Names in scope, innermost first.

    The order is exactly the order in which the machine prepends values to
    its environment, so a name's position here is its runtime index.
    """

    names: Tuple[str, ...] = ()

    def bind(self, *names: str) -> CompileCtx:
        """Prepend `names` one after another; the last one ends up at position 0."""
        bound = self.names
        for name in names:
            bound = (name,) + bound
        return CompileCtx(bound)

    def index_of(self, name: str) -> int:
        try:
            return self.names.index(name)
        except ValueError:
            raise LamUnboundVariable(name) from None

    def __len__(self) -> int:
        return len(self.names)


def compile_module(term: Term) -> Code:
    """Compile a closed term into code for an empty machine."""
    chunk = Chunk()
    compile_expr(term, chunk, CompileCtx())
    code = chunk.freeze()
    logger.debug("compiled %s into %d top-level instructions", type(term).__name__, len(code))
    return code


def compile_expr(term: Term, chunk: Chunk, ctx: CompileCtx) -> None:
    """Append the code for `term` to `chunk`.

    Works from an explicit stack instead of recursing, so the depth of the
    tree is not limited by the Python call stack. Entries are either a
    (term, chunk, ctx) triple still to compile or a deferred emit, which runs
    once everything pushed after it has been compiled.
    """
    work: List[Union[Tuple[Term, Chunk, CompileCtx], Callable[[], None]]] = [(term, chunk, ctx)]

    while work:
        item = work.pop()
        if callable(item):
            item()
            continue
        term, chunk, ctx = item

        # Pushed in reverse: the last entry pushed is compiled first.
        match term:
            case Int(value):
                chunk.emit_int(value)

            case Bool(value):
                chunk.emit_bool(value)

            case Var(name):
                chunk.emit_access(ctx.index_of(name))

            case UnaryOp(op, operand):
                work.append(partial(chunk.emit_op, Opcode[op.name]))
                work.append((operand, chunk, ctx))

            case BinaryOp(op, left, right):
                # Both sides are always compiled; AND/OR do not short circuit.
                work.append(partial(chunk.emit_op, Opcode[op.name]))
                work.append((right, chunk, ctx))
                work.append((left, chunk, ctx))

            case Fun(self_name, param, body):
                # CALL binds the argument, then the closure itself: self at 0, param at 1.
                body_chunk = Chunk()
                work.append(partial(chunk.emit_closure, body_chunk))
                work.append(partial(body_chunk.emit_op, Opcode.RETURN_FROM_CALL))
                work.append((body, body_chunk, ctx.bind(param, self_name)))

            case App(fn, arg):
                work.append(partial(chunk.emit_op, Opcode.CALL))
                work.append((arg, chunk, ctx))
                work.append((fn, chunk, ctx))

            case LetIn(name, value, body):
                work.append(partial(chunk.emit_op, Opcode.POP_SCOPE))
                work.append((body, chunk, ctx.bind(name)))
                work.append(partial(chunk.emit_op, Opcode.PUSH_SCOPE))
                work.append((value, chunk, ctx))

            case IfThenElse(cond, then_branch, else_branch):
                then_chunk = Chunk()
                else_chunk = Chunk()
                work.append(partial(chunk.emit_branch, then_chunk, else_chunk))
                work.append((else_branch, else_chunk, ctx))
                work.append((then_branch, then_chunk, ctx))
                work.append((cond, chunk, ctx))

            case _:
                raise TypeError(f"Cannot compile {term!r}")
