"""SECD-style machine for compiled Lam code.

State is (Stack, Environment, Code):

- the operand stack is a Python list holding values and ReturnAddress
  markers pushed by CALL;
- the environment is a persistent chain (lam.types.environment);
- the code register is the current instruction tuple plus a program counter,
  followed by a persistent chain of pending continuations. BRANCH pushes the
  rest of the current tuple onto that chain and switches to the chosen arm,
  so splicing an arm in front of the pending code costs O(1).

CALL/RETURN_FROM_CALL keep the caller's code and environment in a
ReturnAddress on the operand stack instead of using the Python call stack,
so deep recursion in a Lam program never recurses in Python.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, ClassVar, List, Optional

from lam import Value
from lam.errors import (
    LamCorruptContinuation,
    LamMalformedProgram,
    LamNotCallable,
    LamStackUnderflow,
    LamTypeMismatch,
)
from lam.evaluation.operators import apply_binary, apply_unary
from lam.types.ast import BinOp, UnOp
from lam.types.environment import Environment
from lam.types.value import Closure, kind_of

from .opcodes import Code, Instruction, Opcode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Continuation:
    """Code still to run: `code[pc:]`, then whatever `rest` holds."""

    code: Code
    pc: int
    rest: Optional[Continuation] = None


@dataclass(frozen=True)
class ReturnAddress:
    """Caller state saved on the operand stack by CALL."""

    cont: Continuation
    env: Environment

    kind: ClassVar[str] = "return-address"


class VM:
    def __init__(self, env: Environment | None = None):
        self.stack: List[Value] = []
        self.env: Environment = env if env is not None else Environment.empty()
        self.code: Code = ()
        self.pc: int = 0
        self.rest: Optional[Continuation] = None
        self.steps: int = 0
        # Opcode dispatch table
        self._dispatch: dict[int, Callable[[Instruction], None]] = {}
        self._init_dispatch()

    def _init_dispatch(self) -> None:
        d = self._dispatch
        # Literals
        d[Opcode.PUSH_INT] = self.op_push_int
        d[Opcode.PUSH_BOOL] = self.op_push_bool
        # Environment
        d[Opcode.ACCESS] = self.op_access
        d[Opcode.PUSH_SCOPE] = self.op_push_scope
        d[Opcode.POP_SCOPE] = self.op_pop_scope
        # Control flow
        d[Opcode.BRANCH] = self.op_branch
        # Functions / closures / calls
        d[Opcode.MAKE_CLOSURE] = self.op_make_closure
        d[Opcode.CALL] = self.op_call
        d[Opcode.RETURN_FROM_CALL] = self.op_return_from_call
        # Arithmetic / comparison / logic
        d[Opcode.ADD] = self.op_add
        d[Opcode.SUB] = self.op_sub
        d[Opcode.MUL] = self.op_mul
        d[Opcode.DIV] = self.op_div
        d[Opcode.LTE] = self.op_lte
        d[Opcode.GTE] = self.op_gte
        d[Opcode.LT] = self.op_lt
        d[Opcode.GT] = self.op_gt
        d[Opcode.EQ] = self.op_eq
        d[Opcode.NEQ] = self.op_neq
        d[Opcode.AND] = self.op_and
        d[Opcode.OR] = self.op_or
        d[Opcode.NEG] = self.op_neg
        d[Opcode.NOT] = self.op_not

    # --- Per-op handlers ---
    # Literals
    def op_push_int(self, ins: Instruction) -> None:
        self.push(ins.arg)

    def op_push_bool(self, ins: Instruction) -> None:
        self.push(ins.arg)

    # Environment
    def op_access(self, ins: Instruction) -> None:
        self.push(self.env.lookup(ins.arg))

    def op_push_scope(self, ins: Instruction) -> None:
        self.env = self.env.bind(self.pop("let"))

    def op_pop_scope(self, ins: Instruction) -> None:
        self.env = self.env.unbind()

    # Control flow
    def op_branch(self, ins: Instruction) -> None:
        cond = self.pop("if")
        if type(cond) is not bool:
            raise LamTypeMismatch("if", "bool", kind_of(cond))
        if self.pc < len(self.code):
            self.rest = Continuation(self.code, self.pc, self.rest)
        self.code = ins.arg if cond else ins.alt
        self.pc = 0

    # Functions / closures / calls
    def op_make_closure(self, ins: Instruction) -> None:
        self.push(Closure(ins.arg, self.env))

    def op_call(self, ins: Instruction) -> None:
        arg = self.pop("call")
        callee = self.pop("call")
        if not isinstance(callee, Closure):
            raise LamNotCallable(kind_of(callee))
        self.push(ReturnAddress(Continuation(self.code, self.pc, self.rest), self.env))
        # Argument first, then the closure itself: self at 0, argument at 1.
        self.env = callee.env.bind(arg).bind(callee)
        self.code = callee.code
        self.pc = 0
        self.rest = None

    def op_return_from_call(self, ins: Instruction) -> None:
        result = self.pop("return")
        marker = self.pop("return")
        if isinstance(result, ReturnAddress):
            raise LamCorruptContinuation(f"{kind_of(result)} in result position")
        if not isinstance(marker, ReturnAddress):
            raise LamCorruptContinuation(kind_of(marker))
        cont = marker.cont
        self.code, self.pc, self.rest = cont.code, cont.pc, cont.rest
        self.env = marker.env
        self.push(result)

    # Arithmetic / comparison / logic
    def _binary(self, op: BinOp) -> None:
        rhs = self.pop(op.value)
        lhs = self.pop(op.value)
        self.push(apply_binary(op, lhs, rhs))

    def _unary(self, op: UnOp) -> None:
        self.push(apply_unary(op, self.pop(op.value)))

    def op_add(self, ins: Instruction) -> None:
        self._binary(BinOp.ADD)

    def op_sub(self, ins: Instruction) -> None:
        self._binary(BinOp.SUB)

    def op_mul(self, ins: Instruction) -> None:
        self._binary(BinOp.MUL)

    def op_div(self, ins: Instruction) -> None:
        self._binary(BinOp.DIV)

    def op_lte(self, ins: Instruction) -> None:
        self._binary(BinOp.LTE)

    def op_gte(self, ins: Instruction) -> None:
        self._binary(BinOp.GTE)

    def op_lt(self, ins: Instruction) -> None:
        self._binary(BinOp.LT)

    def op_gt(self, ins: Instruction) -> None:
        self._binary(BinOp.GT)

    def op_eq(self, ins: Instruction) -> None:
        self._binary(BinOp.EQ)

    def op_neq(self, ins: Instruction) -> None:
        self._binary(BinOp.NEQ)

    def op_and(self, ins: Instruction) -> None:
        self._binary(BinOp.AND)

    def op_or(self, ins: Instruction) -> None:
        self._binary(BinOp.OR)

    def op_neg(self, ins: Instruction) -> None:
        self._unary(UnOp.NEG)

    def op_not(self, ins: Instruction) -> None:
        self._unary(UnOp.NOT)

    # --- Stack helpers ---
    def push(self, v: Value) -> None:
        self.stack.append(v)

    def pop(self, operation: str) -> Value:
        if not self.stack:
            raise LamStackUnderflow(operation)
        return self.stack.pop()

    # --- Execution ---
    def _fetch(self) -> Instruction | None:
        """Next instruction, resuming pending continuations; None when done."""
        while self.pc >= len(self.code):
            if self.rest is None:
                return None
            cont = self.rest
            self.code, self.pc, self.rest = cont.code, cont.pc, cont.rest
        ins = self.code[self.pc]
        self.pc += 1
        return ins

    def run(self, code: Code) -> Value:
        self.code, self.pc, self.rest = code, 0, None
        trace = logger.isEnabledFor(logging.DEBUG)
        dispatch = self._dispatch

        while (ins := self._fetch()) is not None:
            self.steps += 1
            if trace:
                logger.debug("%6d %-24r stack=%d env=%d", self.steps, ins, len(self.stack), len(self.env))
            handler = dispatch.get(ins.op)
            if handler is None:
                raise LamMalformedProgram(f"Unknown opcode: {ins.op!r}")
            handler(ins)

        if trace:
            logger.debug("halted after %d steps", self.steps)
        if len(self.stack) != 1 or isinstance(self.stack[0], ReturnAddress):
            raise LamMalformedProgram(
                f"Program ended with {len(self.stack)} stack entries, expected one value",
                depth=len(self.stack),
            )
        return self.stack[0]


def run_chunk(code: Code, env: Environment | None = None) -> Value:
    vm = VM(env)
    return vm.run(code)
