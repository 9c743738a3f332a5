from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from lam.compiler.opcodes import Code, Instruction, Opcode


@dataclass
class Chunk:
    """A growable instruction sequence, frozen into `Code` once compiled.

    Nested closure bodies and branch arms are compiled into their own chunks
    and embedded when frozen.
    """

    code: List[Instruction] = field(default_factory=list)

    # --- Emit helpers ---
    def emit_op(self, op: Opcode, arg=None, alt: Code | None = None) -> int:
        self.code.append(Instruction(op, arg, alt))
        return len(self.code) - 1

    def emit_int(self, v: int) -> None:
        self.emit_op(Opcode.PUSH_INT, v)

    def emit_bool(self, v: bool) -> None:
        self.emit_op(Opcode.PUSH_BOOL, v)

    def emit_access(self, index: int) -> None:
        self.emit_op(Opcode.ACCESS, index)

    # --- high-level convenience ---
    def emit_closure(self, body: Chunk) -> None:
        self.emit_op(Opcode.MAKE_CLOSURE, body.freeze())

    def emit_branch(self, then_chunk: Chunk, else_chunk: Chunk) -> None:
        self.emit_op(Opcode.BRANCH, then_chunk.freeze(), else_chunk.freeze())

    def freeze(self) -> Code:
        return tuple(self.code)

    def __len__(self) -> int:
        return len(self.code)
