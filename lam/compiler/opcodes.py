from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional, Tuple


class Opcode(IntEnum):
    # Literals
    PUSH_INT = 0x01  # arg: int
    PUSH_BOOL = 0x02  # arg: bool

    # Environment
    ACCESS = 0x10  # arg: environment index
    PUSH_SCOPE = 0x11
    POP_SCOPE = 0x12

    # Control flow
    BRANCH = 0x20  # arg: then code, alt: else code

    # Functions / closures
    MAKE_CLOSURE = 0x30  # arg: body code
    CALL = 0x40
    RETURN_FROM_CALL = 0x41

    # Arithmetic / comparison / logic
    ADD = 0x60
    SUB = 0x61
    MUL = 0x62
    DIV = 0x63
    LTE = 0x64
    GTE = 0x65
    LT = 0x66
    GT = 0x67
    EQ = 0x68
    NEQ = 0x69
    AND = 0x6A
    OR = 0x6B
    NEG = 0x6C
    NOT = 0x6D


@dataclass(frozen=True)
class Instruction:
    """One machine instruction.

    Nested sequences (closure bodies, branch arms) are carried inline as
    tuples rather than as jump offsets, so compiled code is a tree.
    """

    op: Opcode
    arg: Any = None
    alt: Optional[Code] = None

    def __repr__(self) -> str:
        name = "".join(part.capitalize() for part in self.op.name.split("_"))
        if self.op == Opcode.BRANCH:
            return f"{name}({list(self.arg)!r}, {list(self.alt)!r})"
        if self.op == Opcode.MAKE_CLOSURE:
            return f"{name}({list(self.arg)!r})"
        if self.arg is not None:
            return f"{name}({self.arg!r})"
        return name


Code = Tuple[Instruction, ...]
