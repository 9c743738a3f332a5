from __future__ import annotations

# Public surface for the compiler package
from .opcodes import Opcode, Instruction, Code
from .chunk import Chunk
from .compiler import CompileCtx, compile_module, compile_expr
from .vm import VM, Continuation, ReturnAddress, run_chunk
from .disasm import disassemble

__all__ = [
    "Opcode",
    "Instruction",
    "Code",
    "Chunk",
    "CompileCtx",
    "compile_module",
    "compile_expr",
    "VM",
    "Continuation",
    "ReturnAddress",
    "run_chunk",
    "disassemble",
]
