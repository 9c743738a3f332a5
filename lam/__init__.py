# Core type aliases for Lam's data model.
# Runtime values are plain Python types where possible: integers are `int`
# (kept in the signed 32-bit range), booleans are `bool`. Functions are
# `Closure` objects on the machine and `Lambda` objects in the reference
# evaluator.
#
# Naming guidance:
# - Term:  the syntax tree produced by the reader (lam.types.ast).
# - Value: an evaluated runtime value.
# - Code:  an immutable tuple of compiled instructions (lam.compiler.opcodes).

from typing import Any

# Runtime value alias
Value = Any

from lam.types.ast import Term  # noqa: E402
from lam.compiler.opcodes import Code  # noqa: E402
from lam.compiler.compiler import compile_module  # noqa: E402
from lam.compiler.vm import run_chunk  # noqa: E402
from lam.compiler.disasm import disassemble  # noqa: E402
from lam.reader.parser import parse  # noqa: E402
from lam.evaluation.evaluator import evaluate  # noqa: E402
from lam.interpreter import Interpreter  # noqa: E402


def compile(term: Term) -> Code:
    """Lower a closed term to machine code."""
    return compile_module(term)


def execute(code: Code) -> Value:
    """Run compiled code on a fresh machine (empty stack, empty environment)."""
    return run_chunk(code)


def run(term: Term) -> Value:
    return run_chunk(compile_module(term))


__all__ = [
    "Value",
    "Term",
    "Code",
    "compile",
    "execute",
    "run",
    "parse",
    "evaluate",
    "disassemble",
    "Interpreter",
]
