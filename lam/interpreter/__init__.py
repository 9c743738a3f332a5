from __future__ import annotations
from typing import Literal

from lam import Value
from lam.compiler.opcodes import Code
from lam.errors import LamConfigError
from lam.interpreter.backend import Backend
from lam.reader.parser import parse
from lam.types.ast import Term


class Interpreter:
    """
    Reads Lam source and evaluates it with a pluggable engine.

    'vm' compiles to machine code and runs it on the SECD machine; 'eval'
    walks the tree with the reference evaluator.
    """

    # Class-level default to avoid env-variable coupling in tests
    DefaultEngine: Literal['vm', 'eval'] = 'vm'

    def __init__(self, engine: Literal['vm', 'eval'] | None = None):
        eng = engine or self.DefaultEngine
        if eng == 'vm':
            from lam.compiler.backend_impl import BytecodeBackend
            backend: Backend = BytecodeBackend()
        elif eng == 'eval':
            from lam.evaluation.backend_impl import EvalBackend
            backend = EvalBackend()
        else:
            raise LamConfigError(f"Unknown engine {eng!r}; expected 'vm' or 'eval'")
        self.engine = eng
        self.backend = backend

    def parse(self, source: str) -> Term:
        return parse(source)

    def compile(self, source: str) -> Code:
        from lam.compiler.compiler import compile_module
        return compile_module(parse(source))

    def eval(self, source: str) -> Value:
        return self.backend.eval(parse(source))
