from __future__ import annotations

import logging

from lam import Value, config
from lam.types.ast import Term
from .compiler import compile_module
from .vm import run_chunk
from .disasm import disassemble

logger = logging.getLogger(__name__)


class BytecodeBackend:
    """
    Compiler backend: compiles the term and runs it on the SECD machine.
    """

    def eval(self, term: Term) -> Value:
        code = compile_module(term)
        if config.disasm_enabled():
            logger.info("disassembly:\n%s", disassemble(code))
        return run_chunk(code)
