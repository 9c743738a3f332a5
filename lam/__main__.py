"""Command-line front end: run a Lam program from a file.

    lam program.lam [--engine vm|eval] [--disasm] [--trace] [--quiet]

Exit status is 0 on success, 1 when the program fails to read, compile or
run, and 2 when the file cannot be opened or the arguments or LAM_* settings
are invalid.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from lam import config
from lam.compiler.compiler import compile_module
from lam.compiler.disasm import disassemble
from lam.config import ENGINES
from lam.errors import LamConfigError, LamError
from lam.interpreter import Interpreter
from lam.types.ast import Term
from lam.types.value import format_value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lam", description="Compile and run a Lam program on the SECD machine.")
    parser.add_argument("file", help="source file to run")
    parser.add_argument("--engine", choices=ENGINES, default=None,
                        help="evaluation engine (default: $LAM_ENGINE or vm)")
    parser.add_argument("--disasm", action="store_true", help="print the compiled code before running")
    parser.add_argument("--trace", action="store_true", help="log every machine step to stderr")
    parser.add_argument("--quiet", action="store_true", help="print only the resulting value")
    return parser


def describe_term(term: Term) -> str:
    try:
        return repr(term)
    except RecursionError:
        return f"<{type(term).__name__} nested too deeply to print>"


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    trace = args.trace or config.trace_enabled()
    logging.basicConfig(level=logging.WARNING, format="%(name)s: %(message)s")
    if trace:
        logging.getLogger("lam.compiler.vm").setLevel(logging.DEBUG)

    try:
        engine = args.engine or config.get_default_engine()
    except LamConfigError as e:
        print(f"error: {type(e).__name__}: {e}", file=sys.stderr)
        return 2

    try:
        source = Path(args.file).read_text(encoding="utf-8")
    except OSError as e:
        print(f"error: cannot read {args.file}: {e.strerror or e}", file=sys.stderr)
        return 2

    try:
        interp = Interpreter(engine=engine)
        term = interp.parse(source)
        if not args.quiet:
            print(f"term  : {describe_term(term)}")
        if args.disasm:
            print(disassemble(compile_module(term)))
        value = interp.backend.eval(term)
    except LamError as e:
        print(f"error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    if args.quiet:
        print(format_value(value))
    else:
        print(f"value : {format_value(value)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
