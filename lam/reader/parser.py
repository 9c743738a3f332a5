"""
  Lam Reader: Lexer and Pratt parser

Surface syntax (ML flavoured):

    let rec fact n = if n <= 0 then 1 else n * fact (n - 1) in fact 5

- integers (signed 32-bit; `-` is the negation operator), `true`, `false`
- `fun x y -> e`                 nested one-argument functions
- `let x = e in b`, `let f x y = e in b`, `let rec f x y = e in b`
- `if c then a else b`
- infix, loosest first: `&& ||`, `= <>`, `<= >= < >`, `+ -`, `* /`
- prefix `-` and `not`, then application by juxtaposition (tightest)
- comments `(* ... *)`, which nest

`let`, `fun` and `if` bodies extend as far to the right as possible.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from lam.errors import LamDepthExceeded, LamSyntaxError
from lam.evaluation.operators import INT32_MAX
from lam.types.ast import (
    App,
    BinOp,
    BinaryOp,
    Bool,
    Fun,
    IfThenElse,
    Int,
    LetIn,
    Term,
    UnaryOp,
    UnOp,
    Var,
    lambda_chain,
)


TOKEN_RE = re.compile(
    r"(?P<comment>\(\*)"  # comment start, handled by the lexer loop
    r"|(?P<int>\d+)"
    r"|(?P<ident>[A-Za-z_][A-Za-z0-9_']*)"
    r"|(?P<arrow>->)"
    r"|(?P<op><=|>=|<>|&&|\|\||[-+*/<>=])"
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))",
)

KEYWORDS = frozenset(("let", "rec", "in", "if", "then", "else", "fun", "true", "false", "not"))

# infix operator -> (binding power, operator); higher binds tighter
INFIX: dict[str, tuple[int, BinOp]] = {
    "&&": (10, BinOp.AND),
    "||": (10, BinOp.OR),
    "=": (20, BinOp.EQ),
    "<>": (20, BinOp.NEQ),
    "<=": (30, BinOp.LTE),
    ">=": (30, BinOp.GTE),
    "<": (30, BinOp.LT),
    ">": (30, BinOp.GT),
    "+": (40, BinOp.ADD),
    "-": (40, BinOp.SUB),
    "*": (50, BinOp.MUL),
    "/": (50, BinOp.DIV),
}
PREFIX_POWER = 60
APPLICATION_POWER = 70


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)

    while pos < n:
        if source[pos].isspace():
            pos += 1
            continue
        m = TOKEN_RE.match(source, pos)
        if not m or m.lastgroup is None:
            raise LamSyntaxError(f"Unexpected character {source[pos]!r}")
        kind = m.lastgroup
        pos = m.end()

        if kind == "comment":
            depth = 1
            while depth > 0:
                if pos >= n:
                    raise LamSyntaxError("Unterminated comment")
                if source.startswith("(*", pos):
                    depth += 1
                    pos += 2
                elif source.startswith("*)", pos):
                    depth -= 1
                    pos += 2
                else:
                    pos += 1
            continue

        value = m.group(kind)
        if kind == "ident" and value in KEYWORDS:
            kind = "keyword"
        yield kind, value


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def at(self, kind: str, value: str | None = None) -> bool:
        tok_type, tok_val = self.peek()
        return tok_type == kind and (value is None or tok_val == value)

    def expect(self, kind: str, value: str | None = None) -> str:
        tok_type, tok_val = self.advance()
        if tok_type != kind or (value is not None and tok_val != value):
            wanted = value if value is not None else kind
            found = tok_val if tok_val is not None else "end of input"
            raise LamSyntaxError(f"Expected {wanted!r}, found {found!r}")
        return tok_val

    def _starts_atom(self) -> bool:
        tok_type, tok_val = self.peek()
        if tok_type in ("int", "ident", "lparen"):
            return True
        return tok_type == "keyword" and tok_val in ("true", "false")

    def parse_expr(self, min_power: int = 0) -> Term:
        left = self.parse_prefix()
        while True:
            tok_type, tok_val = self.peek()
            if tok_type == "op" and tok_val in INFIX:
                power, op = INFIX[tok_val]
                if power <= min_power:
                    break
                self.advance()
                # Left associative: the right operand only takes tighter operators.
                right = self.parse_expr(power)
                left = BinaryOp(op, left, right)
            elif self._starts_atom() and APPLICATION_POWER > min_power:
                left = App(left, self.parse_atom())
            else:
                break
        return left

    def parse_prefix(self) -> Term:
        tok_type, tok_val = self.peek()
        if tok_type == "op" and tok_val == "-":
            self.advance()
            return UnaryOp(UnOp.NEG, self.parse_expr(PREFIX_POWER))
        if tok_type == "keyword":
            if tok_val == "not":
                self.advance()
                return UnaryOp(UnOp.NOT, self.parse_expr(PREFIX_POWER))
            if tok_val == "fun":
                return self.parse_fun()
            if tok_val == "let":
                return self.parse_let()
            if tok_val == "if":
                return self.parse_if()
        return self.parse_atom()

    def parse_atom(self) -> Term:
        tok_type, tok_val = self.advance()
        if tok_type is None:
            raise LamSyntaxError("Unexpected end of input")
        if tok_type == "int":
            value = int(tok_val)
            if value > INT32_MAX:
                raise LamSyntaxError(f"Integer literal {tok_val} does not fit in 32 bits")
            return Int(value)
        if tok_type == "ident":
            return Var(tok_val)
        if tok_type == "keyword" and tok_val in ("true", "false"):
            return Bool(tok_val == "true")
        if tok_type == "lparen":
            inner = self.parse_expr()
            self.expect("rparen")
            return inner
        raise LamSyntaxError(f"Unexpected token {tok_val!r}")

    def parse_params(self) -> list[str]:
        params = []
        while self.at("ident"):
            params.append(self.advance()[1])
        return params

    def parse_fun(self) -> Term:
        self.expect("keyword", "fun")
        params = self.parse_params()
        if not params:
            raise LamSyntaxError("fun requires at least one parameter")
        self.expect("arrow")
        return lambda_chain(params, self.parse_expr())

    def parse_let(self) -> Term:
        self.expect("keyword", "let")
        is_rec = self.at("keyword", "rec")
        if is_rec:
            self.advance()
        name = self.expect("ident")
        params = self.parse_params()
        self.expect("op", "=")
        value = self.parse_expr()
        self.expect("keyword", "in")
        body = self.parse_expr()
        if is_rec:
            if not params:
                raise LamSyntaxError(f"let rec {name} requires at least one parameter")
            # Only the outermost function can refer to itself.
            value = Fun(name, params[0], lambda_chain(params[1:], value))
        elif params:
            value = lambda_chain(params, value)
        return LetIn(name, value, body)

    def parse_if(self) -> Term:
        self.expect("keyword", "if")
        cond = self.parse_expr()
        self.expect("keyword", "then")
        then_branch = self.parse_expr()
        self.expect("keyword", "else")
        else_branch = self.parse_expr()
        return IfThenElse(cond, then_branch, else_branch)

    def parse_program(self) -> Term:
        if self.peek()[0] is None:
            raise LamSyntaxError("Empty program")
        term = self.parse_expr()
        tok_type, tok_val = self.peek()
        if tok_type is not None:
            raise LamSyntaxError(f"Unexpected token {tok_val!r} after end of expression")
        return term


def parse(source: str) -> Term:
    """Read a whole program as a single term.

    Infix chains are read in a loop, but parentheses, prefix operators and the
    bodies of `let`, `fun` and `if` nest on the Python call stack.
    """
    try:
        return TokenStream(lex(source)).parse_program()
    except RecursionError as e:
        raise LamDepthExceeded("Program is nested too deeply to read") from e
