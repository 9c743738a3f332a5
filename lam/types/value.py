"""Runtime values.

Integers and booleans are the Python `int` and `bool` objects themselves.
Since `bool` is a subclass of `int`, kind checks always use `type(v) is ...`
rather than isinstance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from lam import Value

if TYPE_CHECKING:
    from lam.compiler.opcodes import Code
    from lam.types.environment import Environment


@dataclass(eq=False)
class Closure:
    """Compiled function body paired with the environment it was created in."""

    code: Code
    env: Environment

    kind: ClassVar[str] = "function"

    def __repr__(self) -> str:
        return f"<Closure instructions={len(self.code)} env={len(self.env)}>"


def kind_of(value: Value) -> str:
    """Name the kind of a runtime value for error messages."""
    if type(value) is bool:
        return "bool"
    if type(value) is int:
        return "int"
    return getattr(value, "kind", type(value).__name__)


def format_value(value: Value) -> str:
    kind = kind_of(value)
    if kind == "bool":
        return "true" if value else "false"
    if kind == "int":
        return str(value)
    if kind == "function":
        return "<fun>"
    return repr(value)
