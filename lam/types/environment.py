"""Runtime environment for the Lam machine.

The Environment is a persistent singly linked chain of values, most recently
bound first. Binding never mutates: `bind` returns a new head that shares
its tail with the receiver, so a closure can keep the environment of its
definition site while the code that created it goes on binding and
unbinding names of its own.

Values are addressed by position (0 = innermost), as computed by the
compiler from its name context.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional

from lam import Value
from lam.errors import LamEnvironmentIndexError


class Environment:
    """Immutable cons-list of runtime values."""

    __slots__ = ("value", "outer", "size")

    def __init__(self, value: Value, outer: Environment):
        self.value: Value = value
        self.outer: Optional[Environment] = outer
        self.size: int = outer.size + 1

    @staticmethod
    def empty() -> Environment:
        return EMPTY

    def bind(self, value: Value) -> Environment:
        """Return a new environment with `value` at position 0."""
        return Environment(value, self)

    def unbind(self) -> Environment:
        """Return the environment without its innermost binding."""
        if self.size == 0:
            raise LamEnvironmentIndexError(0, 0)
        return self.outer

    def lookup(self, index: int) -> Value:
        """Return the value at `index`, counting from the innermost binding.

        Raises LamEnvironmentIndexError if the environment is shorter.
        """
        if index < 0 or index >= self.size:
            raise LamEnvironmentIndexError(index, self.size)
        env = self
        for _ in range(index):
            env = env.outer
        return env.value

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Value]:
        env = self
        while env.size:
            yield env.value
            env = env.outer

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment: [")
            buffer.write(", ".join(repr(v) for v in self))
            buffer.write("]>")
            return buffer.getvalue()


EMPTY: Environment = Environment.__new__(Environment)
EMPTY.value = None
EMPTY.outer = None
EMPTY.size = 0
