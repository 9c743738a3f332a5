from __future__ import annotations
from typing import Protocol

from lam import Value
from lam.types.ast import Term


class Backend(Protocol):
    def eval(self, term: Term) -> Value: ...
