from __future__ import annotations

from lam.evaluation.evaluator import evaluate as eval_term
from lam.types.ast import Term
from lam import Value


class EvalBackend:
    def eval(self, term: Term) -> Value:
        return eval_term(term)
