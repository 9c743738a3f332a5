from __future__ import annotations
import os

from lam.errors import LamConfigError

ENGINES = ("vm", "eval")

_TRUTHY = ("1", "true", "yes", "on")


def flag_from_env(var: str) -> bool:
    raw = os.environ.get(var)
    if not raw:
        return False
    return raw.strip().lower() in _TRUTHY


def get_default_engine() -> str:
    """Engine used by the command line when --engine is not given."""
    raw = os.environ.get('LAM_ENGINE')
    if not raw or not raw.strip():
        return 'vm'
    engine = raw.strip().lower()
    if engine not in ENGINES:
        raise LamConfigError(f"LAM_ENGINE must be one of {', '.join(ENGINES)}, got {raw!r}")
    return engine


def disasm_enabled() -> bool:
    return flag_from_env('LAM_DISASM')


def trace_enabled() -> bool:
    return flag_from_env('LAM_TRACE')
