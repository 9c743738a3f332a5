from timeit import timeit

from lam.types.environment import Environment

# Helpers to parse once, and to measure the reference evaluator vs VM separately
from lam.reader.parser import parse
from lam.evaluation.evaluator import evaluate
from lam.compiler.compiler import compile_module
from lam.compiler.vm import run_chunk


def time_evaluator(code: str, rounds: int) -> float:
    """Time the reference evaluator. Parses once and repeatedly walks the same tree."""
    term = parse(code)
    # Warmup
    evaluate(term)
    # Timed
    return timeit(lambda: evaluate(term), number=rounds)


def time_vm(code: str, rounds: int) -> float:
    """Time the VM execution only: parse and compile once; then
    repeatedly run the precompiled code. This excludes compilation time.
    """
    code = compile_module(parse(code))
    # Warmup once
    run_chunk(code)
    # Timed: only VM run
    return timeit(lambda: run_chunk(code), number=rounds)


# Environment lookup down a long chain (does not involve the VM)

def bench_lookup_chain(n_envs: int = 1000, n_lookups: int = 10000) -> float:
    env = Environment.empty().bind(42)
    for i in range(n_envs):
        env = env.bind(i)
    # Warmup
    for _ in range(1000):
        env.lookup(n_envs)
    # Timed
    return timeit(lambda: env.lookup(n_envs), number=n_lookups)


APPLY_CODE = "(fun x y -> x + y) 1 2"

FACTORIAL_CODE = """
let rec fact n = if n <= 1 then 1 else n * fact (n - 1) in
fact 12
"""

SUM_CODE = """
let rec sum n = if n <= 0 then 0 else n + sum (n - 1) in
sum 200
"""

FIB_CODE = """
let rec fib n = if n < 2 then n else fib (n - 1) + fib (n - 2) in
fib 15
"""


def _print_pair(name: str, code: str, rounds: int) -> None:
    teval = time_evaluator(code, rounds)
    tvm = time_vm(code, rounds)
    print(f"Benchmark: {name}")
    print(f"  evaluator: {teval:.6f}s  |  vm (exec only): {tvm:.6f}s  [rounds={rounds}]")


if __name__ == "__main__":
    print("Benchmark: environment lookup chain (pure Python env lookup)")
    print(f"  time: {bench_lookup_chain():.6f}s")

    _print_pair("function application", APPLY_CODE, rounds=20000)
    _print_pair("factorial", FACTORIAL_CODE, rounds=2000)
    _print_pair("sum 1..200 (non-tail recursion)", SUM_CODE, rounds=200)
    _print_pair("fibonacci 15", FIB_CODE, rounds=20)
