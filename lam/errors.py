from __future__ import annotations


class LamError(Exception):
    """ Base class for all Lam errors"""
    pass


class LamConfigError(LamError):
    """ Raised when a LAM_* environment variable holds an unusable value"""
    pass


class LamSyntaxError(LamError):
    """ Raised when source text cannot be read as a term"""
    pass


class LamUnboundVariable(LamError):
    """ Raised when a variable is referenced outside the scope of any binder"""

    def __init__(self, name: str):
        super().__init__(f"Unbound variable: {name}")
        self.name = name


class LamDepthExceeded(LamError):
    """ Raised when a term is nested too deeply for the reader or the reference evaluator"""

    def __init__(self, message: str):
        super().__init__(message)


class LamMachineFault(LamError):
    """ Base class for faults raised while running a program"""
    pass


class LamTypeMismatch(LamMachineFault):
    """ Raised when an operator is applied to a value of the wrong kind"""

    def __init__(self, operation: str, expected: str, actual: str):
        super().__init__(f"{operation}: expected {expected}, got {actual}")
        self.operation = operation
        self.expected = expected
        self.actual = actual


class LamNotCallable(LamMachineFault):
    """ Raised when a non-function value is applied to an argument"""

    def __init__(self, actual: str):
        super().__init__(f"Cannot call a value of kind {actual}")
        self.actual = actual


class LamDivisionByZero(LamMachineFault):
    """ Raised when an integer is divided by zero"""

    def __init__(self, operation: str = "/"):
        super().__init__(f"{operation}: division by zero")
        self.operation = operation


class LamInternalError(LamMachineFault):
    """ Base class for broken machine invariants.

    These never happen for code produced by the compiler; seeing one means
    the compiler and the machine disagree about stack or environment layout.
    """
    pass


class LamEnvironmentIndexError(LamInternalError):
    """ Raised when an environment access is outside the environment"""

    def __init__(self, index: int, size: int):
        super().__init__(f"Environment index {index} out of range (size {size})")
        self.index = index
        self.size = size


class LamCorruptContinuation(LamInternalError):
    """ Raised when a return does not find the caller's return address"""

    def __init__(self, actual: str):
        super().__init__(f"Expected a return address on the stack, got {actual}")
        self.actual = actual


class LamMalformedProgram(LamInternalError):
    """ Raised when the program ends without exactly one value on the stack"""

    def __init__(self, message: str, depth: int | None = None):
        super().__init__(message)
        self.depth = depth


class LamStackUnderflow(LamInternalError):
    """ Raised when an instruction pops from an empty stack"""

    def __init__(self, operation: str):
        super().__init__(f"{operation}: operand stack is empty")
        self.operation = operation
