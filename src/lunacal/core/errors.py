class LunacalError(Exception):
    """Base error."""

class NonConvergenceError(LunacalError, ArithmeticError):
    """Raised when the phase solver cannot bracket or refine a root."""

    def __init__(self, message: str, *, target: float, anchor: float, iterations: int = 0):
        super().__init__(message)
        self.target = target
        self.anchor = anchor
        self.iterations = iterations
