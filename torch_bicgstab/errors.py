"""Exceptions raised by the BiCGSTAB solver."""


class BiCGSTABError(RuntimeError):
    """Base class for fatal solver conditions."""


class BreakdownError(BiCGSTABError):
    """
    A divisor of the BiCGSTAB recurrence became numerically zero.

    Only raised in strict mode; otherwise the iteration stops and the final
    residual test decides the outcome.
    """

    def __init__(self, name: str, value: float, its: int):
        self.name = name
        self.value = value
        self.its = its
        super().__init__(
            f"BiCGSTAB breakdown at iteration {its}: {name}={value:.3e} is numerically zero"
        )


class DegenerateStartError(BiCGSTABError):
    """The shadow residual rT = A*x0 - b has zero norm."""

    def __init__(self, rTrT: float):
        self.rTrT = rTrT
        super().__init__(
            f"BiCGSTAB cannot start: (rT|rT)={rTrT:.3e}, the initial guess already solves the system"
        )
