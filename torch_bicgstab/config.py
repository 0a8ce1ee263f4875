"""
Solver configuration.

The defaults follow the values tuned for surface parameterization
(authalic/square mapping): a relative residual of 1e-4 and at most 10*n
iterations for a system of dimension n.
"""

from dataclasses import dataclass, replace

DEFAULT_EPSILON = 1e-4
# max_iter = ITER_PER_DOF * n when left unset
ITER_PER_DOF = 10


@dataclass(frozen=True)
class SolverConfig:
    """
    Configuration of a BiCGSTAB solver.

    Attributes
    ----------
    epsilon : float
        Relative residual tolerance. The solve succeeds once
        ``(r|r) <= epsilon**2 * (b|b)``.
    max_iter : int
        Hard iteration cap, ``0`` means ``10 * n`` at solve time.
    strict : bool
        If True, a zero ``(rT|A*d)`` raises :class:`BreakdownError` instead
        of stopping the iteration.
    """

    epsilon: float = DEFAULT_EPSILON
    max_iter: int = 0
    strict: bool = False

    def __post_init__(self):
        if self.max_iter < 0:
            raise ValueError(f"max_iter must be non-negative, got {self.max_iter}")

    def with_epsilon(self, epsilon: float) -> "SolverConfig":
        return replace(self, epsilon=epsilon)

    def with_max_iter(self, max_iter: int) -> "SolverConfig":
        return replace(self, max_iter=int(max_iter))

    def resolve_max_iter(self, n: int) -> int:
        """Effective iteration cap for a system of dimension ``n``."""
        if self.max_iter != 0:
            return self.max_iter
        return ITER_PER_DOF * n
