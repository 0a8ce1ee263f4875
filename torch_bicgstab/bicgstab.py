"""
BiCGSTAB solver without preconditioner.

Reference:
    Ashby, Manteuffel, Saylor,
    A taxonomy for conjugate gradient methods,
    SIAM J Numer Anal 27, 1542-1568 (1990)

This variant works on the residual r = A*x - b (note the sign) and keeps the
shadow residual rT fixed to the initial residual. The matrix and vectors are
only reached through the Matrix and VectorOps capabilities, so any storage
that implements them can be solved.
"""

import logging
import math
import warnings
from dataclasses import replace
from typing import NamedTuple, Optional

import torch
from torch import Tensor

from .blas import TorchBLAS
from .check import ShapeException
from .config import SolverConfig
from .errors import BreakdownError, DegenerateStartError
from .matrix import MatrixLike, as_matrix, mult
from .protocol import VectorOps

log = logging.getLogger(__name__)

# a divisor below ZERO_FACTOR * tiny(coefficient type) is treated as zero
ZERO_FACTOR = 10.0


class SolveReport(NamedTuple):
    """Outcome of one call to :meth:`BiCGSTABSolver.solve`."""
    success: bool
    its: int
    max_iter: int
    rTr: float
    err: float
    omega: float
    rTh: float
    status: str  # 'converged', 'breakdown', 'exhausted' or 'invalid'


class SolveResult(NamedTuple):
    """Result of :func:`bicgstab_solve`."""
    x: Tensor
    num_iters: int
    residual: float
    converged: bool


def is_zero(a: float, tiny: float) -> bool:
    """
    Test if a floating point number is (close to) 0.0

    Parameters
    ----------
    a : float
        Value to test
    tiny : float
        Smallest positive normal value of the coefficient type,
        e.g. ``torch.finfo(torch.float64).tiny``
    """
    return abs(a) < ZERO_FACTOR * tiny


class BiCGSTABSolver:
    """
    Unpreconditioned BiCGSTAB for square systems ``A @ x = b``.

    The solver holds nothing but its configuration and the report of the last
    call; the working vectors live only for the duration of :meth:`solve`.

    Parameters
    ----------
    config : SolverConfig, optional
        Initial configuration, by default ``SolverConfig()``
    epsilon, max_iter, strict : optional
        Override the matching fields of ``config``
    blas : VectorOps, optional
        Vector capability, by default :class:`TorchBLAS`
    logger : logging.Logger, optional
        Destination of the per-solve diagnostic record
        (INFO level on ``torch_bicgstab.bicgstab`` by default). The package
        only installs a ``NullHandler``, so configure logging, e.g.
        ``logging.basicConfig(level=logging.INFO)``, to see it.

    Examples
    --------
    >>> solver = BiCGSTABSolver(epsilon=1e-8)
    >>> A = torch.eye(3, dtype=torch.float64)
    >>> b = torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64)
    >>> x = torch.zeros(3, dtype=torch.float64)
    >>> solver.solve(A, b, x)
    True
    """

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        *,
        epsilon: Optional[float] = None,
        max_iter: Optional[int] = None,
        strict: Optional[bool] = None,
        blas: Optional[VectorOps] = None,
        logger: Optional[logging.Logger] = None,
    ):
        config = config if config is not None else SolverConfig()
        if epsilon is not None:
            config = config.with_epsilon(epsilon)
        if max_iter is not None:
            config = config.with_max_iter(max_iter)
        if strict is not None:
            config = replace(config, strict=strict)
        self._config = config
        self.blas = blas if blas is not None else TorchBLAS()
        self.logger = logger if logger is not None else log
        self.last_report: Optional[SolveReport] = None

    @property
    def config(self) -> SolverConfig:
        return self._config

    @property
    def epsilon(self) -> float:
        return self._config.epsilon

    @property
    def max_iter(self) -> int:
        return self._config.max_iter

    def set_epsilon(self, eps: float) -> None:
        self._config = self._config.with_epsilon(eps)

    def set_max_iter(self, max_iter: int) -> None:
        self._config = self._config.with_max_iter(max_iter)

    def solve(self, A: MatrixLike, b, x) -> bool:
        """
        Solve ``A @ x = b``, updating ``x`` in place. Return True on success.

        Preconditions (a violation returns False and leaves ``x`` untouched):

        - ``A.dimension() == len(b)``
        - ``A.dimension() == len(x)``
        - ``A.dimension() > 0``
        - ``b`` and ``x`` are vectors (1-D for :class:`TorchBLAS`)

        Parameters
        ----------
        A : Matrix or torch.Tensor
            System matrix, see :func:`~torch_bicgstab.matrix.as_matrix`
        b : vector
            Right-hand side, left unchanged
        x : vector
            Initial guess on input, approximate solution on output

        Returns
        -------
        bool
            ``(r|r) <= epsilon**2 * (b|b)`` for the final residual r

        Raises
        ------
        DegenerateStartError
            If the initial residual is exactly zero
        BreakdownError
            In strict mode, if ``(rT|A*d)`` vanishes
        TypeError
            If the dtype of ``b`` or ``x`` differs from the matrix dtype
            (raised by the matrix product before ``x`` is modified)
        """
        A = as_matrix(A)
        blas = self.blas

        n = A.dimension()
        try:
            valid = n == blas.dimension(b) and n == blas.dimension(x) and n > 0
        except ShapeException:
            valid = False
        if not valid:
            nan = float("nan")
            return self._report(False, 0, self._config.resolve_max_iter(max(n, 0)),
                                nan, nan, nan, nan, "invalid")

        max_iter = self._config.resolve_max_iter(n)
        tiny = blas.tiny(b)
        epsilon = self._config.epsilon

        rT = blas.zeros(n, b)
        d = blas.zeros(n, b)
        h = blas.zeros(n, b)
        u = blas.zeros(n, b)
        Ad = blas.zeros(n, b)
        t = blas.zeros(n, b)
        s = h
        its = 0
        err = epsilon * epsilon * blas.dot(b, b)

        # r = A*x - b
        r = blas.zeros(n, b)
        mult(A, x, r)
        blas.axpy(-1.0, b, r)

        # d = h = rT = r
        blas.copy(r, d)
        blas.copy(d, h)
        blas.copy(h, rT)
        rTrT = blas.dot(rT, rT)
        if is_zero(rTrT, tiny):
            raise DegenerateStartError(rTrT)

        rTh = blas.dot(rT, h)
        rTr = blas.dot(r, r)
        omega = float("nan")
        broken = False

        while rTr > err and its < max_iter:
            mult(A, d, Ad)
            rTAd = blas.dot(rT, Ad)
            if is_zero(rTAd, tiny):
                if self._config.strict:
                    raise BreakdownError("rTAd", rTAd, its)
                broken = True
                break
            alpha = rTh / rTAd
            blas.axpy(-alpha, Ad, r)
            # s aliases h: s = h - alpha*Ad
            blas.axpy(-alpha, Ad, s)
            mult(A, s, t)
            blas.axpy(1.0, t, u)
            blas.scal(alpha, u)
            st = blas.dot(s, t)
            tt = blas.dot(t, t)
            if is_zero(st, tiny) or is_zero(tt, tiny):
                omega = 0.0
            else:
                omega = st / tt
            blas.axpy(-alpha, d, x)
            blas.axpy(-omega, s, x)
            blas.axpy(-omega, t, r)
            rTr = blas.dot(r, r)
            blas.axpy(-omega, t, h)
            if is_zero(omega, tiny) or is_zero(rTh, tiny):
                broken = True
                break
            beta = (alpha / omega) / rTh
            rTh = blas.dot(rT, h)
            # beta = (rTh / previous rTh) * (alpha / omega)
            beta *= rTh
            # d = beta*d + h - beta*omega*Ad
            blas.scal(beta, d)
            blas.axpy(1.0, h, d)
            blas.axpy(-beta * omega, Ad, d)
            its += 1

        success = rTr <= err
        if success:
            status = "converged"
        elif broken:
            status = "breakdown"
        else:
            status = "exhausted"
        return self._report(success, its, max_iter, rTr, err, omega, rTh, status)

    def _report(self, success, its, max_iter, rTr, err, omega, rTh, status) -> bool:
        report = SolveReport(success, its, max_iter, rTr, err, omega, rTh, status)
        self.last_report = report
        self.logger.info(
            "success=%s (its=%d max_iter=%d rTr=%g err=%g omega=%g rTh=%g)",
            success, its, max_iter, rTr, err, omega, rTh,
            extra=report._asdict(),
        )
        if status == "breakdown":
            warnings.warn(f"BiCGSTAB broke down after {its} iterations (rTr={rTr:.2e}, err={err:.2e})")
        elif status == "exhausted":
            warnings.warn(f"BiCGSTAB did not converge in {max_iter} iterations (rTr={rTr:.2e}, err={err:.2e})")
        return success


def bicgstab_solve(
    A: MatrixLike,
    b: Tensor,
    x0: Optional[Tensor] = None,
    epsilon: float = 1e-4,
    max_iter: int = 0,
    strict: bool = False,
    logger: Optional[logging.Logger] = None,
    n: Optional[int] = None,
) -> SolveResult:
    """
    Solve ``A @ x = b`` with BiCGSTAB without modifying the inputs.

    Parameters
    ----------
    A : Matrix, torch.Tensor or callable
        System matrix; a callable ``x -> A @ x`` needs ``n``
    b : torch.Tensor
        [n] right-hand side
    x0 : torch.Tensor, optional
        [n] initial guess, by default zeros
    epsilon : float, optional
        Relative residual tolerance, by default 1e-4
    max_iter : int, optional
        Iteration cap, by default 0 (``10 * n``)
    strict : bool, optional
        Raise :class:`BreakdownError` when ``(rT|A*d)`` vanishes
    logger : logging.Logger, optional
        Destination of the diagnostic record
    n : int, optional
        Dimension of a callable operator

    Returns
    -------
    SolveResult
        ``x``, number of iterations, norm of the final recurrence residual
        and the convergence flag
    """
    solver = BiCGSTABSolver(
        SolverConfig(epsilon=epsilon, max_iter=max_iter, strict=strict),
        logger=logger,
    )
    A = as_matrix(A, n=n)
    if x0 is None:
        x = torch.zeros_like(b)
    else:
        x = x0.detach().clone()
    converged = solver.solve(A, b, x)
    report = solver.last_report
    return SolveResult(x, report.its, math.sqrt(report.rTr), converged)
