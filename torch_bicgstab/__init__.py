"""
torch-bicgstab: unpreconditioned BiCGSTAB for PyTorch

An iterative solver for square, possibly non-symmetric, linear systems
``A @ x = b``, meant as a building block of larger numerical pipelines
(mesh parameterization, finite elements).

Matrices
--------
- DenseMatrix: 2-D torch tensor
- SparseMatrix: COO triplets or torch sparse tensor, cached CSR product
- LinearOperator: matrix-free callable
- anything implementing the ``Matrix`` protocol (``dimension``, ``mult``)

Usage
-----
>>> import torch
>>> from torch_bicgstab import BiCGSTABSolver, SparseMatrix
>>>
>>> val = torch.tensor([4.0, -1.0, -1.0, 4.0, -1.0, -1.0, 4.0], dtype=torch.float64)
>>> row = torch.tensor([0, 0, 1, 1, 1, 2, 2])
>>> col = torch.tensor([0, 1, 0, 1, 2, 1, 2])
>>> A = SparseMatrix(val, row, col, (3, 3))
>>> b = torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64)
>>> x = torch.zeros(3, dtype=torch.float64)
>>>
>>> solver = BiCGSTABSolver()
>>> solver.set_epsilon(1e-10)
>>> ok = solver.solve(A, b, x)  # x is updated in place
>>>
>>> # Functional form, inputs are left untouched
>>> from torch_bicgstab import bicgstab_solve
>>> x, num_iters, residual, converged = bicgstab_solve(A, b, epsilon=1e-10)

Each solve emits one INFO record on the ``torch_bicgstab.bicgstab`` logger
with the fields success, its, max_iter, rTr, err, omega and rTh.
"""

import logging

from .bicgstab import (
    BiCGSTABSolver,
    SolveReport,
    SolveResult,
    bicgstab_solve,
    is_zero,
)

from .blas import TorchBLAS

from .check import ShapeException

from .config import SolverConfig

from .errors import (
    BiCGSTABError,
    BreakdownError,
    DegenerateStartError,
)

from .matrix import (
    DenseMatrix,
    SparseMatrix,
    LinearOperator,
    as_matrix,
    mult,
)

from .protocol import Matrix, VectorOps

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Solver
    "BiCGSTABSolver",
    "SolveReport",
    "SolveResult",
    "bicgstab_solve",
    "is_zero",
    "SolverConfig",
    # Errors
    "BiCGSTABError",
    "BreakdownError",
    "DegenerateStartError",
    "ShapeException",
    # Matrices and vectors
    "Matrix",
    "VectorOps",
    "DenseMatrix",
    "SparseMatrix",
    "LinearOperator",
    "TorchBLAS",
    "as_matrix",
    "mult",
    # Version
    "__version__",
]
