"""
Concrete system matrices for the BiCGSTAB solver.

Every class here implements the :class:`~torch_bicgstab.protocol.Matrix`
protocol: ``dimension()`` and ``mult(x, y)`` writing ``A @ x`` into ``y``.

- DenseMatrix: 2-D strided tensor
- SparseMatrix: COO triplets, converted to CSR once and cached
- LinearOperator: matrix-free callable ``x -> A @ x``
"""

import torch
from torch import Tensor
from typing import Callable, Optional, Tuple, Union

from .check import check_coo, check_dtype, check_square, ShapeException
from .protocol import Matrix


class DenseMatrix:
    """Dense square matrix stored as a 2-D tensor."""

    def __init__(self, A: Tensor):
        if A.ndim != 2:
            raise ShapeException("A", tuple(A.shape), "(n,n)")
        check_square(tuple(A.shape))
        self.A = A
        self.n = A.shape[0]
        self.dtype = A.dtype
        self.device = A.device

    def dimension(self) -> int:
        return self.n

    @torch.no_grad()
    def mult(self, x: Tensor, y: Tensor) -> None:
        check_dtype("x", x, self.dtype)
        check_dtype("y", y, self.dtype)
        torch.mv(self.A, x, out=y)

    def __repr__(self):
        return f"DenseMatrix(n={self.n}, dtype={self.dtype}, device={self.device})"


class SparseMatrix:
    """
    Sparse square matrix built from COO triplets.

    Duplicate entries are summed. The COO -> CSR conversion happens once at
    construction, so repeated products inside the solver only pay for the
    SpMV itself.
    """

    def __init__(self, val: Tensor, row: Tensor, col: Tensor, shape: Tuple[int, int]):
        check_coo(val, row, col, shape)
        self.val = val
        self.row = row
        self.col = col
        self.shape = tuple(shape)
        self.n = shape[0]
        self.dtype = val.dtype
        self.device = val.device

        indices = torch.stack([row, col], dim=0)
        coo = torch.sparse_coo_tensor(indices, val, self.shape, device=val.device, dtype=val.dtype)
        self._csr = coo.coalesce().to_sparse_csr()

    @classmethod
    def from_torch_sparse(cls, A: Tensor) -> "SparseMatrix":
        """Build from a ``torch.sparse_coo`` or ``torch.sparse_csr`` tensor."""
        if A.layout == torch.sparse_csr:
            A = A.to_sparse_coo()
        if A.layout != torch.sparse_coo:
            raise ValueError(f"Unsupported sparse layout: {A.layout}")
        A = A.coalesce()
        indices = A.indices()
        return cls(A.values(), indices[0], indices[1], tuple(A.shape))

    @classmethod
    def from_dense(cls, A: Tensor) -> "SparseMatrix":
        return cls.from_torch_sparse(A.to_sparse_coo())

    @property
    def nnz(self) -> int:
        return self._csr.values().shape[0]

    def dimension(self) -> int:
        return self.n

    def matvec(self, x: Tensor) -> Tensor:
        """Sparse matrix-vector product y = A @ x"""
        return torch.mv(self._csr, x)

    @torch.no_grad()
    def mult(self, x: Tensor, y: Tensor) -> None:
        check_dtype("x", x, self.dtype)
        check_dtype("y", y, self.dtype)
        y.copy_(self.matvec(x))

    def to_dense(self) -> Tensor:
        return self._csr.to_dense()

    def __repr__(self):
        return (f"SparseMatrix(shape={self.shape}, nnz={self.nnz}, "
                f"dtype={self.dtype}, device={self.device})")


class LinearOperator:
    """
    Matrix-free operator.

    Parameters
    ----------
    matvec : Callable[[Tensor], Tensor]
        Function returning ``A @ x`` as a new tensor
    n : int
        Dimension of the operator
    """

    def __init__(self, matvec: Callable[[Tensor], Tensor], n: int):
        if n < 0:
            raise ShapeException("shape", (n, n), "(n,n) with n >= 0")
        self.matvec = matvec
        self.n = n

    def dimension(self) -> int:
        return self.n

    @torch.no_grad()
    def mult(self, x: Tensor, y: Tensor) -> None:
        y.copy_(self.matvec(x))

    def __repr__(self):
        return f"LinearOperator(n={self.n})"


MatrixLike = Union[Matrix, Tensor, Callable[[Tensor], Tensor]]


def as_matrix(A: MatrixLike, n: Optional[int] = None) -> Matrix:
    """
    Adapt ``A`` to the Matrix protocol.

    Parameters
    ----------
    A : Matrix, torch.Tensor or callable
        An object already implementing the protocol is returned unchanged.
        Dense tensors become :class:`DenseMatrix`, sparse COO/CSR tensors
        become :class:`SparseMatrix`, callables become :class:`LinearOperator`.
    n : int, optional
        Dimension, required when ``A`` is a callable

    Returns
    -------
    Matrix
    """
    if isinstance(A, Tensor):
        if A.layout in (torch.sparse_coo, torch.sparse_csr):
            return SparseMatrix.from_torch_sparse(A)
        return DenseMatrix(A)
    if isinstance(A, Matrix):
        return A
    if callable(A):
        if n is None:
            raise ValueError("n is required to wrap a callable as a LinearOperator")
        return LinearOperator(A, n)
    raise TypeError(f"Cannot use {type(A).__name__} as a matrix")


def mult(A: Matrix, x, y) -> None:
    """y = A @ x"""
    A.mult(x, y)
