"""Capabilities the BiCGSTAB solver needs from its matrix and vector types."""

from typing import Protocol, runtime_checkable, Any


@runtime_checkable
class Matrix(Protocol):
    """
    Protocol for square system matrices.

    Any object with a dimension and an out-of-place matrix-vector product can
    be handed to the solver: dense or sparse storage, or a matrix-free
    operator. The solver never mutates the matrix.
    """

    def dimension(self) -> int:
        """Number of rows (and columns) of the matrix."""
        ...

    def mult(self, x: Any, y: Any) -> None:
        """
        Compute y = A*x.

        Args:
            x: Input vector of length n, left unchanged
            y: Output vector of length n, overwritten
        """
        ...


@runtime_checkable
class VectorOps(Protocol):
    """
    Protocol for the elementary vector operations of the solver.

    Vectors are opaque to the solver; every access goes through this
    interface. ``zeros`` must return zero-filled vectors.
    """

    def dimension(self, v: Any) -> int:
        ...

    def zeros(self, n: int, like: Any) -> Any:
        ...

    def dot(self, u: Any, v: Any) -> float:
        ...

    def axpy(self, alpha: float, x: Any, y: Any) -> None:
        """y := y + alpha*x"""
        ...

    def scal(self, alpha: float, x: Any) -> None:
        """x := alpha*x"""
        ...

    def tiny(self, v: Any) -> float:
        """Smallest positive normal value of the coefficient type."""
        ...

    def copy(self, src: Any, dst: Any) -> None:
        """dst := src"""
        ...
