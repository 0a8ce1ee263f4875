"""
Vector capability on dense 1-D torch tensors.

All updates are in place so the solver's working set is allocated once per
solve. Gradients are not tracked through the iteration.
"""

import torch
from torch import Tensor

from .check import check_vector


class TorchBLAS:
    """Level-1 BLAS on 1-D ``torch.Tensor`` vectors (CPU or CUDA)."""

    def dimension(self, v: Tensor) -> int:
        check_vector("vector", v)
        return v.shape[0]

    def zeros(self, n: int, like: Tensor) -> Tensor:
        return torch.zeros(n, dtype=like.dtype, device=like.device)

    def tiny(self, v: Tensor) -> float:
        """Smallest positive normal value of the coefficient type of ``v``."""
        return torch.finfo(v.dtype).tiny

    @torch.no_grad()
    def dot(self, u: Tensor, v: Tensor) -> float:
        return torch.dot(u, v).item()

    @torch.no_grad()
    def axpy(self, alpha: float, x: Tensor, y: Tensor) -> None:
        y.add_(x, alpha=alpha)

    @torch.no_grad()
    def scal(self, alpha: float, x: Tensor) -> None:
        x.mul_(alpha)

    @torch.no_grad()
    def copy(self, src: Tensor, dst: Tensor) -> None:
        dst.copy_(src)
