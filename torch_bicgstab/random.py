import torch 
from typing import Optional, Tuple

def diag_dominant(n:int, 
        density:float=0.1, 
        symmetric:bool=False,
        margin:float=1.0,
        generator:Optional[torch.Generator]=None,
        device=torch.device('cpu'),
        dtype=torch.float64
        )->Tuple[torch.Tensor, 
                 torch.Tensor, 
                 torch.Tensor, 
                 Tuple[int, int]]:
    """
    random strictly diagonally dominant COO matrix generator

    The matrix is nonsingular and well conditioned, which makes it a safe
    test system for iterative solvers.

    Parameters
    ----------
    n : int
        dimension of the (n,n) matrix
    density : float, optional
        Density of the off-diagonal part, by default 0.1
    symmetric : bool, optional
        Mirror the off-diagonal part, by default False
    margin : float, optional
        How much each diagonal entry exceeds the absolute row sum, by default 1.0
    generator : torch.Generator, optional
        Random generator, by default the global one
    device : torch.device, optional
        Device of the matrix, by default torch.device('cpu')
    dtype : torch.dtype, optional
        Data type of the matrix, by default torch.float64
    
    Returns
    -------
    Tuple[torch.Tensor, torch.Tensor, torch.Tensor, Tuple[int, int]]
        val: torch.Tensor
            [nnz] values of the sparse matrix
        row: torch.Tensor
            [nnz] row indices of the sparse matrix
        col: torch.Tensor
            [nnz] column indices of the sparse matrix
        shape: tuple
            (n,n) shape of the sparse matrix
    """
    assert n > 0, f"n must be positive, got {n}"
    assert 0.0 <= density <= 1.0, f"density must be in [0, 1], got {density}"

    nnz = int(n * n * density)
    row = torch.randint(0, n, (nnz,), generator=generator).to(device)
    col = torch.randint(0, n, (nnz,), generator=generator).to(device)
    val = torch.randn(nnz, generator=generator, dtype=dtype).to(device)

    off = row != col
    row, col, val = row[off], col[off], val[off]
    if symmetric:
        row, col = torch.cat([row, col]), torch.cat([col, row])
        val = torch.cat([val, val])

    # duplicates are summed by the solver, so bound the row sum of |val| as stored
    row_sum = torch.zeros(n, dtype=dtype, device=device)
    row_sum.scatter_add_(0, row, val.abs())
    diag = torch.arange(n, device=device)

    val = torch.cat([val, row_sum + margin])
    row = torch.cat([row, diag])
    col = torch.cat([col, diag])
    return val, row, col, (n, n)
