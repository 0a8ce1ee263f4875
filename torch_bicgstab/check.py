import torch 


class ShapeException(Exception):
    def __init__(self, name, shape, expected_shape):
        self.name = name
        self.shape = shape
        self.expected_shape = expected_shape
        super().__init__(f"{name} has shape {shape} expected {expected_shape}")


def check_coo(val:torch.Tensor,
              row:torch.Tensor, 
              col:torch.Tensor,
              shape:tuple
              ):
    """
    Check the COO format of a square system matrix

    Parameters
    ----------
    val: torch.Tensor
        [nnz] values of the sparse matrix
    row: torch.Tensor
        [nnz] row indices of the sparse matrix
    col: torch.Tensor
        [nnz] column indices of the sparse matrix
    shape: tuple
        (n,n) shape of the sparse matrix
    """
    if not val.ndim == 1:
        raise ShapeException("val", val.shape, "[nnz]")
    if not row.ndim == 1:
        raise ShapeException("row", row.shape, "[nnz]")
    if not col.ndim == 1:
        raise ShapeException("col", col.shape, "[nnz]")
    if not val.shape[0] == row.shape[0]:
        raise ShapeException("val", val.shape, f"[{row.shape[0]}]")
    if not val.shape[0] == col.shape[0]:
        raise ShapeException("val", val.shape, f"[{col.shape[0]}]")
    check_square(shape)


def check_square(shape:tuple):
    """
    Check that a matrix shape is square. An empty (0, 0) shape is accepted
    here, the solver reports it as a failed solve.

    Parameters
    ----------
    shape: tuple
        (n,n) shape of the matrix
    """
    if not len(shape) == 2:
        raise ShapeException("shape", tuple(shape), "(n,n)")
    if not shape[0] == shape[1]:
        raise ShapeException("shape", tuple(shape), f"({shape[0]},{shape[0]})")
    if shape[0] < 0:
        raise ShapeException("shape", tuple(shape), "(n,n) with n >= 0")


def check_vector(name:str, v:torch.Tensor):
    """
    Check that a tensor can be used as a solver vector

    Parameters
    ----------
    name: str
        name reported in the exception
    v: torch.Tensor
        [n] dense vector
    """
    if not v.ndim == 1:
        raise ShapeException(name, tuple(v.shape), "[n]")


def check_dtype(name:str, v:torch.Tensor, dtype:torch.dtype):
    """
    Check that a vector has the coefficient type of the matrix

    Parameters
    ----------
    name: str
        name reported in the exception
    v: torch.Tensor
        [n] dense vector
    dtype: torch.dtype
        dtype of the matrix values
    """
    if not v.dtype == dtype:
        raise TypeError(f"{name} has dtype {v.dtype} expected {dtype} (same as the matrix)")
