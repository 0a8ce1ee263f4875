import logging
import torch
import torch_bicgstab as tb
from torch_bicgstab.random import diag_dominant


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    device = 'cuda' if torch.cuda.is_available() else 'cpu'
    n = 100
    val, row, col, shape = diag_dominant(n, density=0.05, device=device)
    A = tb.SparseMatrix(val, row, col, shape)

    b = torch.randn(n, dtype=torch.float64, device=device)
    x = torch.zeros(n, dtype=torch.float64, device=device)

    solver = tb.BiCGSTABSolver()
    solver.set_epsilon(1e-10)
    ok = solver.solve(A, b, x)

    print(f"success={ok} its={solver.last_report.its}")
    print(f"||Ax-b||={torch.linalg.norm(A.matvec(x) - b).item():.3e}")
