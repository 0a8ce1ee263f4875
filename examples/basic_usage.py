import torch
import torch_bicgstab as tb


if __name__ == '__main__':
    # Non-symmetric 3x3 system
    A = torch.tensor([[4.0, 1.0, 0.0],
                      [-1.0, 4.0, 1.0],
                      [0.0, -1.0, 4.0]], dtype=torch.float64)
    b = torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64)

    # Dense matrix, sparse matrix and matrix-free operator give the same answer
    for matrix in [A, A.to_sparse_csr(), tb.LinearOperator(lambda v: A @ v, 3)]:
        result = tb.bicgstab_solve(matrix, b, epsilon=1e-12)
        print(f"{type(matrix).__name__}: x={result.x.tolist()} its={result.num_iters} converged={result.converged}")

    print(f"reference: x={torch.linalg.solve(A, b).tolist()}")
