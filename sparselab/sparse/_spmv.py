from typing import Optional, Sequence, Tuple

import numpy as np

from .errors import DimensionMismatch

_Size = Tuple[int, ...]


def _shape_check(shape: _Size, x: np.ndarray):
    if x.ndim != 1:
        raise DimensionMismatch(f"Illegal vector shape {x.shape} found in the "
                                "sparse matrix-vector multiplication")
    if shape[1] != x.shape[0]:
        raise DimensionMismatch("Incompatible shapes detected in "
                                "sparse matrix-vector multiplication, "
                               f"{shape} and {x.shape}")


def _result(shape: _Size, dtype, x: np.ndarray) -> np.ndarray:
    return np.zeros((shape[0], ), dtype=np.result_type(dtype, x.dtype))


def spmv_rows(rows: Sequence, shape: _Size, dtype, x) -> np.ndarray:
    """Multiply a row-associative matrix with a dense vector.

    Parameters:
        rows (Sequence[SortedRow]): rows of the matrix, each iterating its
            (column, value) pairs in ascending column order.
        shape (Size): (nrows, ncols) of the matrix.
        dtype (dtype): scalar type of the stored values.
        x (array_like): 1-D vector of length ncols.

    Raises:
        DimensionMismatch: if `x` is not 1-D or its length is not ncols.

    Returns:
        ndarray: a new vector of length nrows.
    """
    x = np.asarray(x)
    _shape_check(shape, x)
    result = _result(shape, dtype, x)

    for i, row in enumerate(rows):
        for j, v in row.items():
            result[i] += x[j] * v

    return result


def coo_order(row: Sequence[int], col: Sequence[int]) -> np.ndarray:
    """Permutation that sorts triplets row-major with ascending columns."""
    row = np.asarray(row, dtype=np.int64)
    col = np.asarray(col, dtype=np.int64)
    return np.lexsort((col, row))


def spmv_coo(row: Sequence[int], col: Sequence[int], data: Sequence,
             shape: _Size, dtype, x, order: Optional[np.ndarray]=None) -> np.ndarray:
    """Multiply a triplet matrix with a dense vector.

    The triplets are accumulated in row-major order with ascending columns,
    one after another, so the floating point summation order is the same as
    in `spmv_rows`.

    Parameters:
        order (ndarray | None, optional): a precomputed `coo_order(row, col)`.
    """
    x = np.asarray(x)
    _shape_check(shape, x)
    result = _result(shape, dtype, x)
    if len(data) == 0:
        return result

    if order is None:
        order = coo_order(row, col)
    row = np.asarray(row, dtype=np.int64)[order]
    col = np.asarray(col, dtype=np.int64)[order]
    values = np.asarray(data, dtype=dtype)[order]

    new_vals = x[col] * values
    np.add.at(result, row, new_vals)

    return result
