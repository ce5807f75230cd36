
import numpy as np

from .errors import DimensionMismatch, IndexOutOfRange
from .sparse_matrix import SparseMatrix, EntryRef
from .map_matrix import MapMatrix, SortedRow
from .coo_matrix import COOMatrix

from .ops import fill_stencil, stencil_expected, check_eq, vmult_check


def _from_dense(cls, arr: np.ndarray, dtype):
    if arr.ndim != 2:
        raise ValueError(f"a dense matrix must be 2-D, but got {arr.ndim}-D")
    m = cls(dtype=arr.dtype if dtype is None else dtype)
    for i, j in zip(*np.nonzero(arr)):
        m.set(i, j, arr[i, j])
    return m


def map_matrix(arg1=None, /, *, dtype=None) -> MapMatrix:
    """A sparse matrix stored as one ordered map per row.
    (A Scipy-like API to build matrices.)

    This can be instantiated in several ways:
        map_matrix()
            to construct an empty matrix, filled later by `m[i, j] = v`.

        map_matrix(D)
            where D is a 2-D array; every non-zero of D is written. The shape
            grows only to the last non-zero row and column, so trailing zero
            rows or columns of D are dropped and an all-zero D gives (0, 0).

        map_matrix(S)
            with another sparse matrix S (equivalent to S.tomap(copy=True)).

    Parameters:
        arg1 (ndarray | SparseMatrix | None): source of the entries.
        dtype (dtype | None, optional): scalar type of the elements.
    """
    if arg1 is None:
        return MapMatrix(dtype=dtype)

    elif isinstance(arg1, SparseMatrix):
        if dtype is None or np.dtype(dtype) == arg1.dtype:
            return arg1.tomap(copy=True)
        m = MapMatrix(dtype=dtype)
        for i, j, v in arg1.items():
            m.set(i, j, v)
        return m

    elif isinstance(arg1, np.ndarray):
        return _from_dense(MapMatrix, arg1, dtype)

    raise TypeError(f"Error: Illegal combination of parameters")


def coo_matrix(arg1=None, /, *, dtype=None) -> COOMatrix:
    """A sparse matrix in COOrdinate format.
    (A Scipy-like API to build matrices.)

    This can be instantiated in several ways:
        coo_matrix()
            to construct an empty matrix.

        coo_matrix(D)
            where D is a 2-D array; every non-zero of D is written. As with
            `map_matrix(D)`, the shape covers only the non-zeros of D.

        coo_matrix(S)
            with another sparse matrix S (equivalent to S.tocoo(copy=True)).

        coo_matrix((data, (row, col)))
            where ``A[row[k], col[k]] = data[k]``, later duplicates winning.

    Parameters:
        arg1 (ndarray | SparseMatrix | tuple | None): source of the entries.
        dtype (dtype | None, optional): scalar type of the elements.
    """
    if arg1 is None:
        return COOMatrix(dtype=dtype)

    elif isinstance(arg1, SparseMatrix):
        if dtype is None or np.dtype(dtype) == arg1.dtype:
            return arg1.tocoo(copy=True)
        return COOMatrix.from_arrays(*_unzip(arg1), dtype=dtype)

    elif isinstance(arg1, np.ndarray):
        return _from_dense(COOMatrix, arg1, dtype)

    elif isinstance(arg1, (tuple, list)) and len(arg1) == 2:
        data, (row, col) = arg1
        return COOMatrix.from_arrays(row, col, data, dtype=dtype)

    raise TypeError(f"Error: Illegal combination of parameters")


def _unzip(m: SparseMatrix):
    row, col, data = [], [], []
    for i, j, v in m.items():
        row.append(i)
        col.append(j)
        data.append(v)
    return row, col, data
