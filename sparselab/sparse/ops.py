from typing import Optional, Dict, TextIO, Sequence
import sys

import numpy as np
from tqdm import tqdm

from .. import logger
from ..options import options
from ..utils.timer import timer
from .sparse_matrix import SparseMatrix
from .map_matrix import MapMatrix
from .coo_matrix import COOMatrix

LAYOUTS = {
    'map': MapMatrix,
    'coo': COOMatrix,
}


def fill_stencil(m: SparseMatrix, N: int, *, progress: bool=False) -> SparseMatrix:
    """Fill `m` with the N x N tridiagonal stencil [1, -2, 1].

    The first and last rows are written outside the loop so the loop body
    needs no boundary test. An empty matrix ends with shape (N, N) and
    3N - 2 stored entries.

    Parameters:
        m (SparseMatrix): matrix to write into, of any layout.
        N (int): size of the stencil, at least 2.
        progress (bool, optional): show a tqdm bar over the interior rows.
            Defaults to False.

    Returns:
        SparseMatrix: `m` itself.
    """
    if N < 2:
        raise ValueError(f"the stencil needs N >= 2, but got {N}")

    m[0, 0] = -2
    m[0, 1] = 1
    m[N - 1, N - 2] = 1
    m[N - 1, N - 1] = -2

    for i in tqdm(range(1, N - 1), desc="mtx_fill", disable=not progress):
        m[i, i] = -2
        m[i, i + 1] = 1
        m[i, i - 1] = 1

    return m


def stencil_expected(N: int, dtype=None) -> np.ndarray:
    """Product of the N x N stencil with x = [0, 1, ..., N-1]."""
    dtype = options.default_dtype if dtype is None else dtype
    y = np.zeros((N, ), dtype=dtype)
    y[0] = 1
    y[N - 1] = -N
    return y


def check_eq(lhs: Sequence, rhs: Sequence) -> bool:
    """True if both vectors have the same length and equal entries.

    The comparison is exact; use `numpy.allclose` for values that went
    through different floating point paths.
    """
    if len(lhs) != len(rhs):
        return False

    for a, b in zip(lhs, rhs):
        if a != b:
            return False

    return True


def print_test_result(test: bool, test_name: str, sink: Optional[TextIO]=None) -> None:
    out = sys.stdout if sink is None else sink
    out.write(f"{test_name} test: \t{'PASSED' if test else 'FAILED'}\n")


def vmult_check(N: int, *, layout: str='map', dtype=None,
                sink: Optional[TextIO]=None, progress: bool=False) -> Dict[str, bool]:
    """Fill an N x N stencil matrix, multiply it by [0, ..., N-1] and check
    the shape, the number of stored entries and the product.

    A PASSED/FAILED line is written to `sink` for each step, followed by the
    matrix itself when N is below `options.print_threshold`, and a timing
    summary of both steps.

    Parameters:
        N (int): size of the matrix.
        layout (str, optional): 'map' or 'coo'. Defaults to 'map'.
        dtype (dtype | None, optional): scalar type of the matrix.
        sink (TextIO | None, optional): output stream, stdout by default.
        progress (bool, optional): show a progress bar while filling.

    Returns:
        dict: the outcome of the 'mtx_fill' and 'vmult' checks.
    """
    if layout not in LAYOUTS:
        raise ValueError(f"unknown layout '{layout}', expected one of {sorted(LAYOUTS)}")
    out = sys.stdout if sink is None else sink

    mtx = LAYOUTS[layout](dtype=dtype)
    x = np.arange(N, dtype=mtx.dtype)
    y_ex = stencil_expected(N, dtype=mtx.dtype)

    tmr = timer(sink=out)
    next(tmr)

    fill_stencil(mtx, N, progress=progress)
    tmr.send('mtx_fill')
    y = mtx.multiply(x)
    tmr.send('vmult')

    fill_ok = (mtx.rows() == N) and (mtx.cols() == N) and (mtx.nnz == 3 * N - 2)
    print_test_result(fill_ok, "mtx_fill", out)
    vmult_ok = check_eq(y, y_ex)
    print_test_result(vmult_ok, "vmult", out)

    tmr.send(None)

    out.write("\n============================\n\n")
    out.write("Matrix:\n\n")
    if N < options.print_threshold:
        mtx.print(out)
    else:
        out.write("N is too large to print the matrix\n")

    result = {'mtx_fill': fill_ok, 'vmult': vmult_ok}
    logger.info(f"vmult_check with N={N}, layout '{layout}': {result}")
    return result
