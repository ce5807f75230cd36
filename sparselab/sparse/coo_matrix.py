from typing import Optional, List, Dict, Tuple, Any, Sequence, TextIO

import numpy as np

from .. import logger
from .sparse_matrix import SparseMatrix, EntryRef
from .utils import Size
from ._spmv import spmv_coo, coo_order


class COOMatrix(SparseMatrix):
    def __init__(self, *, dtype=None) -> None:
        """
        Initialize an empty sparse matrix in COOrdinate (triplet) format.

        Each stored entry is one (row, col, value) triplet. A coordinate is
        stored at most once; writing it again overwrites the value.

        Parameters:
            dtype (dtype | None, optional): scalar type of the elements.
                Defaults to `options.default_dtype`.
        """
        super().__init__(dtype=dtype)
        self._row: List[int] = []
        self._col: List[int] = []
        self._data: List[Any] = []
        self._pos: Dict[Tuple[int, int], int] = {}
        self._perm: Optional[np.ndarray] = None

    @classmethod
    def from_arrays(cls, row: Sequence[int], col: Sequence[int], data: Sequence,
                    *, dtype=None) -> 'COOMatrix':
        """Build from index and value arrays, as if `m[row[k], col[k]] = data[k]`
        was executed for every k in order. Duplicated coordinates keep the
        last value."""
        if not (len(row) == len(col) == len(data)):
            raise ValueError(f"row, col and data must have the same length, but got "
                             f"{len(row)}, {len(col)} and {len(data)}")
        m = cls(dtype=dtype)
        for i, j, v in zip(row, col, data):
            m.set(i, j, v)
        return m

    @classmethod
    def _from_sorted(cls, row: List[int], col: List[int], data: List[Any],
                     shape: Size, *, dtype=None) -> 'COOMatrix':
        m = cls(dtype=dtype)
        m._row, m._col = list(row), list(col)
        m._data = [m._dtype.type(v) for v in data]
        m._pos = {(i, j): k for k, (i, j) in enumerate(zip(row, col))}
        m._nnz = len(m._data)
        m._nrows, m._ncols = shape
        return m

    def __repr__(self) -> str:
        return f"COOMatrix(shape={self.shape}, nnz={self.nnz}, dtype={self.dtype})"

    ### 1. Data Fetching ###
    @property
    def row(self) -> np.ndarray: return np.array(self._row, dtype=np.int64) # scipy convention
    @property
    def col(self) -> np.ndarray: return np.array(self._col, dtype=np.int64) # scipy convention
    @property
    def data(self) -> np.ndarray: return np.array(self._data, dtype=self._dtype) # scipy convention

    def _fetch(self, i: int, j: int) -> Optional[Any]:
        k = self._pos.get((i, j))
        return None if k is None else self._data[k]

    def _order(self) -> np.ndarray:
        # recomputed only after a new triplet was appended
        if self._perm is None:
            self._perm = coo_order(self._row, self._col)
        return self._perm

    def items(self):
        for k in self._order().tolist():
            yield self._row[k], self._col[k], self._data[k]

    ### 2. Insertion ###
    def _entry(self, i: int, j: int) -> EntryRef:
        k = self._pos.get((i, j))
        if k is None:
            k = len(self._data)
            self._row.append(i)
            self._col.append(j)
            self._data.append(self._dtype.type(0))
            self._pos[(i, j)] = k
            self._nnz += 1
            self._perm = None
        self._grow(i, j)

        return EntryRef(self._data, k, self._dtype.type)

    ### 3. Format Conversion ###
    def tocoo(self, *, copy=False):
        if copy:
            return self.copy()
        return self

    def tomap(self, *, copy=False):
        from .map_matrix import MapMatrix
        m = MapMatrix(dtype=self._dtype)
        for i, j, v in self.items():
            m.set(i, j, v)

        logger.info(f"COOMatrix converted to MapMatrix, shape {self.shape}, nnz {self.nnz}")
        return m

    ### 6. Arithmetic Operations ###
    def multiply(self, x) -> np.ndarray:
        return spmv_coo(self._row, self._col, self._data, self.shape, self._dtype, x,
                        order=self._order())

    ### 7. Output ###
    def _print(self, sink: TextIO) -> None:
        for i, j, v in self.items():
            sink.write(f"[{i}; {j}] = {v}\n")
