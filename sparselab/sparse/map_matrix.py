from typing import Optional, List, Iterator, Tuple, Any, TextIO
from bisect import bisect_left

import numpy as np

from .. import logger
from .sparse_matrix import SparseMatrix, EntryRef
from .utils import check_index
from ._spmv import spmv_rows


class SortedRow():
    """Ordered mapping from column index to value for one matrix row.

    Columns are kept in a sorted list searched by bisection, with the values
    in a parallel list, so iteration is always in ascending column order.
    """
    __slots__ = ('_keys', '_vals')

    def __init__(self) -> None:
        self._keys: List[int] = []
        self._vals: List[Any] = []

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"SortedRow({dict(self.items())})"

    def find(self, j: int) -> int:
        """Position of column `j`, or -1 if it is not stored."""
        pos = bisect_left(self._keys, j)
        if pos < len(self._keys) and self._keys[pos] == j:
            return pos
        return -1

    def __contains__(self, j: int) -> bool:
        return self.find(j) >= 0

    def get(self, j: int, default=None):
        pos = self.find(j)
        return default if pos < 0 else self._vals[pos]

    def __getitem__(self, j: int):
        pos = self.find(j)
        if pos < 0:
            raise KeyError(j)
        return self._vals[pos]

    def __setitem__(self, j: int, value) -> None:
        pos = bisect_left(self._keys, j)
        if pos < len(self._keys) and self._keys[pos] == j:
            self._vals[pos] = value
        else:
            self._keys.insert(pos, j)
            self._vals.insert(pos, value)

    def setdefault(self, j: int, value) -> bool:
        """Insert (j, value) if column `j` is absent.

        Returns:
            bool: True if a new entry was inserted.
        """
        pos = bisect_left(self._keys, j)
        if pos < len(self._keys) and self._keys[pos] == j:
            return False
        self._keys.insert(pos, j)
        self._vals.insert(pos, value)
        return True

    def keys(self) -> List[int]:
        return list(self._keys)

    def items(self) -> Iterator[Tuple[int, Any]]:
        return zip(self._keys, self._vals)


class MapMatrix(SparseMatrix):
    def __init__(self, *, dtype=None) -> None:
        """
        Initialize an empty sparse matrix stored as one ordered map per row.

        Parameters:
            dtype (dtype | None, optional): scalar type of the elements.
                Defaults to `options.default_dtype`.

        Example:

            >>> m = MapMatrix()
            >>> m[0, 0] = -2
            >>> m[0, 1] = 1
            >>> m.shape, m.nnz
            ((1, 2), 2)
            >>> m @ np.array([1.0, 2.0])
            array([0.])
        """
        super().__init__(dtype=dtype)
        self._data: List[SortedRow] = []

    def __repr__(self) -> str:
        return f"MapMatrix(shape={self.shape}, nnz={self.nnz}, dtype={self.dtype})"

    ### 1. Data Fetching ###
    def _fetch(self, i: int, j: int) -> Optional[Any]:
        if i >= len(self._data):
            return None
        return self._data[i].get(j)

    def items(self):
        for i, row in enumerate(self._data):
            for j, v in row.items():
                yield i, j, v

    def row(self, i: int) -> Tuple[Tuple[int, Any], ...]:
        """The stored (column, value) pairs of row `i` in ascending column order.
        Rows that were never addressed are empty."""
        i, _ = check_index(i, 0)
        if i >= len(self._data):
            return ()
        return tuple(self._data[i].items())

    ### 2. Insertion ###
    def _entry(self, i: int, j: int) -> EntryRef:
        if len(self._data) < i + 1:
            self._data.extend(SortedRow() for _ in range(i + 1 - len(self._data)))

        row = self._data[i]
        if row.setdefault(j, self._dtype.type(0)):
            self._nnz += 1
        self._grow(i, j)

        return EntryRef(row, j, self._dtype.type)

    ### 3. Format Conversion ###
    def tocoo(self, *, copy=False):
        from .coo_matrix import COOMatrix
        row, col, data = [], [], []
        for i, j, v in self.items():
            row.append(i)
            col.append(j)
            data.append(v)

        logger.info(f"MapMatrix converted to COOMatrix, shape {self.shape}, nnz {self.nnz}")
        return COOMatrix._from_sorted(row, col, data, self.shape, dtype=self._dtype)

    def tomap(self, *, copy=False):
        if copy:
            return self.copy()
        return self

    ### 6. Arithmetic Operations ###
    def multiply(self, x) -> np.ndarray:
        return spmv_rows(self._data, self.shape, self._dtype, x)

    ### 7. Output ###
    def _print(self, sink: TextIO) -> None:
        for i, row in enumerate(self._data):
            for j, v in row.items():
                sink.write(f"[{i}; {j}] = {v}\n")
