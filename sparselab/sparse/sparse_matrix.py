from typing import Optional, Union, Iterator, Tuple, Any, TextIO, TypeVar
import sys

import numpy as np

from .. import logger
from ..options import options
from .utils import Size, check_index, check_bounds, zero_of

_Self = TypeVar('_Self', bound='SparseMatrix')
Number = Union[int, float, complex, np.number]


class EntryRef():
    """Mutable handle to one stored value of a sparse matrix.

    Returned by `SparseMatrix.get_mut`. Reading or assigning `value` goes
    straight to the storage slot, coercing assigned values to the matrix dtype.

    Example:

        >>> m.get_mut(0, 1).value = 3.0
        >>> m.get_mut(0, 1).value += 1.0
    """
    __slots__ = ('_slots', '_key', '_type')

    def __init__(self, slots, key, scalar_type) -> None:
        self._slots = slots
        self._key = key
        self._type = scalar_type

    @property
    def value(self):
        return self._slots[self._key]

    @value.setter
    def value(self, val: Number):
        self._slots[self._key] = self._type(val)

    def __repr__(self) -> str:
        return f"EntryRef(value={self.value!r})"


class SparseMatrix():
    """Interface of a two dimensional sparse matrix that is filled by indexed
    write access.

    A matrix starts empty with shape (0, 0). Writing to (i, j) grows the
    number of rows to at least i + 1 and the number of columns to at least
    j + 1; dimensions never shrink. Entries that were never written are zero.
    Subclasses decide how the entries are laid out in memory.
    """
    _nnz: int
    _nrows: int
    _ncols: int

    def __init__(self, *, dtype=None) -> None:
        self._nnz = 0
        self._nrows = 0
        self._ncols = 0
        self._dtype = np.dtype(options.default_dtype if dtype is None else dtype)

    ### 1. Data Fetching ###
    @property
    def nnz(self) -> int: return self._nnz
    @property
    def nrows(self) -> int: return self._nrows
    @property
    def ncols(self) -> int: return self._ncols
    @property
    def shape(self) -> Size: return (self._nrows, self._ncols)
    @property
    def ndim(self) -> int: return 2
    @property
    def dtype(self): return self._dtype

    def rows(self) -> int:
        """Number of rows."""
        return self._nrows

    def cols(self) -> int:
        """Number of columns."""
        return self._ncols

    def get(self, i: int, j: int):
        """Read the value at (i, j) without modifying the matrix.

        Parameters:
            i, j (int): row and column index.

        Raises:
            IndexOutOfRange: if an index is negative or outside `shape`.

        Returns:
            scalar: the stored value, or zero of `dtype` if (i, j) is not stored.
        """
        i, j = check_index(i, j)
        check_bounds(i, j, self.shape)
        val = self._fetch(i, j)
        return zero_of(self._dtype) if val is None else val

    def _fetch(self, i: int, j: int) -> Optional[Any]:
        """Return the stored value at (i, j), or None when absent."""
        raise NotImplementedError

    def items(self) -> Iterator[Tuple[int, int, Any]]:
        """Iterate the stored (i, j, value) triples, row by row with
        ascending column indices."""
        raise NotImplementedError

    def __getitem__(self, key):
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("sparse matrices are indexed by a pair (i, j)")
        return self.get(*key)

    ### 2. Insertion ###
    def get_mut(self, i: int, j: int) -> EntryRef:
        """Return a handle to the value at (i, j), inserting it first if needed.

        A missing entry is inserted with value zero, increasing `nnz` by one,
        and the shape grows to hold (i, j). This is also true when the handle
        is only used for reading; use `get` to read without side effects.

        Raises:
            IndexOutOfRange: if an index is negative.
        """
        i, j = check_index(i, j)
        return self._entry(i, j)

    def _entry(self, i: int, j: int) -> EntryRef:
        raise NotImplementedError

    def set(self, i: int, j: int, value: Number) -> None:
        """Write `value` at (i, j), inserting the entry if needed."""
        self.get_mut(i, j).value = value

    def __setitem__(self, key, value):
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("sparse matrices are indexed by a pair (i, j)")
        self.set(key[0], key[1], value)

    def _grow(self, i: int, j: int) -> None:
        if i >= self._nrows:
            logger.debug(f"{type(self).__name__}: rows grown from {self._nrows} to {i + 1}")
            self._nrows = i + 1
        self._ncols = max(self._ncols, j + 1)

    ### 3. Format Conversion ###
    def to_dense(self, *, dtype=None) -> np.ndarray:
        """Convert to a dense array of shape (nrows, ncols)."""
        dtype = self._dtype if dtype is None else dtype
        out = np.zeros(self.shape, dtype=dtype)
        for i, j, v in self.items():
            out[i, j] = v
        return out

    def toarray(self, *, dtype=None) -> np.ndarray:
        return self.to_dense(dtype=dtype)

    def tocoo(self, *, copy=False):
        raise NotImplementedError

    def tomap(self, *, copy=False):
        raise NotImplementedError

    ### 4. Object Conversion ###
    def to_scipy(self):
        """Convert to a `scipy.sparse.coo_matrix` with the same shape."""
        from scipy.sparse import coo_matrix

        triplets = list(self.items())
        row = np.array([t[0] for t in triplets], dtype=np.int64)
        col = np.array([t[1] for t in triplets], dtype=np.int64)
        data = np.array([t[2] for t in triplets], dtype=self._dtype)
        return coo_matrix((data, (row, col)), shape=self.shape)

    ### 5. Manipulation ###
    def copy(self: _Self) -> _Self:
        new = type(self)(dtype=self._dtype)
        for i, j, v in self.items():
            new.set(i, j, v)
        return new

    ### 6. Arithmetic Operations ###
    def multiply(self, x) -> np.ndarray:
        """Matrix-vector product.

        Parameters:
            x (array_like): 1-D vector whose length equals `cols()`.

        Raises:
            DimensionMismatch: if `x` is not 1-D or has the wrong length.

        Returns:
            ndarray: a new vector of length `rows()`.
        """
        raise NotImplementedError

    def vmult(self, x) -> np.ndarray:
        return self.multiply(x)

    def matmul(self, other):
        if isinstance(other, SparseMatrix):
            raise TypeError("sparse-sparse multiplication is not supported")
        return self.multiply(other)

    def __matmul__(self, other):
        return self.matmul(other)

    ### 7. Output ###
    def print(self, sink: Optional[TextIO]=None) -> None:
        """Write the dimensions, then every stored entry, to `sink`.

        Parameters:
            sink (TextIO, optional): any object with a `write(str)` method.
                Defaults to `sys.stdout`.
        """
        out = sys.stdout if sink is None else sink
        out.write(f"nrows: {self._nrows} | ncols:{self._ncols} | nnz: {self._nnz}\n")
        self._print(out)

    def _print(self, sink: TextIO) -> None:
        raise NotImplementedError
