from typing import Tuple, Any
from operator import index as _index

import numpy as np

from .errors import IndexOutOfRange

Size = Tuple[int, ...]


def check_index(i, j) -> Tuple[int, int]:
    """Convert a pair of matrix indices to Python ints, rejecting negatives.
    Booleans are not accepted as indices."""
    if isinstance(i, (bool, np.bool_)) or isinstance(j, (bool, np.bool_)):
        raise TypeError(f"matrix indices must be integers, but got "
                        f"({type(i).__name__}, {type(j).__name__})")
    try:
        i, j = _index(i), _index(j)
    except TypeError:
        raise TypeError(f"matrix indices must be integers, but got "
                        f"({type(i).__name__}, {type(j).__name__})")
    if i < 0 or j < 0:
        raise IndexOutOfRange(f"negative index ({i}, {j}) is not supported")
    return i, j


def check_bounds(i: int, j: int, shape: Size):
    if i >= shape[0] or j >= shape[1]:
        raise IndexOutOfRange(f"index ({i}, {j}) is out of range for shape {shape}")


def zero_of(dtype) -> Any:
    """The additive identity of the scalar type `dtype`."""
    return np.dtype(dtype).type(0)
