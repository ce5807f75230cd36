# test_coo_matrix.py
import io

import pytest
import numpy as np

from sparselab.sparse import COOMatrix, MapMatrix, DimensionMismatch, IndexOutOfRange
from sparselab.sparse import coo_matrix, fill_stencil
from map_matrix_data import *


def build(writes, dtype=None):
    m = COOMatrix(dtype=dtype)
    for i, j, v in writes:
        m[i, j] = v
    return m


@pytest.mark.parametrize("data", write_sequence_data)
def test_growth_and_nnz(data):
    m = build(data["writes"])
    assert m.shape == data["shape"]
    assert m.nnz == data["nnz"]
    assert len(m.data) == m.nnz


def test_init():
    m = COOMatrix(dtype=np.float32)
    assert m.shape == (0, 0)
    assert m.nnz == 0
    assert m.dtype == np.float32
    assert m.row.shape == (0, )


def test_overwrite_keeps_one_triplet():
    m = COOMatrix()
    m[0, 1] = 2.0
    m[0, 1] = 3.0
    m.get_mut(0, 1).value += 1.0
    assert m.nnz == 1
    assert m[0, 1] == 4.0
    np.testing.assert_array_equal(m.data, [4.0])


def test_get_lenient_and_strict_bounds():
    m = COOMatrix()
    m[1, 2] = 1.0
    assert m.get(0, 0) == 0.0
    assert m.nnz == 1
    with pytest.raises(IndexOutOfRange):
        m.get(2, 0)


@pytest.mark.parametrize("data", scenario_data)
def test_scenario(data):
    m = build(data["writes"])
    assert m.nnz == data["nnz"]
    assert m.shape == data["shape"]
    np.testing.assert_array_equal(m.multiply(data["x"]), data["y"])
    np.testing.assert_array_equal(m.to_dense(), data["dense"])

    sink = io.StringIO()
    build(data["writes"], np.int64).print(sink)
    assert sink.getvalue() == data["print"]


@pytest.mark.parametrize("data", multiply_data)
def test_multiply(data):
    m = build(data["writes"])
    np.testing.assert_array_equal(m @ data["x"], data["y"])
    with pytest.raises(DimensionMismatch):
        m.multiply(data["x"][:-1])


def test_same_summation_order_as_map_matrix():
    rng = np.random.default_rng(0)
    N = 200
    mm = MapMatrix()
    fill_stencil(mm, N)
    for i, j, _ in list(mm.items()):
        mm[i, j] = rng.standard_normal()

    coo = COOMatrix()
    for i, j, v in reversed(list(mm.items())):
        coo[i, j] = v

    x = rng.standard_normal(N)
    np.testing.assert_array_equal(coo.multiply(x), mm.multiply(x))
    np.testing.assert_allclose(mm.multiply(x), mm.to_dense() @ x)


def test_from_arrays():
    m = COOMatrix.from_arrays([0, 1, 0], [2, 0, 2], [1.0, 2.0, 5.0])
    assert m.nnz == 2
    assert m.shape == (2, 3)
    assert m[0, 2] == 5.0

    with pytest.raises(ValueError):
        COOMatrix.from_arrays([0, 1], [0], [1.0, 2.0])


def test_factory_and_conversion():
    m = coo_matrix((np.array([1.0, 3.0, 2.0]), (np.array([0, 1, 0]), np.array([0, 1, 2]))))
    assert isinstance(m, COOMatrix)
    np.testing.assert_array_equal(m.toarray(), [[1.0, 0.0, 2.0], [0.0, 3.0, 0.0]])

    mm = m.tomap()
    assert isinstance(mm, MapMatrix)
    assert list(mm.items()) == list(m.items())
    assert m.tocoo() is m
    assert m.tocoo(copy=True) is not m

    sp = m.to_scipy()
    np.testing.assert_array_equal(sp.toarray(), m.toarray())
    assert coo_matrix(np.zeros((3, 3))).shape == (0, 0)


def test_multiply_after_insertion():
    m = build([(1, 1, 2.0), (0, 2, 1.0)])
    x = np.array([1.0, 2.0, 3.0])
    np.testing.assert_array_equal(m.multiply(x), [3.0, 4.0])

    m[0, 0] = 5.0
    m[1, 1] = 4.0
    np.testing.assert_array_equal(m.multiply(x), [8.0, 8.0])
    assert [(i, j) for i, j, _ in m.items()] == [(0, 0), (0, 2), (1, 1)]

    m[2, 0] = 1.0
    np.testing.assert_array_equal(m.multiply(x), [8.0, 8.0, 1.0])
    assert [(i, j) for i, j, _ in m.items()] == [(0, 0), (0, 2), (1, 1), (2, 0)]
