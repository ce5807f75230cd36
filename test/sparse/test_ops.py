import io

import pytest
import numpy as np

from sparselab import option_context
from sparselab.sparse import MapMatrix, COOMatrix
from sparselab.sparse import fill_stencil, stencil_expected, check_eq, vmult_check
from map_matrix_data import stencil_sizes

ALL_LAYOUTS = [MapMatrix, COOMatrix]


@pytest.mark.parametrize("layout", ALL_LAYOUTS)
@pytest.mark.parametrize("N", stencil_sizes)
def test_fill_stencil(layout, N):
    m = fill_stencil(layout(), N)

    assert m.rows() == N
    assert m.cols() == N
    assert m.nnz == 3 * N - 2
    assert m.get(0, 0) == -2 and m.get(0, 1) == 1
    assert m.get(N - 1, N - 2) == 1 and m.get(N - 1, N - 1) == -2


@pytest.mark.parametrize("layout", ALL_LAYOUTS)
@pytest.mark.parametrize("N", stencil_sizes)
def test_stencil_product(layout, N):
    m = fill_stencil(layout(), N)
    x = np.arange(N, dtype=np.float64)
    y = m.multiply(x)

    assert y[0] == 1
    assert y[N - 1] == -N
    assert check_eq(y, stencil_expected(N))


def test_fill_stencil_refill_is_idempotent():
    m = fill_stencil(MapMatrix(), 6)
    fill_stencil(m, 6)
    assert m.nnz == 16


def test_fill_stencil_progress(capsys):
    m = fill_stencil(COOMatrix(), 6, progress=True)
    assert m.nnz == 16

    err = capsys.readouterr().err
    assert "mtx_fill" in err
    assert "4/4" in err


def test_fill_stencil_quiet_by_default(capsys):
    fill_stencil(MapMatrix(), 6)
    assert capsys.readouterr().err == ""


def test_fill_stencil_too_small():
    with pytest.raises(ValueError):
        fill_stencil(MapMatrix(), 1)


def test_stencil_expected():
    np.testing.assert_array_equal(stencil_expected(2), [1.0, -2.0])
    np.testing.assert_array_equal(stencil_expected(4), [1.0, 0.0, 0.0, -4.0])
    assert stencil_expected(3, dtype=np.float32).dtype == np.float32


def test_check_eq():
    assert check_eq([1.0, 2.0], np.array([1.0, 2.0]))
    assert not check_eq([1.0, 2.0], [1.0, 2.0, 3.0])
    assert not check_eq([1.0, 2.0], [1.0, 2.5])
    assert check_eq([], [])


@pytest.mark.parametrize("layout", ['map', 'coo'])
def test_vmult_check_small(layout):
    sink = io.StringIO()
    result = vmult_check(5, layout=layout, sink=sink)
    text = sink.getvalue()

    assert result == {'mtx_fill': True, 'vmult': True}
    assert "mtx_fill test: \tPASSED" in text
    assert "vmult test: \tPASSED" in text
    assert "nrows: 5 | ncols:5 | nnz: 13" in text
    assert "[4; 4] = -2.0" in text
    assert "Timer received None and paused." in text


def test_vmult_check_large():
    sink = io.StringIO()
    result = vmult_check(1000, dtype=np.float32, sink=sink)
    assert all(result.values())
    assert "N is too large to print the matrix" in sink.getvalue()


def test_vmult_check_threshold():
    sink = io.StringIO()
    with option_context(print_threshold=100):
        vmult_check(20, sink=sink)
    assert "[19; 19] = -2.0" in sink.getvalue()


def test_vmult_check_unknown_layout():
    with pytest.raises(ValueError):
        vmult_check(5, layout='csr')
