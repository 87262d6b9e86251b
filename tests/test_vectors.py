import numpy as np
import pytest

from framedsp import vectors
from framedsp.state import COMPLEX_DTYPE, REAL_DTYPE


def test_overlap_is_minimum_length():
    assert vectors.overlap(4, 7, 5) == 4
    assert vectors.overlap(3) == 3
    assert vectors.overlap() == 0


def test_scale_into_writes_prefix_only():
    out = np.full(5, -1.0, dtype=REAL_DTYPE)
    src = np.array([1.0, 2.0, 3.0], dtype=REAL_DTYPE)

    result = vectors.scale_into(out, src, 3.0, 2)

    assert result is out
    np.testing.assert_allclose(out, [3.0, 6.0, -1.0, -1.0, -1.0])
    assert out.dtype == REAL_DTYPE


def test_add_and_multiply_into():
    a = np.array([1.0, 2.0, 3.0], dtype=REAL_DTYPE)
    b = np.array([4.0, 5.0, 6.0], dtype=REAL_DTYPE)
    out = np.zeros(3, dtype=REAL_DTYPE)

    vectors.add_into(out, a, b, 3)
    np.testing.assert_allclose(out, [5.0, 7.0, 9.0])

    vectors.multiply_into(out, a, b, 2)
    np.testing.assert_allclose(out, [4.0, 10.0, 9.0])


def test_lift_and_real_into():
    src = np.array([1.5, -2.0], dtype=REAL_DTYPE)
    lifted = np.full(3, 9 + 9j, dtype=COMPLEX_DTYPE)

    vectors.lift_into(lifted, src, 2)
    assert lifted.tolist() == [1.5 + 0j, -2 + 0j, 9 + 9j]

    real = np.zeros(3, dtype=REAL_DTYPE)
    vectors.real_into(real, lifted, 3)
    np.testing.assert_allclose(real, [1.5, -2.0, 9.0])


def test_magnitude_into():
    src = np.array([3 + 4j, -1 + 0j], dtype=COMPLEX_DTYPE)
    out = np.zeros(2, dtype=REAL_DTYPE)

    vectors.magnitude_into(out, src, 2)

    np.testing.assert_allclose(out, [5.0, 1.0], rtol=1e-6)


def test_peak_and_rms():
    frame = np.array([1.0, -1.0, 1.0, -1.0], dtype=REAL_DTYPE)
    assert vectors.frame_peak(frame) == pytest.approx(1.0)
    assert vectors.frame_rms(frame) == pytest.approx(1.0)
    assert vectors.frame_peak(np.zeros(0)) == 0.0
    assert vectors.frame_rms(np.zeros(0)) == 0.0
