from __future__ import annotations

import numpy as np
import pytest

from framedsp import spectrums, windows


def test_hann_window_applied():
    node = windows.WindowNode("hann", 4)

    out = node.process([1.0, 1.0, 1.0, 1.0])

    np.testing.assert_allclose(out, [0.0, 0.75, 0.75, 0.0], atol=1e-6)


def test_rectangular_window_is_identity():
    node = windows.WindowNode("rectangular", 3)
    np.testing.assert_allclose(node.process([0.5, -0.25, 2.0]), [0.5, -0.25, 2.0])
    np.testing.assert_array_equal(node.coefficients, np.ones(3))


@pytest.mark.parametrize("kind", windows.WINDOW_KINDS)
def test_window_coefficients_shape(kind):
    coeffs = windows.window_coefficients(kind, 16)
    assert coeffs.shape == (16,)
    assert coeffs.dtype == np.float32
    assert np.max(coeffs) <= 1.0 + 1e-6


def test_window_truncates_and_keeps_tail():
    node = windows.WindowNode("rectangular", 4)
    node.process([1.0, 2.0, 3.0, 4.0])

    out = node.process([9.0])

    np.testing.assert_allclose(out, [9.0, 2.0, 3.0, 4.0])


def test_unknown_window_rejected():
    with pytest.raises(ValueError):
        windows.WindowNode("triangle-ish", 8)


@pytest.mark.parametrize(
    "mode, expected",
    [
        ("magnitude", [5.0, 0.0]),
        ("power", [25.0, 0.0]),
        ("db", [20.0 * np.log10(5.0), 20.0 * np.log10(spectrums.DB_FLOOR)]),
    ],
)
def test_spectrum_modes(mode, expected):
    node = spectrums.SpectrumNode(2, mode)

    out = node.process([3 + 4j, 0j])

    np.testing.assert_allclose(out, expected, rtol=1e-5)


def test_unknown_spectrum_mode_rejected():
    with pytest.raises(ValueError):
        spectrums.SpectrumNode(4, "phase")


def test_spectrum_recomputes_prefix_only():
    node = spectrums.SpectrumNode(3)
    node.process([1j, 2j, 3j])

    out = node.process([-4.0])

    np.testing.assert_allclose(out, [4.0, 2.0, 3.0])
