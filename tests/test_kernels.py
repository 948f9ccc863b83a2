import numpy as np
import pytest
from numpy.testing import assert_allclose

from structure_corners.kernels.gaussian import (
    create_gaussian_derivative_kernel,
    create_gaussian_kernel,
    gaussian_kernel_radius,
)

SIGMAS = [0.5, 1.0, 1.6, 2.0, 3.7]


@pytest.mark.parametrize("sigma", SIGMAS)
def test_gaussian_kernel_is_symmetric_and_normalised(sigma):
    g = create_gaussian_kernel(sigma)
    assert len(g) % 2 == 1
    assert len(g) == 2 * gaussian_kernel_radius(sigma) + 1
    assert np.array_equal(g, g[::-1])
    assert_allclose(g.sum(), 1.0, rtol=1e-12)
    assert np.argmax(g) == len(g) // 2
    assert (g > 0).all()


@pytest.mark.parametrize("sigma", SIGMAS)
def test_derivative_kernel_is_antisymmetric_with_zero_sum(sigma):
    dg = create_gaussian_derivative_kernel(sigma)
    assert len(dg) == len(create_gaussian_kernel(sigma))
    assert np.array_equal(dg, -dg[::-1])
    assert dg[len(dg) // 2] == 0
    assert abs(dg.sum()) < 1e-12


def test_support_covers_four_sigma():
    assert gaussian_kernel_radius(1.0) == 4
    assert gaussian_kernel_radius(2.0) == 8
    assert gaussian_kernel_radius(1.1) == 5
    assert gaussian_kernel_radius(0.1) == 1


def test_truncated_mass_is_negligible():
    sigma = 2.0
    r = gaussian_kernel_radius(sigma)
    x = np.arange(-10 * r, 10 * r + 1)
    full = np.exp(-x ** 2 / (2 * sigma ** 2))
    inside = full[np.abs(x) <= r].sum() / full.sum()
    assert inside > 0.9999


@pytest.mark.parametrize("sigma", [0, -1.0, float("nan"), float("inf")])
def test_invalid_sigma_rejected(sigma):
    with pytest.raises(ValueError):
        create_gaussian_kernel(sigma)
    with pytest.raises(ValueError):
        create_gaussian_derivative_kernel(sigma)
