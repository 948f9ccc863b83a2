import numpy as np
from numpy.testing import assert_allclose

from structure_corners.kernels.gaussian import (
    create_gaussian_derivative_kernel,
    create_gaussian_kernel,
)
from structure_corners.tensor.gradients import estimate_gradients
from structure_corners.tensor.structure_tensor import build_structure_tensor

G = create_gaussian_kernel(1.0)
DG = create_gaussian_derivative_kernel(1.0)
WIN = create_gaussian_kernel(2.0)


def test_gradients_keep_shape(textured_image):
    Ix, Iy = estimate_gradients(textured_image[:40, :50], G, DG)
    assert Ix.shape == (40, 50)
    assert Iy.shape == (40, 50)


def test_horizontal_ramp_has_unit_x_gradient():
    ramp = np.tile(np.arange(40, dtype=float), (30, 1))
    Ix, Iy = estimate_gradients(ramp, G, DG)
    # Reflected borders bend the ramp, so only look at the interior
    assert_allclose(Ix[:, 8:-8], 1.0, rtol=1e-3)
    assert not Iy.any()


def test_vertical_ramp_has_unit_y_gradient():
    ramp = np.tile(np.arange(40, dtype=float), (30, 1)).T
    Ix, Iy = estimate_gradients(ramp, G, DG)
    assert_allclose(Iy[8:-8, :], 1.0, rtol=1e-3)
    assert not Ix.any()


def test_flat_image_has_exactly_zero_gradient(flat_image):
    Ix, Iy = estimate_gradients(flat_image, G, DG)
    assert not Ix.any()
    assert not Iy.any()


def test_input_not_modified(textured_image):
    before = textured_image.copy()
    estimate_gradients(textured_image, G, DG)
    assert np.array_equal(textured_image, before)


def test_tensor_diagonal_is_non_negative(textured_image):
    Ix, Iy = estimate_gradients(textured_image, G, DG)
    A, B, C = build_structure_tensor(Ix, Iy, WIN)
    assert A.shape == B.shape == C.shape == textured_image.shape
    assert (A >= 0).all()
    assert (C >= 0).all()
    assert (B < 0).any() and (B > 0).any()
    # Cauchy-Schwarz on the windowed products
    assert (A * C - B * B >= -1e-12 * (A * C).max()).all()


def test_edge_tensor_has_single_direction(edge_image):
    Ix, Iy = estimate_gradients(edge_image, G, DG)
    A, B, C = build_structure_tensor(Ix, Iy, WIN)
    assert A.max() > 0
    assert not B.any()
    assert not C.any()
