import numpy as np

from structure_corners.suppression.nms import (
    local_maximum,
    mask_to_coords,
    select_local_maxima,
)


def test_local_maximum_is_3x3_dilation():
    h = np.zeros((5, 5))
    h[2, 2] = 1.0
    dilated = local_maximum(h)
    assert (dilated[1:4, 1:4] == 1.0).all()
    assert dilated.sum() == 9


def test_single_peak_survives():
    h = np.zeros((7, 7))
    h[3, 3] = 1.0
    h[3, 4] = 0.9
    mask = select_local_maxima(h, 0.5)
    assert mask_to_coords(mask).tolist() == [[3], [3]]


def test_threshold_is_strict():
    h = np.zeros((7, 7))
    h[1, 1] = 1.0
    h[5, 5] = 0.5
    mask = select_local_maxima(h, 0.5)
    assert mask_to_coords(mask).tolist() == [[1], [1]]

    mask = select_local_maxima(h, 1.0)
    assert not mask.any()


def test_plateau_pixels_each_survive():
    h = np.zeros((7, 7))
    h[3, 3] = h[3, 4] = h[4, 3] = 2.0
    mask = select_local_maxima(h, 0.1)
    assert mask.sum() == 3


def test_border_maxima_survive():
    h = np.zeros((6, 6))
    h[0, 0] = 3.0
    h[5, 2] = 2.0
    mask = select_local_maxima(h, 0.1)
    assert mask_to_coords(mask).tolist() == [[0, 5], [0, 2]]


def test_non_positive_field_has_no_maxima():
    assert not select_local_maxima(np.zeros((4, 4)), 0.01).any()
    assert not select_local_maxima(-np.ones((4, 4)), 0.01).any()


def test_coords_follow_row_major_order():
    mask = np.zeros((4, 4), dtype=bool)
    mask[3, 0] = mask[0, 3] = mask[1, 1] = True
    assert mask_to_coords(mask).tolist() == [[0, 1, 3], [3, 1, 0]]


def test_empty_mask_coords_shape():
    assert mask_to_coords(np.zeros((3, 3), dtype=bool)).shape == (2, 0)


def test_mask_is_boolean_map_of_input_shape():
    h = np.zeros((5, 6))
    h[2, 3] = 1.0
    mask = select_local_maxima(h, 0.5)
    assert mask.dtype == bool
    assert mask.shape == (5, 6)
