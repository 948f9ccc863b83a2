"""
Non-maximal suppression (NMS) for corner response maps.

A pixel survives when it is at least as large as every pixel in its 3x3
neighbourhood (a grey-scale dilation leaves it unchanged) and it strictly
exceeds a threshold set as a fraction of the global maximum response.
Plateaus of equal values are not thinned: every pixel on the plateau passes.
"""

import numpy as np
from scipy.ndimage import maximum_filter

# Side length of the square structuring element
NEIGHBOURHOOD_SIZE = 3


def local_maximum(h: np.ndarray) -> np.ndarray:
    """Replace every pixel by the maximum of its 3x3 neighbourhood."""
    return maximum_filter(h, size=NEIGHBOURHOOD_SIZE, mode="nearest")


def select_local_maxima(h: np.ndarray, quality_level: float) -> np.ndarray:
    """Mark strong local maxima of a response map.

    Parameters
    ----------
    h : np.ndarray
        2-D corner response map.
    quality_level : float
        Fraction in (0, 1] of the global maximum used as the threshold.

    Returns
    -------
    np.ndarray
        Boolean map, True at every pixel that strictly exceeds
        ``quality_level * max(h)`` and equals its 3x3 local maximum.
    """
    max_val = float(np.max(h)) if h.size else 0.0
    if max_val <= 0:
        return np.zeros(h.shape, dtype=bool)

    threshold = quality_level * max_val
    return (h > threshold) & (h == local_maximum(h))


def mask_to_coords(mask: np.ndarray) -> np.ndarray:
    """Return the True pixels of *mask* as a 2 x N (row, col) array.

    Coordinates follow row-major image traversal order.
    """
    rows, cols = np.nonzero(mask)
    return np.vstack([rows, cols])
