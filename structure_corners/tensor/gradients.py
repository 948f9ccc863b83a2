"""
Image gradient estimation with separable Gaussian derivative filters.

Each gradient component is obtained by smoothing along one axis with the
Gaussian kernel and differentiating along the other with the derivative
kernel.  Borders are reflect-extended so the gradients have the same shape
as the input image.
"""

import numpy as np
from scipy.ndimage import convolve1d

BORDER_MODE = "reflect"


def estimate_gradients(image: np.ndarray, g_kernel: np.ndarray,
                       dg_kernel: np.ndarray):
    """Compute the horizontal and vertical gradients of *image*.

    Parameters
    ----------
    image : np.ndarray
        H x W grayscale image.
    g_kernel : np.ndarray
        1-D Gaussian smoothing kernel.
    dg_kernel : np.ndarray
        1-D derivative-of-Gaussian kernel.

    Returns
    -------
    Ix, Iy : np.ndarray
        H x W float64 gradients along columns (x) and rows (y).
    """
    image = np.asarray(image, dtype=np.float64)

    Ix = convolve1d(image, g_kernel, axis=0, mode=BORDER_MODE)
    Ix = convolve1d(Ix, dg_kernel, axis=1, mode=BORDER_MODE)

    Iy = convolve1d(image, dg_kernel, axis=0, mode=BORDER_MODE)
    Iy = convolve1d(Iy, g_kernel, axis=1, mode=BORDER_MODE)

    return Ix, Iy
