"""
Sampled 1-D Gaussian and derivative-of-Gaussian kernels.

Both kernels share the same odd-length support of ``2r + 1`` taps centred on
the origin, with ``r = ceil(4 * sigma)``, which keeps the truncated mass of
the continuous Gaussian negligible.
"""

import math

import numpy as np

# Half-width of the kernel support, in multiples of sigma
SUPPORT_SIGMAS = 4.0


def _check_sigma(sigma: float) -> float:
    sigma = float(sigma)
    if not math.isfinite(sigma) or sigma <= 0:
        raise ValueError(f"sigma must be a positive finite number, got {sigma}")
    return sigma


def gaussian_kernel_radius(sigma: float) -> int:
    """Return the half-width (in taps) of the kernel support for *sigma*."""
    sigma = _check_sigma(sigma)
    return max(1, int(math.ceil(SUPPORT_SIGMAS * sigma)))


def _support(sigma: float) -> np.ndarray:
    r = gaussian_kernel_radius(sigma)
    return np.arange(-r, r + 1, dtype=np.float64)


def create_gaussian_kernel(sigma: float) -> np.ndarray:
    """Build a normalised 1-D Gaussian smoothing kernel.

    Parameters
    ----------
    sigma : float
        Standard deviation in pixels.  Must be > 0.

    Returns
    -------
    np.ndarray
        Symmetric kernel of odd length whose weights sum to one.
    """
    sigma = _check_sigma(sigma)
    x = _support(sigma)
    g = np.exp(-(x ** 2) / (2.0 * sigma ** 2))
    return g / g.sum()


def create_gaussian_derivative_kernel(sigma: float) -> np.ndarray:
    """Build a 1-D first-derivative-of-Gaussian kernel.

    The weights are ``-x / sigma**2 * g(x)`` with ``g`` the normalised
    Gaussian of :func:`create_gaussian_kernel`, so the kernel is exactly
    antisymmetric and its taps sum to zero.

    Parameters
    ----------
    sigma : float
        Standard deviation in pixels.  Must be > 0.

    Returns
    -------
    np.ndarray
        Antisymmetric kernel of odd length, same support as the smoothing
        kernel for the same *sigma*.
    """
    sigma = _check_sigma(sigma)
    x = _support(sigma)
    return -x / sigma ** 2 * create_gaussian_kernel(sigma)
