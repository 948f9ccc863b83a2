"""
Structure tensor (second-moment matrix) construction.

The per-pixel gradient products are aggregated with a Gaussian window, giving
the symmetric 2 x 2 matrix ``M = [[A, B], [B, C]]`` at every pixel.  Its
eigenvalues describe how strongly the intensity varies along the two
principal directions of the neighbourhood.
"""

from typing import NamedTuple

import numpy as np
from scipy.ndimage import convolve1d

from structure_corners.tensor.gradients import BORDER_MODE


class StructureTensor(NamedTuple):
    """Windowed gradient products: ``A = <Ix Ix>``, ``B = <Ix Iy>``, ``C = <Iy Iy>``."""
    A: np.ndarray
    B: np.ndarray
    C: np.ndarray


def smooth_separable(field: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Convolve *field* with *kernel* along both image axes."""
    out = convolve1d(field, kernel, axis=0, mode=BORDER_MODE)
    return convolve1d(out, kernel, axis=1, mode=BORDER_MODE)


def build_structure_tensor(Ix: np.ndarray, Iy: np.ndarray,
                           win_kernel: np.ndarray) -> StructureTensor:
    """Form the windowed structure tensor from image gradients.

    Parameters
    ----------
    Ix, Iy : np.ndarray
        H x W gradient images.
    win_kernel : np.ndarray
        1-D Gaussian windowing kernel, applied separably to each product.

    Returns
    -------
    StructureTensor
        Three H x W fields.  ``A`` and ``C`` are non-negative, ``B`` may take
        either sign.
    """
    A = smooth_separable(Ix * Ix, win_kernel)
    B = smooth_separable(Ix * Iy, win_kernel)
    C = smooth_separable(Iy * Iy, win_kernel)

    # A and C are smoothed squares: clamp rounding residue to keep them >= 0
    A = np.maximum(A, 0.0)
    C = np.maximum(C, 0.0)
    return StructureTensor(A, B, C)
