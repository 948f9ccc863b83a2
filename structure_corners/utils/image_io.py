"""
Image I/O helpers.

Thin wrappers around PIL and scikit-image for consistent image loading,
colour conversion, and output directory management.
"""

import os
import numpy as np
from PIL import Image
from skimage.color import rgb2gray


def load_image(path: str) -> np.ndarray:
    """Load an image from disk as an H x W x 3 uint8 RGB array."""
    return np.array(Image.open(path).convert("RGB"))


def to_grayscale(img: np.ndarray) -> np.ndarray:
    """Convert an image to a float64 grayscale image in [0, 1].

    Parameters
    ----------
    img : np.ndarray
        H x W x 3 uint8 RGB image, or an H x W image which is only rescaled.

    Returns
    -------
    np.ndarray
        H x W float64 image.
    """
    if img.ndim == 2:
        if np.issubdtype(img.dtype, np.integer):
            return img.astype(np.float64) / np.iinfo(img.dtype).max
        return img.astype(np.float64)
    return rgb2gray(img)


def load_grayscale(path: str):
    """Load an image and return ``(rgb, gray)``.

    Returns
    -------
    rgb : np.ndarray
        H x W x 3 uint8 array, kept for drawing overlays.
    gray : np.ndarray
        H x W float64 array in [0, 1] fed to the detector.
    """
    rgb = load_image(path)
    return rgb, to_grayscale(rgb)


def ensure_output_dirs(names: list, base: str = "results") -> None:
    """Create one output subdirectory per scene name under *base*."""
    for name in names:
        os.makedirs(os.path.join(base, name), exist_ok=True)
