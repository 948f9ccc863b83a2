"""
Structure-tensor corner detector.

Pipeline per call to :meth:`CornerDetector.detect`:

1. gradients ``Ix, Iy`` from separable Gaussian / derivative-of-Gaussian
   filtering,
2. windowed structure tensor ``A, B, C``,
3. corner response from the configured metric,
4. 3x3 non-maximal suppression above ``quality_level * max(response)``.

The kernels are built once from the configured sigmas.  Every intermediate
field is local to a single call, so one detector can serve several threads
working on independent images.
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from structure_corners.detectors.metrics import CornerMetric, compute_response
from structure_corners.kernels.gaussian import (
    create_gaussian_derivative_kernel,
    create_gaussian_kernel,
)
from structure_corners.suppression.nms import mask_to_coords, select_local_maxima
from structure_corners.tensor.gradients import estimate_gradients
from structure_corners.tensor.structure_tensor import build_structure_tensor
from structure_corners.utils.visualization import save_detector_fields

# Orientation value meaning "not computed"
UNDEFINED_ANGLE = -1.0

# Keypoint size, in multiples of the window sigma
KEYPOINT_SIZE_SIGMAS = 3.0


@dataclass(frozen=True)
class Keypoint:
    """A detected corner.

    ``x`` is the column and ``y`` the row of the pixel.  ``size`` is a display
    diameter only.
    """
    x: int
    y: int
    size: float
    response: float
    angle: float = UNDEFINED_ANGLE

    @property
    def pt(self) -> Tuple[int, int]:
        return self.x, self.y


def _readonly(kernel: np.ndarray) -> np.ndarray:
    kernel.setflags(write=False)
    return kernel


class CornerDetector:
    """Detect corners with a configurable structure-tensor response."""

    def __init__(self, metric="harris", visualize: bool = False,
                 quality_level: float = 0.01, gradient_sigma: float = 1.0,
                 window_sigma: float = 2.0, debug_dir: str = "results/debug"):
        """
        Parameters
        ----------
        metric : str or CornerMetric
            ``"harris"``, ``"harmonic_mean"`` or ``"min_eigen"``.
        visualize : bool
            Save the intermediate fields of every call under *debug_dir*.
        quality_level : float
            Fraction in (0, 1] of the strongest response used as threshold.
        gradient_sigma : float
            Scale of the gradient smoothing / derivative kernels (> 0).
        window_sigma : float
            Scale of the structure-tensor window (> 0).  Also sets the
            reported keypoint size, ``3 * window_sigma``.
        debug_dir : str
            Output directory for diagnostic figures.
        """
        quality_level = float(quality_level)
        if not 0.0 < quality_level <= 1.0:
            raise ValueError(
                f"quality_level must lie in (0, 1], got {quality_level}"
            )

        self._metric = CornerMetric.parse(metric)
        self._visualize = bool(visualize)
        self._quality_level = quality_level
        self._gradient_sigma = float(gradient_sigma)
        self._window_sigma = float(window_sigma)
        self._debug_dir = debug_dir

        # Raise ValueError for non-positive sigmas
        self._g_kernel = _readonly(create_gaussian_kernel(gradient_sigma))
        self._dg_kernel = _readonly(create_gaussian_derivative_kernel(gradient_sigma))
        self._win_kernel = _readonly(create_gaussian_kernel(window_sigma))

    @classmethod
    def from_config(cls, cfg: dict, **overrides) -> "CornerDetector":
        """Build a detector from the ``detector`` section of a YAML config.

        Keys that are missing fall back to the constructor defaults; keyword
        *overrides* that are not None take precedence over *cfg*.
        """
        params = dict(cfg or {})
        params.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**params)

    # -- read-only configuration ------------------------------------------

    @property
    def metric(self) -> CornerMetric:
        return self._metric

    @property
    def visualize(self) -> bool:
        return self._visualize

    @property
    def quality_level(self) -> float:
        return self._quality_level

    @property
    def gradient_sigma(self) -> float:
        return self._gradient_sigma

    @property
    def window_sigma(self) -> float:
        return self._window_sigma

    @property
    def keypoint_size(self) -> float:
        return KEYPOINT_SIZE_SIGMAS * self._window_sigma

    @property
    def kernels(self):
        """The ``(g, dg, win)`` kernels, as read-only arrays."""
        return self._g_kernel, self._dg_kernel, self._win_kernel

    # -- detection ----------------------------------------------------------

    def _fields(self, image: np.ndarray) -> dict:
        image = np.asarray(image)
        if image.ndim != 2:
            raise ValueError(
                f"Expected a single-channel H x W image, got shape {image.shape}"
            )

        Ix, Iy = estimate_gradients(image, self._g_kernel, self._dg_kernel)
        A, B, C = build_structure_tensor(Ix, Iy, self._win_kernel)
        response = compute_response(self._metric, A, B, C)
        return {"Ix": Ix, "Iy": Iy, "A": A, "B": B, "C": C,
                "response": response}

    def compute_response_field(self, image: np.ndarray) -> np.ndarray:
        """Return the corner response map of *image* (same shape)."""
        return self._fields(image)["response"]

    def detect(self, image: np.ndarray, name: str = "image") -> List[Keypoint]:
        """Detect corners in a grayscale image.

        Parameters
        ----------
        image : np.ndarray
            H x W single-channel image.  Not modified.
        name : str
            Label for the diagnostic figure when visualisation is enabled.

        Returns
        -------
        list of Keypoint
            One keypoint per strong local maximum, in row-major order.
        """
        fields = self._fields(image)
        response = fields["response"]

        corner_mask = select_local_maxima(response, self._quality_level)
        coords = mask_to_coords(corner_mask)

        size = self.keypoint_size
        keypoints = [
            Keypoint(x=int(col), y=int(row), size=size,
                     response=float(response[row, col]))
            for row, col in zip(coords[0], coords[1])
        ]

        if self._visualize:
            fields["corner_mask"] = corner_mask
            save_detector_fields(fields, name, self._debug_dir)

        return keypoints

    def __repr__(self):
        return (f"{type(self).__name__}(metric={self._metric.value!r}, "
                f"visualize={self._visualize}, "
                f"quality_level={self._quality_level}, "
                f"gradient_sigma={self._gradient_sigma}, "
                f"window_sigma={self._window_sigma})")
