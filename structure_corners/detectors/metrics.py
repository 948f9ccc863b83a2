"""
Corner response metrics on the structure tensor.

Every metric reduces the per-pixel tensor ``M = [[A, B], [B, C]]`` to a single
score where larger means more corner-like.  The metrics act elementwise and
always return finite values for finite input: degenerate pixels (flat
regions, rounding in the eigenvalue discriminant) are clamped to zero.
"""

from enum import Enum

import numpy as np

HARRIS_ALPHA = 0.06


class CornerMetric(Enum):
    HARRIS = "harris"
    HARMONIC_MEAN = "harmonic_mean"
    MIN_EIGEN = "min_eigen"

    @classmethod
    def parse(cls, value) -> "CornerMetric":
        """Accept a member or its name (``"harris"``, ``"min_eigen"``, ...)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Unknown corner metric {value!r} (expected one of: {names})"
            ) from None


def harris_metric(A: np.ndarray, B: np.ndarray, C: np.ndarray) -> np.ndarray:
    """Harris response ``det(M) - alpha * trace(M)**2``, negatives set to 0."""
    det_M = A * C - B * B
    trace_M = A + C
    response = det_M - HARRIS_ALPHA * trace_M * trace_M
    return np.maximum(response, 0.0)


def harmonic_mean_metric(A: np.ndarray, B: np.ndarray,
                         C: np.ndarray) -> np.ndarray:
    """Harmonic-mean response ``A * C / (A + C)``.

    Pixels with ``A + C == 0`` (no gradient energy at all) score zero.
    """
    numerator = A * C
    denominator = A + C
    response = np.zeros_like(numerator)
    np.divide(numerator, denominator, out=response, where=denominator > 0)
    return response


def min_eigen_metric(A: np.ndarray, B: np.ndarray,
                     C: np.ndarray) -> np.ndarray:
    """Smallest eigenvalue of ``M`` (Shi-Tomasi response).

    Closed form for a symmetric 2 x 2 matrix: the larger eigenvalue is
    ``(tr + sqrt(tr**2 - 4 det)) / 2`` and the smaller one is
    ``det / lambda_max``, which avoids the cancellation of
    ``(tr - sqrt(...)) / 2`` on edge pixels where ``lambda_min << lambda_max``.
    The discriminant is clamped at zero before the square root, pixels with
    ``lambda_max == 0`` score zero, and the result is clamped at zero since
    ``M`` is positive semi-definite.
    """
    trace_M = A + C
    det_M = A * C - B * B
    discriminant = np.maximum(trace_M * trace_M - 4.0 * det_M, 0.0)
    lambda_max = 0.5 * (trace_M + np.sqrt(discriminant))
    lambda_min = np.zeros_like(lambda_max)
    np.divide(det_M, lambda_max, out=lambda_min, where=lambda_max > 0)
    return np.maximum(lambda_min, 0.0)


_METRICS = {
    CornerMetric.HARRIS: harris_metric,
    CornerMetric.HARMONIC_MEAN: harmonic_mean_metric,
    CornerMetric.MIN_EIGEN: min_eigen_metric,
}


def compute_response(metric: CornerMetric, A: np.ndarray, B: np.ndarray,
                     C: np.ndarray) -> np.ndarray:
    """Evaluate the selected *metric* on the tensor fields."""
    return _METRICS[CornerMetric.parse(metric)](A, B, C)
