"""
Visualization utilities for the corner detector.

All functions save figures to disk rather than displaying them interactively,
making the module suitable for headless execution.  Figures are built with
the object API (``matplotlib.figure.Figure``) and never touch pyplot's
current-figure state, so concurrent detector calls each render their own
figure.  Saving is best-effort: a failure is reported and otherwise ignored.
"""

import os
import numpy as np
import matplotlib
matplotlib.use("Agg")          # non-interactive backend
from matplotlib.figure import Figure
from matplotlib.patches import Circle


# Panels of the diagnostic figure, in display order
FIELD_PANELS = [
    ("Ix", "Gradient Ix"),
    ("Iy", "Gradient Iy"),
    ("A", "Image A"),
    ("B", "Image B"),
    ("C", "Image C"),
    ("response", "Response"),
    ("corner_mask", "Local max"),
]


def _warn(what: str, exc: Exception) -> None:
    print(f"  [WARN] Could not save {what}: {exc!r}")


def keypoints_to_coords(keypoints: list) -> np.ndarray:
    """Return keypoint positions as a 2 x N (row, col) integer array."""
    if not keypoints:
        return np.empty((2, 0), dtype=int)
    return np.array([[kp.y, kp.x] for kp in keypoints], dtype=int).T


# ---------------------------------------------------------------------------
# Detector internals
# ---------------------------------------------------------------------------

def save_detector_fields(fields: dict, name: str, out_dir: str) -> bool:
    """Save a grid with the intermediate fields of one detection call.

    The response is shown scaled by ``1 / (0.9 * max)`` and clipped to [0, 1]
    so the strongest corners saturate.

    Parameters
    ----------
    fields : dict
        Maps ``"Ix"``, ``"Iy"``, ``"A"``, ``"B"``, ``"C"``, ``"response"`` and
        ``"corner_mask"`` to H x W arrays.  Missing or empty entries are
        skipped.
    name : str
        Label used for the title and the file name.
    out_dir : str
        Output directory (created if needed).

    Returns
    -------
    bool
        True when the figure was written.
    """
    panels = [(key, title) for key, title in FIELD_PANELS
              if fields.get(key) is not None and np.size(fields[key])]
    if not panels:
        return False

    path = os.path.join(out_dir, f"{name}_fields.jpg")
    try:
        os.makedirs(out_dir, exist_ok=True)
        fig = Figure(figsize=(3.5 * len(panels), 4))
        axes = fig.subplots(1, len(panels), squeeze=False)
        for ax, (key, title) in zip(axes[0], panels):
            data = np.asarray(fields[key], dtype=np.float64)
            if key == "response":
                max_val = data.max()
                if max_val > 0:
                    data = np.clip(data / (0.9 * max_val), 0, 1)
                ax.imshow(data, cmap="gray", vmin=0, vmax=1)
            else:
                ax.imshow(data, cmap="gray")
            ax.set_title(title)
            ax.axis("off")

        fig.suptitle(name)
        fig.tight_layout()
        fig.savefig(path, dpi=150, bbox_inches="tight")
    except Exception as exc:
        _warn(path, exc)
        return False
    return True


# ---------------------------------------------------------------------------
# Detected corners
# ---------------------------------------------------------------------------

def save_keypoints(img: np.ndarray, keypoints: list, name: str, out_dir: str,
                   title: str = "Corners") -> bool:
    """Save *img* with every keypoint drawn as a circle of its size.

    Returns True when the figure was written.
    """
    path = os.path.join(out_dir, name, "corners.jpg")
    try:
        fig = Figure(figsize=(10, 8))
        ax = fig.subplots()
        ax.imshow(img, cmap="gray" if img.ndim == 2 else None)

        coords = keypoints_to_coords(keypoints)
        for (row, col), kp in zip(coords.T, keypoints):
            ax.add_patch(Circle((col, row), kp.size / 2, color="r",
                                fill=False, linewidth=1))
        ax.plot(coords[1], coords[0], "r+", markersize=4)

        ax.set_title(f"{name} – {title} ({len(keypoints)} detected)")
        ax.axis("off")
        fig.tight_layout()
        fig.savefig(path, dpi=150, bbox_inches="tight")
    except Exception as exc:
        _warn(path, exc)
        return False
    return True
