#!/usr/bin/env python3
"""
run_detector.py – Structure-Tensor Corner Detection

Loads configuration from configs/default.yaml (or a user-specified file),
runs the corner detector on every scene defined in the config, and writes
the corner overlays (and optional diagnostic figures) to the results
directory.

Usage
-----
    python run_detector.py
    python run_detector.py --config configs/default.yaml
    python run_detector.py --scenes checkerboard
    python run_detector.py --metric min_eigen --quality-level 0.05
    python run_detector.py --visualize
"""

import argparse
import os
import sys
import time

import numpy as np
import yaml

# Ensure the project root is on the Python path when invoked directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from structure_corners.detectors.corner_detector import CornerDetector
from structure_corners.detectors.metrics import CornerMetric
from structure_corners.utils.image_io import load_grayscale, ensure_output_dirs
from structure_corners.utils.visualization import save_keypoints


# ──────────────────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────────────────

def load_config(path: str) -> dict:
    with open(path, "r") as fh:
        return yaml.safe_load(fh) or {}


def banner(text: str) -> None:
    width = 60
    print("\n" + "─" * width)
    print(f"  {text}")
    print("─" * width)


# ──────────────────────────────────────────────────────────────────────────────
# Per-scene detection
# ──────────────────────────────────────────────────────────────────────────────

def run_scene(scene_cfg: dict, detector: CornerDetector,
              results_dir: str) -> dict:
    """Detect corners in a single scene and return summary metrics."""
    name = scene_cfg["name"]
    banner(f"Scene: {name}")

    rgb, gray = load_grayscale(scene_cfg["img"])
    print(f"  Loaded image  {gray.shape[1]}×{gray.shape[0]}")

    t0 = time.time()
    keypoints = detector.detect(gray, name=name)
    elapsed = time.time() - t0
    print(f"  {len(keypoints)} corners ({detector.metric.value}) "
          f"in {elapsed * 1000:.1f} ms")

    responses = np.array([kp.response for kp in keypoints])
    if len(responses):
        print(f"  Response range [{responses.min():.3e}, {responses.max():.3e}]")

    save_keypoints(rgb, keypoints, name, results_dir,
                   title=f"{detector.metric.value} corners")

    return {
        "scene": name,
        "width": gray.shape[1],
        "height": gray.shape[0],
        "corners": len(keypoints),
        "max_response": float(responses.max()) if len(responses) else None,
        "time_ms": elapsed * 1000,
    }


# ──────────────────────────────────────────────────────────────────────────────
# Entry point
# ──────────────────────────────────────────────────────────────────────────────

def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Structure-tensor corner detection (Harris / harmonic mean / min-eigen)"
    )
    p.add_argument(
        "--config", default="configs/default.yaml",
        help="Path to YAML configuration file (default: configs/default.yaml)",
    )
    p.add_argument(
        "--scenes", nargs="*", default=None,
        help="Subset of scene names to process (default: all scenes in config)",
    )
    p.add_argument(
        "--metric", choices=[m.value for m in CornerMetric], default=None,
        help="Override the corner response metric",
    )
    p.add_argument(
        "--quality-level", type=float, default=None,
        help="Override the quality level (fraction of the strongest response)",
    )
    p.add_argument(
        "--visualize", action="store_true", default=None,
        help="Save the intermediate fields of every detection",
    )
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # Load configuration
    if not os.path.exists(args.config):
        print(f"[ERROR] Config file not found: {args.config}")
        sys.exit(1)
    cfg = load_config(args.config)

    results_dir = cfg.get("results_dir", "results")
    scenes = cfg.get("scenes", [])

    # Optionally restrict to a subset of scenes
    if args.scenes:
        scenes = [s for s in scenes if s["name"] in args.scenes]
        if not scenes:
            print(f"[ERROR] No matching scenes found for: {args.scenes}")
            sys.exit(1)

    # Validate that image files exist
    for sc in scenes:
        if not os.path.exists(sc["img"]):
            print(f"[ERROR] Image not found: {sc['img']}")
            sys.exit(1)

    try:
        detector = CornerDetector.from_config(
            cfg.get("detector", {}),
            metric=args.metric,
            quality_level=args.quality_level,
            visualize=args.visualize,
            debug_dir=os.path.join(results_dir, "debug"),
        )
    except (TypeError, ValueError) as exc:
        print(f"[ERROR] Invalid detector configuration: {exc}")
        sys.exit(1)

    # Create output directories
    ensure_output_dirs([s["name"] for s in scenes], base=results_dir)

    banner("Structure-Tensor Corner Detection")
    print(f"  Config  : {args.config}")
    print(f"  Detector: {detector}")
    print(f"  Scenes  : {[s['name'] for s in scenes]}")
    print(f"  Output  : {results_dir}/")

    t0 = time.time()
    all_metrics = []

    for sc in scenes:
        metrics = run_scene(sc, detector, results_dir)
        all_metrics.append(metrics)

    # ── Summary table ──────────────────────────────────────────────────────
    banner("Results Summary")
    header = f"{'Scene':<14} {'Size':>11} {'Corners':>9} {'MaxResp':>11} {'Time':>10}"
    print(header)
    print("─" * len(header))
    for m in all_metrics:
        size = f"{m['width']}×{m['height']}"
        resp = f"{m['max_response']:.3e}" if m["max_response"] is not None else "–"
        print(f"{m['scene']:<14} {size:>11} {m['corners']:>9} "
              f"{resp:>11} {m['time_ms']:>8.1f}ms")

    elapsed = time.time() - t0
    print(f"\nDetection complete in {elapsed:.1f}s")
    print(f"Results saved to: {os.path.abspath(results_dir)}/")


if __name__ == "__main__":
    main()
