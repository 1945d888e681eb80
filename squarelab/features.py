# features.py
# per-blob shape descriptors: box, perimeter, compactness, moments, eccentricity

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import math
import numpy as np

from .errors import InvalidInputError
from .topology import FG


@dataclass(frozen=True)
class FeatureVector:
    area: int
    perimeter: int
    box_width: int
    box_height: int
    aspect_ratio: float
    compactness: Optional[float]   # None when perimeter == 0
    eccentricity: float
    min_x: int = 0
    min_y: int = 0
    centroid: Tuple[float, float] = (0.0, 0.0)

    def to_dict(self) -> dict:
        return {
            "area": self.area, "perimeter": self.perimeter,
            "box": [self.min_x, self.min_y, self.box_width, self.box_height],
            "aspect_ratio": self.aspect_ratio, "compactness": self.compactness,
            "eccentricity": self.eccentricity, "fill_ratio": fill_ratio(self),
            "centroid": list(self.centroid),
        }


def fill_ratio(fv: FeatureVector) -> float:
    """Blob area over bounding-box area; 1 for an axis-aligned square, ~0.5 at 45°."""
    return fv.area / (fv.box_width * fv.box_height)


def component_coords(component: np.ndarray, width: int) -> tuple[np.ndarray, np.ndarray]:
    idx = np.asarray(component, dtype=np.int64)
    return idx % width, idx // width


def boundary_pixel_count(xs: np.ndarray, ys: np.ndarray) -> int:
    """Members with at least one 4-neighbour outside the blob (grid edge counts as outside)."""
    x0, y0 = int(xs.min()), int(ys.min())
    h = int(ys.max()) - y0 + 1
    w = int(xs.max()) - x0 + 1
    # one False ring around the box stands in for everything that is not a member
    m = np.zeros((h + 2, w + 2), dtype=bool)
    m[ys - y0 + 1, xs - x0 + 1] = True
    inner = m[1:-1, 1:-1]
    interior = inner & m[:-2, 1:-1] & m[2:, 1:-1] & m[1:-1, :-2] & m[1:-1, 2:]
    return int(inner.sum() - interior.sum())


def principal_eigenvalues(mu20: float, mu02: float, mu11: float) -> tuple[float, float]:
    """Eigenvalues of [[mu20, mu11], [mu11, mu02]], largest first."""
    root = math.sqrt((mu20 - mu02) ** 2 + 4 * mu11 ** 2)
    return (mu20 + mu02 + root) / 2, (mu20 + mu02 - root) / 2


def eccentricity(l1: float, l2: float) -> float:
    """sqrt(1 - l2/l1); 1 for zero-spread blobs."""
    if l1 <= 0:
        return 1.0
    return math.sqrt(max(0.0, 1 - l2 / l1))


def compute_features(component: np.ndarray, binary: np.ndarray) -> FeatureVector:
    """
    Descriptors of one component of `binary` (an (H,W) {0,255} image):
      - area, bounding box, aspect ratio (box_width / box_height)
      - perimeter as a count of boundary pixels, each counted once
      - compactness 4πA/P²
      - centroid and central second moments → principal eigenvalues → eccentricity
    """
    binary = np.asarray(binary)
    if binary.ndim != 2:
        raise InvalidInputError(f"binary image must be 2-D, got shape {binary.shape}")
    h, w = binary.shape
    idx = np.asarray(component, dtype=np.int64)
    if idx.ndim != 1 or idx.size == 0:
        raise InvalidInputError("component must be a non-empty 1-D array of linear indices")
    if idx.min() < 0 or idx.max() >= h * w:
        raise InvalidInputError(f"component index out of range for a {w}x{h} grid")
    if not np.all(binary.ravel()[idx] == FG):
        raise InvalidInputError("component covers background pixels")

    xs, ys = component_coords(idx, w)
    area = int(idx.size)
    min_x, max_x = int(xs.min()), int(xs.max())
    min_y, max_y = int(ys.min()), int(ys.max())
    box_w = max_x - min_x + 1
    box_h = max_y - min_y + 1

    perimeter = boundary_pixel_count(xs, ys)
    compactness = (4 * math.pi * area) / perimeter ** 2 if perimeter > 0 else None

    fx, fy = xs.astype(np.float64), ys.astype(np.float64)
    cx, cy = fx.sum() / area, fy.sum() / area
    mu20 = float((fx * fx).sum() / area - cx * cx)
    mu02 = float((fy * fy).sum() / area - cy * cy)
    mu11 = float((fx * fy).sum() / area - cx * cy)
    l1, l2 = principal_eigenvalues(mu20, mu02, mu11)

    return FeatureVector(
        area=area,
        perimeter=perimeter,
        box_width=box_w,
        box_height=box_h,
        aspect_ratio=box_w / box_h,
        compactness=compactness,
        eccentricity=eccentricity(l1, l2),
        min_x=min_x,
        min_y=min_y,
        centroid=(float(cx), float(cy)),
    )
