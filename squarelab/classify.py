# classify.py
# features + decision rule → verdict and label anchor per blob

from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np

from .decide import Thresholds, T, is_square
from .features import FeatureVector, compute_features, component_coords

@dataclass(frozen=True)
class Verdict:
    is_square: bool
    anchor: Tuple[float, float]     # centroid (x, y), always set
    branch: Optional[str] = None    # "straight" | "rotated" | None

def anchor_point(component: np.ndarray, width: int) -> Tuple[float, float]:
    xs, ys = component_coords(component, width)
    n = len(xs)
    return float(xs.sum() / n), float(ys.sum() / n)

def classify_component(component: np.ndarray, binary: np.ndarray, t: Thresholds = T) -> tuple[FeatureVector, Verdict]:
    fv = compute_features(component, binary)
    ok, meta = is_square(fv, t)
    return fv, Verdict(is_square=ok, anchor=anchor_point(component, binary.shape[1]), branch=meta["branch"])
