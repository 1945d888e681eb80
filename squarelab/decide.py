# decide.py
# Decision rules for flagging squares.
# All raw features live in features.py so thresholds can be tuned here
# without duplicating implementations.

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Tuple, Dict

from .features import FeatureVector, fill_ratio

# ---------------------------
# Tunable thresholds (one place)
# ---------------------------

@dataclass(frozen=True)
class Thresholds:
    # Binarisation & segmentation
    BINARY_THRESHOLD: int = 128
    MIN_COMPONENT_SIZE: int = 50   # blobs with <= this many pixels are noise

    # Shared gate: below circles (4-neighbour boundary pushes discs past 1), above stringy shapes
    COMPACT_MIN: float = 0.55
    COMPACT_MAX: float = 0.92

    # Straight square: tight, nearly square bounding box
    STRAIGHT_ASPECT_MIN: float = 0.85
    STRAIGHT_ASPECT_MAX: float = 1.15
    STRAIGHT_FILL_MIN: float = 0.85

    # Rotated square: loose box, symmetric mass
    ROTATED_ECC_MAX: float = 0.4
    ROTATED_FILL_MIN: float = 0.45
    ROTATED_FILL_MAX: float = 0.85
    ROTATED_ASPECT_MIN: float = 0.6
    ROTATED_ASPECT_MAX: float = 1.7

    def to_dict(self) -> Dict:
        return asdict(self)

T = Thresholds()

# ---------------------------
# Gates (all bounds strict)
# ---------------------------

def is_compact(fv: FeatureVector, t: Thresholds = T) -> bool:
    c = fv.compactness
    return c is not None and t.COMPACT_MIN < c < t.COMPACT_MAX

def straight_square(fv: FeatureVector, t: Thresholds = T) -> bool:
    return (t.STRAIGHT_ASPECT_MIN < fv.aspect_ratio < t.STRAIGHT_ASPECT_MAX
            and fill_ratio(fv) > t.STRAIGHT_FILL_MIN
            and is_compact(fv, t))

def rotated_square(fv: FeatureVector, t: Thresholds = T) -> bool:
    return (fv.eccentricity < t.ROTATED_ECC_MAX
            and t.ROTATED_FILL_MIN < fill_ratio(fv) < t.ROTATED_FILL_MAX
            and is_compact(fv, t)
            and t.ROTATED_ASPECT_MIN < fv.aspect_ratio < t.ROTATED_ASPECT_MAX)

# ---------------------------
# Verdict
# ---------------------------

def is_square(fv: FeatureVector, t: Thresholds = T) -> Tuple[bool, Dict]:
    """
    Straight branch OR rotated branch. A blob with no defined compactness
    (zero perimeter) is never a square.
    """
    branch = None
    if straight_square(fv, t):
        branch = "straight"
    elif rotated_square(fv, t):
        branch = "rotated"
    return branch is not None, {
        "fill_ratio": float(fill_ratio(fv)),
        "compact": is_compact(fv, t),
        "branch": branch,
    }
