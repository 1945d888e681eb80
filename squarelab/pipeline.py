# pipeline.py
# Orchestration: one grid through gray → binary → blobs → features → verdicts,
# and a glob-driven batch runner that writes overlays and a JSON summary.

from __future__ import annotations
import glob, logging, os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from .binarise import to_gray, binarise
from .classify import Verdict, classify_component
from .decide import Thresholds, T
from .errors import InvalidInputError
from .features import FeatureVector
from .io_save_load import load_rgb, save_json, save_rgb
from .svg import write_label_svg
from .topology import extract_components

logger = logging.getLogger(__name__)


@dataclass
class Detection:
    component: np.ndarray          # linear indices y*W + x
    features: FeatureVector
    verdict: Verdict

@dataclass
class DetectionReport:
    width: int
    height: int
    binary: np.ndarray
    inverted: bool
    detections: List[Detection] = field(default_factory=list)

    @property
    def square_count(self) -> int:
        return sum(1 for d in self.detections if d.verdict.is_square)

    @property
    def squares(self) -> List[Detection]:
        return [d for d in self.detections if d.verdict.is_square]


# ----------------------------
# Input boundary
# ----------------------------

def grid_from_buffer(data, width: int, height: int, channels: int = 4) -> np.ndarray:
    """
    Flat row-major byte buffer (RGBA by default, 3 for RGB, 1 for intensity)
    → (H,W,C) or (H,W) uint8 grid. Length must be exactly W*H*C.
    """
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"grid dimensions must be positive, got {width}x{height}")
    if channels not in (1, 3, 4):
        raise InvalidInputError(f"unsupported channel count {channels}")
    buf = np.frombuffer(bytes(data), dtype=np.uint8)
    expected = width * height * channels
    if buf.size != expected:
        raise InvalidInputError(f"buffer holds {buf.size} bytes, expected {expected} for {width}x{height}x{channels}")
    if channels == 1:
        return buf.reshape(height, width).copy()
    return buf.reshape(height, width, channels).copy()


# ----------------------------
# Single image
# ----------------------------

def detect_squares(grid: np.ndarray, thresholds: Optional[Thresholds] = None) -> DetectionReport:
    """
    Full pipeline over one decoded grid ((H,W) intensity or (H,W,3|4) colour).
    Detections come back in row-major seed order, squares and non-squares alike.
    """
    t = thresholds or T
    gray = to_gray(grid)
    binary, inverted = binarise(gray, threshold=t.BINARY_THRESHOLD)
    h, w = binary.shape

    report = DetectionReport(width=w, height=h, binary=binary, inverted=inverted)
    for comp in extract_components(binary, min_size=t.MIN_COMPONENT_SIZE):
        fv, verdict = classify_component(comp, binary, t)
        report.detections.append(Detection(component=comp, features=fv, verdict=verdict))

    logger.info(f"detect_squares: {w}x{h} blobs={len(report.detections)} squares={report.square_count}")
    return report


def report_row(report: DetectionReport) -> Dict:
    return {
        "width": report.width,
        "height": report.height,
        "inverted": bool(report.inverted),
        "blobs": len(report.detections),
        "squares": report.square_count,
        "anchors": [list(d.verdict.anchor) for d in report.squares],
        "detections": [
            {**d.features.to_dict(), "is_square": d.verdict.is_square, "branch": d.verdict.branch}
            for d in report.detections
        ],
    }


# ----------------------------
# Batch runner
# ----------------------------

def process_glob(
    input_glob: str,
    out_json: str = "out/squares.json",
    out_dir: Optional[str] = "out/labels",
    thresholds: Optional[Thresholds] = None,
):
    """
    For each file:
      - load → detect_squares()
      - if out_dir: write <stem>_binary.png and <stem>_labels.svg (red "4" per square)
    Writes a JSON summary and returns list[dict] for notebook use.
    """
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    rows: List[Dict] = []
    for path in sorted(glob.glob(input_glob)):
        report = detect_squares(load_rgb(path), thresholds)
        if out_dir:
            stem = os.path.splitext(os.path.basename(path))[0]
            png_name = stem + "_binary.png"
            save_rgb(os.path.join(out_dir, png_name), report.binary)
            write_label_svg(report.detections, size=(report.width, report.height),
                            out_path=os.path.join(out_dir, stem + "_labels.svg"),
                            image_href=png_name)
        rows.append({"file": os.path.basename(path), **report_row(report)})
        logger.info(f"process_glob: {os.path.basename(path)} squares={report.square_count}")

    save_json(out_json, {"results": rows, "thresholds": (thresholds or T).to_dict()})
    return rows
