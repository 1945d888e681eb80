# binarise.py
# grayscale reduction, thresholding & polarity normalisation

import logging
import numpy as np

from .errors import InvalidInputError
from .topology import FG, BG, fill_holes

logger = logging.getLogger(__name__)


def to_gray(grid: np.ndarray) -> np.ndarray:
    """Unweighted mean of R, G, B (alpha ignored), truncated and clamped to uint8."""
    grid = np.asarray(grid)
    if grid.ndim == 2:
        return np.clip(grid, 0, 255).astype(np.uint8)
    if grid.ndim != 3 or grid.shape[2] not in (3, 4):
        raise InvalidInputError(f"expected (H,W), (H,W,3) or (H,W,4) grid, got shape {grid.shape}")
    rgb = grid[..., :3].astype(np.int64)
    mean = (rgb[..., 0] + rgb[..., 1] + rgb[..., 2]) // 3
    return np.clip(mean, 0, 255).astype(np.uint8)


def border_counts(binary: np.ndarray) -> tuple[int, int]:
    """(white, black) over top row, bottom row, left col, right col. Corners count twice."""
    edges = np.concatenate([binary[0, :], binary[-1, :], binary[:, 0], binary[:, -1]])
    white = int(np.count_nonzero(edges == FG))
    return white, int(edges.size - white)


def binarise(gray: np.ndarray, threshold: int = 128) -> tuple[np.ndarray, bool]:
    """
    gray > threshold → 255, else 0. If the border is mostly white the image is
    inverted so the border-dominant colour becomes background. Enclosed
    background is then filled. Returns (binary, inverted).
    """
    gray = np.asarray(gray)
    if gray.ndim != 2 or gray.size == 0:
        raise InvalidInputError(f"expected a non-empty 2-D intensity grid, got shape {gray.shape}")
    binary = np.where(gray > threshold, FG, BG).astype(np.uint8)

    white, black = border_counts(binary)
    inverted = white > black
    if inverted:
        binary = FG - binary
    logger.debug(f"binarise: threshold={threshold} edge_white={white} edge_black={black} inverted={inverted}")

    fill_holes(binary)
    return binary, inverted
