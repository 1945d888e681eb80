# topology.py
# hole filling & connected-component extraction (explicit work-list flood fills)

import logging
import numpy as np
from collections import deque

from .errors import InvalidInputError

logger = logging.getLogger(__name__)

FG, BG = 255, 0

NBR4 = [(0,-1),(1,0),(0,1),(-1,0)]
NBR8 = [(-1,-1),(0,-1),(1,-1),(-1,0),(1,0),(-1,1),(0,1),(1,1)]


def validate_binary(binary: np.ndarray) -> None:
    if not isinstance(binary, np.ndarray) or binary.ndim != 2 or binary.size == 0:
        raise InvalidInputError("binary image must be a non-empty 2-D numpy array")
    if not np.all((binary == FG) | (binary == BG)):
        bad = np.unique(binary[(binary != FG) & (binary != BG)])[:5]
        raise InvalidInputError(f"binary image holds values outside {{0,255}}: {bad.tolist()}")


def _border_indices(h: int, w: int):
    for x in range(w):
        yield x
        yield (h-1)*w + x
    for y in range(h):
        yield y*w
        yield y*w + (w-1)


def fill_holes(binary: np.ndarray) -> np.ndarray:
    """
    In place: background not 4-reachable from the border is an enclosed hole
    and becomes foreground. Idempotent. Returns `binary` for chaining.
    """
    h, w = binary.shape
    flat = binary.ravel().tolist()
    reached = bytearray(h*w)
    q = deque()
    for i in _border_indices(h, w):
        if flat[i] == BG and not reached[i]:
            reached[i] = 1; q.append(i)
    while q:
        i = q.popleft()
        y, x = divmod(i, w)
        for dx,dy in NBR4:
            nx,ny = x+dx, y+dy
            if 0<=nx<w and 0<=ny<h:
                n = ny*w + nx
                if not reached[n] and flat[n] == BG:
                    reached[n] = 1; q.append(n)

    holes = (binary == BG) & (np.frombuffer(bytes(reached), dtype=np.uint8).reshape(h, w) == 0)
    n_holes = int(holes.sum())
    if n_holes:
        binary[holes] = FG
        logger.debug(f"fill_holes: filled {n_holes} enclosed background pixels")
    return binary


def _flood8(flat, visited: bytearray, seed: int, h: int, w: int) -> list:
    """Every foreground pixel 8-connected to `seed`, in visit order; marks `visited`."""
    out = []
    q = deque([seed]); visited[seed] = 1
    while q:
        i = q.popleft()
        out.append(i)
        y, x = divmod(i, w)
        for dx,dy in NBR8:
            nx,ny = x+dx, y+dy
            if 0<=nx<w and 0<=ny<h:
                n = ny*w + nx
                if not visited[n] and flat[n] == FG:
                    visited[n] = 1; q.append(n)
    return out


def extract_components(binary: np.ndarray, min_size: int = 50, visited: bytearray | None = None) -> list[np.ndarray]:
    """
    8-connected foreground blobs in row-major seed order. Each component is a
    read-only int64 array of linear indices (y*W + x) in visit order. Blobs of
    `min_size` pixels or fewer are noise and are not returned.

    `visited` is the marker buffer for this pass (W*H bytes); one is allocated
    when omitted. On return it marks every foreground pixel, kept or not.
    """
    validate_binary(binary)
    h, w = binary.shape
    if visited is None:
        visited = bytearray(h*w)
    elif len(visited) != h*w:
        raise InvalidInputError(f"visited buffer has {len(visited)} entries, expected {h*w}")

    flat = binary.ravel().tolist()
    comps = []
    discarded = 0
    for seed in np.flatnonzero(binary.ravel() == FG).tolist():
        if visited[seed]:
            continue
        pixels = _flood8(flat, visited, seed, h, w)
        if len(pixels) <= min_size:
            discarded += 1
            continue
        comp = np.asarray(pixels, dtype=np.int64)
        comp.setflags(write=False)
        comps.append(comp)
    logger.debug(f"extract_components: kept={len(comps)} discarded_as_noise={discarded} min_size={min_size}")
    return comps
