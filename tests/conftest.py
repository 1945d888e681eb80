import numpy as np
import pytest

from squarelab.synth import blank


def binary_with_rect(h, w, x0, y0, bw, bh):
    """(h,w) {0,255} image with one filled axis-aligned rectangle."""
    b = np.zeros((h, w), dtype=np.uint8)
    b[y0:y0 + bh, x0:x0 + bw] = 255
    return b


@pytest.fixture
def canvas():
    """Black 600x600 RGB canvas."""
    return blank(600)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_binary(rng):
    """Sparse random {0,255} image; produces many small blobs of mixed size."""
    return np.where(rng.random((64, 80)) > 0.6, 255, 0).astype(np.uint8)
