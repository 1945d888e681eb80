import math
import numpy as np
import pytest

from squarelab.errors import InvalidInputError
from squarelab.features import compute_features, fill_ratio, principal_eigenvalues, eccentricity
from squarelab.synth import blank, draw_square
from squarelab.topology import extract_components

from conftest import binary_with_rect


def _only_component(binary):
    comps = extract_components(binary, min_size=0)
    assert len(comps) == 1
    return comps[0]


@pytest.mark.parametrize("n", [10, 25, 40])
def test_square_area_and_boundary_pixel_perimeter(n):
    b = binary_with_rect(600, 600, 200, 100, n, n)
    fv = compute_features(_only_component(b), b)
    assert fv.area == n * n
    assert fv.perimeter == 4 * n - 4
    assert (fv.box_width, fv.box_height) == (n, n)
    assert fv.aspect_ratio == 1.0
    assert fill_ratio(fv) == 1.0
    assert fv.compactness == pytest.approx(4 * math.pi * n * n / (4 * n - 4) ** 2)


def test_square_side_40_reference_values():
    b = binary_with_rect(600, 600, 200, 100, 40, 40)
    fv = compute_features(_only_component(b), b)
    assert fv.perimeter == 156
    assert fv.compactness == pytest.approx(0.8262, abs=1e-4)
    assert fv.centroid == pytest.approx((219.5, 119.5))
    assert (fv.min_x, fv.min_y) == (200, 100)
    assert fv.eccentricity < 1e-3


def test_grid_edge_counts_as_outside():
    b = binary_with_rect(30, 30, 0, 0, 10, 10)
    fv = compute_features(_only_component(b), b)
    assert fv.perimeter == 36


def test_grid_filling_blob_has_positive_perimeter():
    b = np.full((5, 5), 255, dtype=np.uint8)
    fv = compute_features(_only_component(b), b)
    assert fv.area == 25
    assert fv.perimeter == 16
    assert fv.compactness is not None


def test_single_pixel_falls_back_to_eccentricity_one():
    b = np.zeros((5, 5), dtype=np.uint8)
    b[2, 3] = 255
    fv = compute_features(np.array([2 * 5 + 3]), b)
    assert fv.area == 1
    assert fv.perimeter == 1
    assert fv.eccentricity == 1.0
    assert fv.compactness == pytest.approx(4 * math.pi)


def test_line_is_maximally_eccentric():
    b = binary_with_rect(30, 30, 5, 10, 20, 1)
    fv = compute_features(_only_component(b), b)
    assert fv.eccentricity == pytest.approx(1.0)
    assert fv.aspect_ratio == 20.0


def test_elongated_rectangle_eccentricity():
    b = binary_with_rect(100, 100, 10, 10, 60, 20)
    fv = compute_features(_only_component(b), b)
    # variances (60²-1)/12 and (20²-1)/12
    expected = math.sqrt(1 - 399 / 3599)
    assert fv.eccentricity == pytest.approx(expected, rel=1e-6)
    assert fv.aspect_ratio == 3.0


def test_principal_eigenvalues_ordering():
    l1, l2 = principal_eigenvalues(1.0, 4.0, 0.0)
    assert (l1, l2) == (4.0, 1.0)
    l1, l2 = principal_eigenvalues(2.0, 2.0, 1.0)
    assert l1 == pytest.approx(3.0) and l2 == pytest.approx(1.0)
    assert eccentricity(0.0, 0.0) == 1.0
    assert eccentricity(4.0, 4.0) == 0.0


def test_diamond_has_loose_box_and_symmetric_mass():
    rgb = draw_square(blank(600), 300, 300, 40, angle_deg=45)
    b = np.where(rgb[..., 0] > 128, 255, 0).astype(np.uint8)
    fv = compute_features(_only_component(b), b)
    assert 0.45 < fill_ratio(fv) < 0.55
    assert fv.eccentricity < 0.1
    assert 0.95 < fv.aspect_ratio < 1.05


def test_component_on_background_is_rejected():
    b = binary_with_rect(20, 20, 2, 2, 5, 5)
    with pytest.raises(InvalidInputError):
        compute_features(np.array([0, 1]), b)


def test_component_out_of_grid_is_rejected():
    b = binary_with_rect(20, 20, 2, 2, 5, 5)
    with pytest.raises(InvalidInputError):
        compute_features(np.array([400]), b)


def test_non_2d_binary_is_rejected():
    with pytest.raises(InvalidInputError):
        compute_features(np.array([0]), np.full((2, 2, 3), 255, dtype=np.uint8))
