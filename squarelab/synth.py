# synth.py
# synthetic test images: white filled shapes on black

from __future__ import annotations
import math
from typing import Optional
import numpy as np
from skimage.draw import polygon, disk

SHAPES = ("square", "circle", "triangle", "rectangle")
WHITE = 255


def blank(size: int = 600, height: Optional[int] = None) -> np.ndarray:
    return np.zeros((height or size, size, 3), dtype=np.uint8)


def _fill_poly(canvas, xs, ys, value=WHITE):
    # continuous coords → pixel-centre coords
    rr, cc = polygon(np.asarray(ys) - 0.5, np.asarray(xs) - 0.5, shape=canvas.shape[:2])
    canvas[rr, cc] = value


def draw_square(canvas, cx, cy, side, angle_deg=0.0, value=WHITE):
    a = math.radians(angle_deg); c, s = math.cos(a), math.sin(a); h = side / 2
    corners = [(-h,-h), (h,-h), (h,h), (-h,h)]
    _fill_poly(canvas, [cx + x*c - y*s for x,y in corners], [cy + x*s + y*c for x,y in corners], value)
    return canvas


def draw_rectangle(canvas, cx, cy, width, height, value=WHITE):
    xs = [cx - width/2, cx + width/2, cx + width/2, cx - width/2]
    ys = [cy - height/2, cy - height/2, cy + height/2, cy + height/2]
    _fill_poly(canvas, xs, ys, value)
    return canvas


def draw_triangle(canvas, cx, cy, size, value=WHITE):
    """Isosceles, apex up, base = height = size."""
    h = size / 2
    _fill_poly(canvas, [cx, cx - h, cx + h], [cy - h, cy + h, cy + h], value)
    return canvas


def draw_circle(canvas, cx, cy, radius, value=WHITE):
    rr, cc = disk((cy, cx), radius, shape=canvas.shape[:2])
    canvas[rr, cc] = value
    return canvas


def generate_test_image(shape_count: int = 5, size: int = 600, rng=None) -> tuple[np.ndarray, list[dict]]:
    """
    Random shapes (size 30..80, centres inside a 60px margin). Half of the
    squares are rotated by an angle in [-60°, 60°]; rectangles are 1.6 x 0.65
    of their size. Shapes may overlap. Returns (rgb, placed shapes).
    """
    rng = np.random.default_rng(rng)
    canvas = blank(size)
    placed = []
    for _ in range(shape_count):
        shape = SHAPES[int(rng.integers(len(SHAPES)))]
        x = float(rng.random() * (size - 120) + 60)
        y = float(rng.random() * (size - 120) + 60)
        s = float(rng.random() * 50 + 30)
        angle = 0.0
        if shape == "square":
            if rng.random() > 0.5:
                angle = float(rng.random() * 120 - 60)
            draw_square(canvas, x, y, s, angle)
        elif shape == "circle":
            draw_circle(canvas, x, y, s / 2)
        elif shape == "triangle":
            draw_triangle(canvas, x, y, s)
        else:
            draw_rectangle(canvas, x, y, s * 1.6, s * 0.65)
        placed.append({"shape": shape, "x": x, "y": y, "size": s, "angle": angle})
    return canvas, placed
