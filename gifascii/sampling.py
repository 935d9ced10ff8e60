# sampling.py
"""Bilinear resampling of a row-major RGBA buffer (4 bytes per pixel)."""
from __future__ import annotations

import math
from typing import NamedTuple


class RGB(NamedTuple):
    r: int
    g: int
    b: int


def pixel_at(frame: bytes, x: int, y: int, width: int) -> RGB:
    """RGB of pixel (x, y); alpha is ignored."""
    idx = (y * width + x) * 4
    return RGB(frame[idx], frame[idx + 1], frame[idx + 2])


def round_half_up(value: float) -> int:
    # Halves go up (2.5 -> 3), unlike round()'s banker's rounding
    return int(math.floor(value + 0.5))


def bilinear_interpolate(
    p11: float, p21: float, p12: float, p22: float, x_frac: float, y_frac: float
) -> int:
    """Blend four corner values: p11/p21 top-left/top-right, p12/p22 bottom-left/bottom-right."""
    top = p11 * (1 - x_frac) + p21 * x_frac
    bottom = p12 * (1 - x_frac) + p22 * x_frac
    return round_half_up(top * (1 - y_frac) + bottom * y_frac)


def sample_pixel(
    frame: bytes,
    target_x: int,
    target_y: int,
    width: int,
    height: int,
    h_scale: float,
    v_scale: float,
) -> RGB:
    """Color of output cell (target_x, target_y) sampled from a width x height frame.

    The cell maps to source coordinate (target_x * h_scale, target_y * v_scale);
    the neighbour on the right/below is clamped to the last column/row.
    """
    src_x = target_x * h_scale
    src_y = target_y * v_scale

    x1 = min(int(math.floor(src_x)), width - 1)
    y1 = min(int(math.floor(src_y)), height - 1)
    x2 = min(x1 + 1, width - 1)
    y2 = min(y1 + 1, height - 1)

    x_frac = src_x - x1
    y_frac = src_y - y1

    p11 = pixel_at(frame, x1, y1, width)
    p12 = pixel_at(frame, x1, y2, width)
    p21 = pixel_at(frame, x2, y1, width)
    p22 = pixel_at(frame, x2, y2, width)

    return RGB(
        bilinear_interpolate(p11.r, p21.r, p12.r, p22.r, x_frac, y_frac),
        bilinear_interpolate(p11.g, p21.g, p12.g, p22.g, x_frac, y_frac),
        bilinear_interpolate(p11.b, p21.b, p12.b, p22.b, x_frac, y_frac),
    )
