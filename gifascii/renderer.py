# renderer.py
"""Turns one RGBA frame into a block of ramp characters.

The output grid is ``profile.target_width`` columns by
``output_height(...)`` rows; every row, the last included, ends in ``\\n``.
"""
from __future__ import annotations

import math
from typing import List

from .errors import ConfigurationError
from .profiles import DetailProfile
from .sampling import RGB, sample_pixel


def brightness(color: RGB) -> float:
    """Perceptual luminance (ITU-R BT.601 weights), 0.0 to 255.0."""
    # 0.299r + 0.587g + 0.114b in per-mille so pure white is exactly 255.0
    return (299 * color.r + 587 * color.g + 114 * color.b) / 1000


def char_index(value: float, ramp_length: int) -> int:
    idx = int(math.floor(value / 255 * (ramp_length - 1)))
    return max(0, min(idx, ramp_length - 1))


def char_for_brightness(value: float, ramp: str) -> str:
    return ramp[char_index(value, len(ramp))]


def output_height(width: int, height: int, profile: DetailProfile) -> int:
    """Rows needed to keep the source aspect under the profile's font correction."""
    if width <= 0 or height <= 0:
        raise ConfigurationError(
            f"Source dimensions must be positive, got {width}x{height}",
            details={"width": width, "height": height},
        )
    rows = int(math.floor(profile.target_width * (height / width) / profile.font_aspect))
    if rows < 1:
        raise ConfigurationError(
            f"A {width}x{height} source yields no output rows at width "
            f"{profile.target_width}",
            details={"width": width, "height": height, "target_width": profile.target_width},
        )
    return rows


def render_frame(frame: bytes, width: int, height: int, profile: DetailProfile) -> str:
    target_height = output_height(width, height, profile)
    expected = width * height * 4
    if len(frame) < expected:
        raise ConfigurationError(
            f"Frame buffer holds {len(frame)} bytes, expected {expected}",
            details={"size": len(frame), "expected": expected},
        )

    target_width = profile.target_width
    ramp = profile.ramp
    h_scale = width / target_width
    v_scale = height / target_height

    rows: List[str] = []
    for y in range(target_height):
        row = [
            char_for_brightness(
                brightness(sample_pixel(frame, x, y, width, height, h_scale, v_scale)),
                ramp,
            )
            for x in range(target_width)
        ]
        rows.append("".join(row) + "\n")
    return "".join(rows)
