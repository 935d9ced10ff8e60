"""Tests for bilinear sampling of RGBA buffers."""

from __future__ import annotations

from conftest import rgba_buffer

from gifascii.sampling import RGB, bilinear_interpolate, pixel_at, round_half_up, sample_pixel


class TestPixelAt:
    def test_reads_rgb_and_skips_alpha(self) -> None:
        frame = bytes([1, 2, 3, 4, 5, 6, 7, 8])
        assert pixel_at(frame, 0, 0, 2) == RGB(1, 2, 3)
        assert pixel_at(frame, 1, 0, 2) == RGB(5, 6, 7)

    def test_row_major(self) -> None:
        frame = rgba_buffer([(0, 0, 0), (0, 0, 0), (9, 9, 9), (0, 0, 0)])
        assert pixel_at(frame, 0, 1, 2) == RGB(9, 9, 9)


class TestInterpolation:
    def test_zero_fractions_return_corner(self) -> None:
        assert bilinear_interpolate(17, 200, 90, 3, 0.0, 0.0) == 17

    def test_midpoint_rounds_half_up(self) -> None:
        assert bilinear_interpolate(0, 255, 0, 255, 0.5, 0.0) == 128
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4999) == 2

    def test_vertical_blend(self) -> None:
        assert bilinear_interpolate(0, 0, 100, 100, 0.0, 0.25) == 25


class TestSamplePixel:
    def test_integer_coordinates_are_exact(self) -> None:
        colors = [(x * 10, y * 20, (x + y) % 256) for y in range(4) for x in range(4)]
        frame = rgba_buffer(colors)
        # 4x4 source onto 2x2 grid: scale 2 lands on even source pixels
        for ty in range(2):
            for tx in range(2):
                got = sample_pixel(frame, tx, ty, 4, 4, 2.0, 2.0)
                assert got == RGB(*colors[(ty * 2) * 4 + tx * 2])

    def test_fractional_coordinate_blends_neighbours(self) -> None:
        frame = rgba_buffer([(0, 0, 0), (255, 255, 255)])
        assert sample_pixel(frame, 1, 0, 2, 1, 0.5, 1.0) == RGB(128, 128, 128)

    def test_last_column_and_row_clamp(self) -> None:
        frame = rgba_buffer([(0, 0, 0), (10, 10, 10), (20, 20, 20), (30, 30, 30)])
        # 2x2 upsampled to 4x4: cell 3 maps to 1.5, whose right/lower neighbour is clamped
        got = sample_pixel(frame, 3, 3, 2, 2, 0.5, 0.5)
        assert got == RGB(30, 30, 30)

    def test_channels_stay_in_byte_range(self) -> None:
        frame = rgba_buffer([(255, 0, 255), (255, 0, 255), (255, 0, 255), (255, 0, 255)])
        got = sample_pixel(frame, 1, 1, 2, 2, 0.3, 0.7)
        assert got == RGB(255, 0, 255)
