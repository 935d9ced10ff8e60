"""Tests for brightness mapping and full-frame rendering."""

from __future__ import annotations

import pytest
from conftest import rgba_buffer, solid_buffer

from gifascii.errors import ConfigurationError
from gifascii.profiles import DetailProfile, DetailTier
from gifascii.renderer import (
    brightness,
    char_for_brightness,
    char_index,
    output_height,
    render_frame,
)
from gifascii.sampling import RGB


class TestBrightness:
    def test_weights(self) -> None:
        assert brightness(RGB(0, 0, 0)) == 0.0
        assert brightness(RGB(255, 255, 255)) == 255.0
        assert brightness(RGB(100, 0, 0)) == pytest.approx(29.9)
        assert brightness(RGB(0, 100, 0)) == pytest.approx(58.7)
        assert brightness(RGB(0, 0, 100)) == pytest.approx(11.4)

    @pytest.mark.parametrize("tier", list(DetailTier))
    def test_extremes_map_to_ramp_ends(self, tier: DetailTier) -> None:
        ramp = tier.profile.ramp
        assert char_for_brightness(brightness(RGB(0, 0, 0)), ramp) == ramp[0]
        assert char_for_brightness(brightness(RGB(255, 255, 255)), ramp) == ramp[-1]

    def test_index_is_clamped(self) -> None:
        assert char_index(255.0000001, 10) == 9
        assert char_index(-0.5, 10) == 0

    def test_index_floors(self) -> None:
        # 127.5 / 255 * 9 = 4.5
        assert char_index(127.5, 10) == 4


class TestOutputHeight:
    def test_standard_square(self) -> None:
        assert output_height(100, 100, DetailTier.STANDARD.profile) == 133

    def test_ultra_hd_landscape(self) -> None:
        # 250 * (150 / 300) / 0.5
        assert output_height(300, 150, DetailTier.ULTRA_HD.profile) == 250

    @pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-3, 10)])
    def test_rejects_non_positive_dimensions(self, width: int, height: int) -> None:
        with pytest.raises(ConfigurationError):
            output_height(width, height, DetailTier.STANDARD.profile)

    def test_rejects_zero_rows(self) -> None:
        with pytest.raises(ConfigurationError):
            output_height(1000, 1, DetailTier.STANDARD.profile)


class TestRenderFrame:
    @pytest.mark.parametrize("tier", list(DetailTier))
    @pytest.mark.parametrize("width, height", [(7, 5), (16, 16), (5, 3)])
    def test_grid_shape(self, tier: DetailTier, width: int, height: int) -> None:
        profile = tier.profile
        frame = solid_buffer(width, height, (90, 140, 200))
        art = render_frame(frame, width, height, profile)
        rows = art.split("\n")
        # every row is newline-terminated, so the last split piece is empty
        assert rows[-1] == ""
        rows = rows[:-1]
        assert len(rows) == output_height(width, height, profile)
        assert all(len(row) == profile.target_width for row in rows)

    def test_checkerboard_scenario(self) -> None:
        frame = rgba_buffer(
            [(0, 0, 0), (255, 255, 255), (255, 255, 255), (0, 0, 0)]
        )
        profile = DetailProfile("# ", 2, 1.0)
        assert render_frame(frame, 2, 2, profile) == "# \n #\n"

    def test_solid_frames(self) -> None:
        profile = DetailProfile("@. ", 4, 1.0)
        assert render_frame(solid_buffer(4, 2, (0, 0, 0)), 4, 2, profile) == "@@@@\n@@@@\n"
        assert render_frame(solid_buffer(4, 2, (255, 255, 255)), 4, 2, profile) == "    \n    \n"

    def test_alpha_is_ignored(self) -> None:
        profile = DetailProfile("# ", 1, 1.0)
        assert render_frame(bytes([255, 255, 255, 0]), 1, 1, profile) == " \n"

    def test_deterministic(self) -> None:
        frame = rgba_buffer([(i * 9 % 256, i * 31 % 256, i * 57 % 256) for i in range(48)])
        profile = DetailTier.HIGH_RESOLUTION.profile
        assert render_frame(frame, 8, 6, profile) == render_frame(frame, 8, 6, profile)

    def test_short_buffer_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            render_frame(bytes(8), 2, 2, DetailProfile("# ", 2, 1.0))

    def test_zero_width_source_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            render_frame(b"", 0, 4, DetailTier.STANDARD.profile)
