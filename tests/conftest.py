"""Shared fixtures: synthetic frames and GIFs built in memory."""

from __future__ import annotations

import io
from typing import List, Sequence, Tuple

import pytest
from PIL import Image

from gifascii.decoder import FrameInfo

Color = Tuple[int, int, int]


def rgba_buffer(pixels: Sequence[Color]) -> bytes:
    """Pack RGB triples into an opaque RGBA byte buffer."""
    out = bytearray()
    for r, g, b in pixels:
        out.extend((r, g, b, 255))
    return bytes(out)


def solid_buffer(width: int, height: int, color: Color) -> bytes:
    return rgba_buffer([color] * (width * height))


class FakeSource:
    """In-memory frame source with fixed frames and delays (1/100 s)."""

    def __init__(self, width: int, height: int, frames: List[bytes], delays: List[int]):
        self.width = width
        self.height = height
        self.frames = frames
        self.delays = delays
        self.decoded: List[int] = []

    def frame_count(self) -> int:
        return len(self.frames)

    def frame_info(self, index: int) -> FrameInfo:
        return FrameInfo(delay=self.delays[index])

    def decode_frame(self, index: int) -> bytes:
        self.decoded.append(index)
        return self.frames[index]


def make_gif(frames: Sequence[Image.Image], durations: Sequence[int]) -> bytes:
    buf = io.BytesIO()
    frames[0].save(
        buf,
        format="GIF",
        save_all=True,
        append_images=list(frames[1:]),
        duration=list(durations),
        loop=0,
    )
    return buf.getvalue()


def split_image(size: int) -> Image.Image:
    """Left half black, right half white."""
    img = Image.new("RGB", (size, size), (0, 0, 0))
    img.paste((255, 255, 255), (size // 2, 0, size, size))
    return img


@pytest.fixture
def three_frame_gif() -> bytes:
    """8x8 GIF: black (80 ms), white (120 ms), split (50 ms)."""
    frames = [
        Image.new("RGB", (8, 8), (0, 0, 0)),
        Image.new("RGB", (8, 8), (255, 255, 255)),
        split_image(8),
    ]
    return make_gif(frames, [80, 120, 50])


@pytest.fixture
def png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), (10, 20, 30)).save(buf, format="PNG")
    return buf.getvalue()
