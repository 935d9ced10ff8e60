# decoder.py
from __future__ import annotations

import io
import logging
import threading
from dataclasses import dataclass
from typing import List, Protocol

from PIL import Image

from .errors import DecodeError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameInfo:
    delay: int  # hundredths of a second


class FrameSource(Protocol):
    """What the sequencer needs from a decoded animation."""

    width: int
    height: int

    def frame_count(self) -> int: ...

    def frame_info(self, index: int) -> FrameInfo: ...

    def decode_frame(self, index: int) -> bytes: ...


class GifDecoder:
    """Pillow-backed GIF reader producing full-canvas RGBA frames.

    Pillow composites each frame onto the canvas (disposal and transparency
    applied), so ``decode_frame(i)`` is what a viewer would show at frame i.
    Seeking mutates the shared image, hence the lock.
    """

    def __init__(self, data: bytes):
        if not data:
            raise DecodeError("No image data")
        try:
            self._image = Image.open(io.BytesIO(data))
        except Image.DecompressionBombError as exc:
            raise DecodeError(f"Image canvas too large: {exc}") from exc
        except Exception as exc:
            # corrupt input surfaces as IndexError, struct.error, SyntaxError and the like
            raise DecodeError(f"Cannot read image data: {exc}") from exc

        if self._image.format != "GIF":
            fmt = self._image.format
            self._image.close()
            raise DecodeError(
                f"Expected a GIF image, got {fmt}", details={"format": fmt}
            )

        self.width, self.height = self._image.size
        self._lock = threading.Lock()
        self._delays: List[int] = []
        try:
            for index in range(getattr(self._image, "n_frames", 1)):
                self._image.seek(index)
                # decode pixels now so corrupt frames fail before any rendering
                self._image.load()
                # Pillow reports GIF delays in ms; the GIF itself stores 1/100 s
                duration = self._image.info.get("duration", 0) or 0
                self._delays.append(int(round(duration / 10)))
        except Exception as exc:
            self._image.close()
            raise DecodeError(f"Malformed GIF data: {exc}") from exc

        log.debug(
            "Opened GIF %dx%d with %d frame(s)", self.width, self.height, len(self._delays)
        )

    def frame_count(self) -> int:
        return len(self._delays)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._delays):
            raise DecodeError(
                f"Frame index {index} out of range [0, {len(self._delays)})",
                details={"index": index, "frame_count": len(self._delays)},
            )

    def frame_info(self, index: int) -> FrameInfo:
        self._check_index(index)
        return FrameInfo(delay=self._delays[index])

    def decode_frame(self, index: int) -> bytes:
        """RGBA bytes of frame *index*, ``width * height * 4`` long, rows top to bottom."""
        self._check_index(index)
        with self._lock:
            try:
                self._image.seek(index)
                return self._image.convert("RGBA").tobytes()
            except Exception as exc:
                log.warning("Failed to decode frame %d: %s", index, exc)
                raise DecodeError(
                    f"Cannot decode frame {index}: {exc}", details={"index": index}
                ) from exc

    def close(self) -> None:
        with self._lock:
            self._image.close()
