"""Animated GIF to ASCII art: frame rendering and on-demand playback."""

from .errors import ConfigurationError, DecodeError, GifAsciiError
from .profiles import DetailProfile, DetailTier, select_profile
from .renderer import render_frame
from .sequencer import AnimationSequencer

__all__ = [
    "AnimationSequencer",
    "ConfigurationError",
    "DecodeError",
    "DetailProfile",
    "DetailTier",
    "GifAsciiError",
    "render_frame",
    "select_profile",
]
