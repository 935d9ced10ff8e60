# profiles.py
"""Detail tiers: the character ramp, output width and font aspect correction
used to render every frame of one viewing session."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .errors import ConfigurationError

# Dense/dark glyphs first
BASIC_RAMP = "@%#*+=-:. "
DETAILED_RAMP = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "


@dataclass(frozen=True)
class DetailProfile:
    ramp: str
    target_width: int
    font_aspect: float

    def __post_init__(self) -> None:
        if len(self.ramp) < 2:
            raise ConfigurationError(
                "Ramp must hold at least two characters",
                details={"ramp": self.ramp},
            )
        if self.target_width <= 0:
            raise ConfigurationError(
                f"target_width must be positive, got {self.target_width}"
            )
        if not self.font_aspect > 0:
            raise ConfigurationError(
                f"font_aspect must be positive, got {self.font_aspect}"
            )


class DetailTier(Enum):
    STANDARD = "Standard"
    HIGH_RESOLUTION = "High Resolution"
    ULTRA_HD = "Ultra HD"

    @property
    def profile(self) -> DetailProfile:
        return PROFILES[self]


PROFILES: Dict[DetailTier, DetailProfile] = {
    DetailTier.STANDARD: DetailProfile(BASIC_RAMP, 80, 0.6),
    DetailTier.HIGH_RESOLUTION: DetailProfile(BASIC_RAMP, 160, 0.6),
    DetailTier.ULTRA_HD: DetailProfile(DETAILED_RAMP, 250, 0.5),
}


def _key(label: str) -> str:
    return "".join(ch for ch in label.lower() if ch.isalnum())


_LOOKUP: Dict[str, DetailTier] = {}
for _tier in DetailTier:
    _LOOKUP[_key(_tier.value)] = _tier
    _LOOKUP[_key(_tier.name)] = _tier


def select_tier(label: Optional[str]) -> DetailTier:
    """Resolve a tier label; anything unrecognised falls back to Standard.

    Matching ignores case, spaces, hyphens and underscores, so "Ultra HD",
    "ultra-hd" and "ULTRA_HD" all name the same tier.
    """
    if not label:
        return DetailTier.STANDARD
    return _LOOKUP.get(_key(label), DetailTier.STANDARD)


def select_profile(label: Optional[str]) -> DetailProfile:
    return select_tier(label).profile


def suggested_font_size(profile: DetailProfile) -> int:
    """Display font size in px that keeps a full frame on screen."""
    if profile.target_width > 160:
        return 8
    if profile.target_width > 80:
        return 10
    return 14
