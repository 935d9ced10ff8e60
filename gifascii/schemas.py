# schemas.py
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, StrictInt


class TierInfo(BaseModel):
    label: str
    target_width: int
    font_aspect: float
    ramp: str


class SessionCreated(BaseModel):
    sessionId: str
    tier: str
    asciiFrame: str
    width: int = Field(description="Source width in pixels")
    height: int = Field(description="Source height in pixels")
    frameCount: int
    fontSize: int = Field(description="Suggested display font size in px")


class GetFrame(BaseModel):
    command: Literal["getFrame"]
    frameIndex: StrictInt


class UpdateFrame(BaseModel):
    command: Literal["updateFrame"] = "updateFrame"
    asciiFrame: str
    delay: int = Field(description="Display time of the frame in milliseconds")


class ProtocolError(BaseModel):
    command: Literal["error"] = "error"
    code: str
    message: str
