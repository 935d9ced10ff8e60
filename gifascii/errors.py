# errors.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class GifAsciiError(Exception):
    """Base error with a machine-readable code and the HTTP status it maps to."""

    code = "GIFASCII_ERROR"
    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DecodeError(GifAsciiError):
    """Source bytes are not a readable GIF, or a frame cannot be decoded."""

    code = "DECODE_ERROR"
    status_code = 422


class ConfigurationError(GifAsciiError):
    """Dimensions or profile values that would make rendering undefined."""

    code = "CONFIGURATION_ERROR"
    status_code = 422


class SessionNotFoundError(GifAsciiError):
    code = "SESSION_NOT_FOUND"
    status_code = 404

    def __init__(self, session_id: str):
        super().__init__(
            f"Session '{session_id}' not found",
            details={"session_id": session_id},
        )


def error_payload(exc: GifAsciiError) -> Dict[str, Any]:
    return {
        "error": {
            "code": exc.code,
            "message": exc.message,
            "details": exc.details or None,
        }
    }


async def gifascii_error_handler(request: Request, exc: GifAsciiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GifAsciiError, gifascii_error_handler)
