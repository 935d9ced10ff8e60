# app.py
from __future__ import annotations

import asyncio
import io
import logging
from typing import AsyncIterator, List, Optional

from fastapi import FastAPI, HTTPException, Path, Query, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import PlainTextResponse, Response, StreamingResponse
from pydantic import ValidationError
from rich.console import Console
from starlette.concurrency import run_in_threadpool

from . import config
from .errors import GifAsciiError, SessionNotFoundError, register_error_handlers
from .logs import setup_logging
from .profiles import DetailTier, suggested_font_size
from .schemas import GetFrame, ProtocolError, SessionCreated, TierInfo, UpdateFrame
from .sequencer import PlaybackSession, SessionStore

log = logging.getLogger(__name__)

app = FastAPI(title="GIF to ASCII", version="1.0")
register_error_handlers(app)
sessions = SessionStore(max_sessions=config.MAX_SESSIONS)

RGB_PATTERN = r"^\d{1,3},\d{1,3},\d{1,3}$"

# ------------ BROWSER DETECTION ------------
def is_browser(req: Request) -> bool:
    ua = (req.headers.get("user-agent") or "").lower()
    accept = (req.headers.get("accept") or "").lower()
    ua_browser = any(k in ua for k in ["mozilla", "chrome", "safari", "edg", "firefox", "opera"])
    accept_html = "text/html" in accept
    return ua_browser or accept_html

BROWSER_HINT = (
    "This endpoint streams ANSI graphics and is meant for a terminal.\n\n"
    "Open it from a terminal, for example:\n"
    "  curl -N http://<host>:<port>/sessions/<id>/stream\n"
    "or on Windows PowerShell:\n"
    "  curl.exe -N http://<host>:<port>/sessions/<id>/stream\n"
)

# ------------ TERMINAL FRAME ------------
def render_terminal_frame(ascii_frame: str, color: Optional[str] = None) -> str:
    """
    Print a frame into a buffer, clearing the rest of every line (ESC[K) so no
    tails from a wider previous frame remain, then clear below it (ESC[J).
    """
    buf = io.StringIO()
    lines = ascii_frame.splitlines()
    width = max((len(ln) for ln in lines), default=0) + 1
    console = Console(
        file=buf, force_terminal=True, color_system="truecolor", width=width
    )
    style = f"rgb({color})" if color else None

    for line in lines:
        # ramps contain "[" and "]", so no markup
        console.print(line, style=style, end="", markup=False, highlight=False, soft_wrap=True)
        buf.write("\x1b[K")
        buf.write("\n")

    buf.write("\x1b[J")
    return buf.getvalue()


async def stream_session(
    session: PlaybackSession,
    *,
    color: Optional[str],
    loops: int,
    alt_screen: bool,
) -> AsyncIterator[bytes]:
    if alt_screen:
        start = "\033[?1049h\033[2J\033[H\033[?25l"  # alt screen + clear + cursor home + hide cursor
        end = "\033[?25h\033[?1049l"                 # show cursor + leave alt screen
    else:
        start = "\033[2J\033[H\033[?25l"             # clear + cursor home + hide cursor
        end = "\033[?25h"                            # show cursor

    frame_count = session.sequencer.frame_count
    yield start.encode("utf-8")
    played = 0
    try:
        while loops == 0 or played < loops:
            for i in range(frame_count):
                rendered = await run_in_threadpool(session.request_frame, i)
                content = render_terminal_frame(rendered.ascii_frame, color)
                # cursor home and redraw, no full clear per frame
                yield ("\033[H" + content).encode("utf-8")
                delay_ms = rendered.delay_ms or config.FALLBACK_DELAY_MS
                await asyncio.sleep(delay_ms / 1000)
            played += 1
    except GifAsciiError as exc:
        # headers are already sent; end the stream and restore the terminal
        log.warning("Stream of session %s stopped: %s", session.id, exc.message)
    yield end.encode("utf-8")

# ------------ ROUTES ------------
@app.get("/", response_class=PlainTextResponse)
def index() -> str:
    return (
        "GIF to ASCII is running.\n\n"
        "Endpoints:\n"
        "  GET    /tiers                         -> available detail tiers\n"
        "  POST   /sessions?tier=...             -> upload GIF bytes, render frame 0\n"
        "  GET    /sessions/{id}/frames/{index}  -> render one frame (index wraps)\n"
        "  WS     /sessions/{id}/ws              -> getFrame / updateFrame channel\n"
        "  GET    /sessions/{id}/stream          -> play in a terminal (curl -N ...)\n"
        "       Query: color (r,g,b), loops (0 = forever), alt (bool)\n"
        "  DELETE /sessions/{id}                 -> dispose session\n"
        "  GET    /healthz                       -> liveness probe\n"
    )

@app.get("/healthz", response_class=PlainTextResponse)
def healthz() -> str:
    return "ok"

@app.get("/tiers", response_model=List[TierInfo])
def list_tiers() -> List[TierInfo]:
    return [
        TierInfo(
            label=tier.value,
            target_width=tier.profile.target_width,
            font_aspect=tier.profile.font_aspect,
            ramp=tier.profile.ramp,
        )
        for tier in DetailTier
    ]


@app.post("/sessions", response_model=SessionCreated, status_code=201)
async def create_session(
    request: Request,
    tier: str = Query(config.DEFAULT_TIER, description="Standard | High Resolution | Ultra HD"),
) -> SessionCreated:
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > config.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="GIF exceeds upload limit")
    data = await request.body()
    if len(data) > config.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="GIF exceeds upload limit")

    try:
        session = await run_in_threadpool(sessions.create, data, tier)
    except GifAsciiError as exc:
        log.warning("Rejected upload (%d bytes): %s", len(data), exc.message)
        raise
    try:
        initial = await run_in_threadpool(session.render_initial)
    except GifAsciiError:
        # may already be evicted by a concurrent upload
        sessions.discard(session.id)
        raise

    return SessionCreated(
        sessionId=session.id,
        tier=session.tier.value,
        asciiFrame=initial.ascii_frame,
        width=initial.width,
        height=initial.height,
        frameCount=initial.frame_count,
        fontSize=suggested_font_size(session.profile),
    )


@app.get("/sessions/{session_id}/frames/{frame_index}", response_model=UpdateFrame)
async def get_frame(
    session_id: str,
    frame_index: int = Path(..., description="Any integer; wrapped modulo frame count"),
) -> UpdateFrame:
    session = sessions.get(session_id)
    rendered = await run_in_threadpool(session.request_frame, frame_index)
    return UpdateFrame(asciiFrame=rendered.ascii_frame, delay=rendered.delay_ms)


@app.delete("/sessions/{session_id}", status_code=204)
def delete_session(session_id: str) -> Response:
    sessions.dispose(session_id)
    return Response(status_code=204)


@app.get("/sessions/{session_id}/stream")
async def stream_frames(
    request: Request,
    session_id: str,
    color: Optional[str] = Query(None, pattern=RGB_PATTERN, description="Tint as r,g,b"),
    loops: int = Query(0, ge=0, description="Times to play the animation, 0 = forever"),
    alt: bool = Query(config.ALT_SCREEN_DEFAULT, description="Use alternate screen buffer"),
):
    if is_browser(request):
        return PlainTextResponse(BROWSER_HINT, status_code=200)

    session = sessions.get(session_id)
    gen = stream_session(session, color=color, loops=loops, alt_screen=alt)
    headers = {"Cache-Control": "no-store"}
    return StreamingResponse(gen, media_type="text/plain; charset=utf-8", headers=headers)


@app.websocket("/sessions/{session_id}/ws")
async def frame_channel(websocket: WebSocket, session_id: str) -> None:
    try:
        session = sessions.get(session_id)
    except SessionNotFoundError:
        await websocket.close(code=4404)
        return

    await websocket.accept()
    log.info("Frame channel opened for session %s", session_id)
    try:
        # initial frame is pushed without a request
        try:
            first = await run_in_threadpool(session.request_frame, 0)
        except GifAsciiError as exc:
            await websocket.send_json(
                ProtocolError(code=exc.code, message=exc.message).model_dump()
            )
        else:
            await websocket.send_json(
                UpdateFrame(asciiFrame=first.ascii_frame, delay=first.delay_ms).model_dump()
            )
        while True:
            received = await websocket.receive()
            if received["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(received.get("code", 1000))
            # text frames are expected; binary frames are parsed as UTF-8 JSON
            raw = received.get("text")
            if raw is None:
                raw = received.get("bytes") or b""
            try:
                message = GetFrame.model_validate_json(raw)
            except ValidationError as exc:
                log.warning("Bad frame request on session %s: %r", session_id, raw[:200])
                error = ProtocolError(code="BAD_REQUEST", message=str(exc.errors()[0]["msg"]))
                await websocket.send_json(error.model_dump())
                continue
            try:
                rendered = await run_in_threadpool(session.request_frame, message.frameIndex)
            except GifAsciiError as exc:
                await websocket.send_json(
                    ProtocolError(code=exc.code, message=exc.message).model_dump()
                )
                continue
            await websocket.send_json(
                UpdateFrame(asciiFrame=rendered.ascii_frame, delay=rendered.delay_ms).model_dump()
            )
    except WebSocketDisconnect:
        log.info("Frame channel closed for session %s", session_id)

# ------------ STARTUP ------------
@app.on_event("startup")
async def configure_logging() -> None:
    setup_logging(config.LOG_LEVEL)

@app.on_event("shutdown")
async def dispose_sessions() -> None:
    sessions.clear()
