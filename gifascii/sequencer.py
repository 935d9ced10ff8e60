# sequencer.py
from __future__ import annotations

import logging
import threading
import time
import uuid
from collections import OrderedDict
from typing import NamedTuple, Optional

from .decoder import FrameSource, GifDecoder
from .errors import ConfigurationError, SessionNotFoundError
from .profiles import DetailProfile, DetailTier, select_tier
from .renderer import output_height, render_frame

log = logging.getLogger(__name__)


class InitialRender(NamedTuple):
    ascii_frame: str
    width: int
    height: int
    frame_count: int


class RenderedFrame(NamedTuple):
    ascii_frame: str
    delay_ms: int


class AnimationSequencer:
    """Renders frames of one animation on request, one request at a time.

    Requests are serialised by a lock and served in the order they acquire
    it; a request that arrives mid-render waits for the current one.
    """

    def __init__(self, source: FrameSource, profile: DetailProfile):
        self.source = source
        self.profile = profile
        self.frame_count = source.frame_count()
        if self.frame_count < 1:
            raise ConfigurationError("Animation has no frames")
        # Validates dimensions before any sampling happens
        self.target_height = output_height(source.width, source.height, profile)
        self.current_index = 0
        self._lock = threading.Lock()

    def _render(self, index: int) -> str:
        started = time.perf_counter()
        frame = self.source.decode_frame(index)
        art = render_frame(frame, self.source.width, self.source.height, self.profile)
        log.debug(
            "Rendered frame %d at %dx%d in %.1f ms",
            index,
            self.profile.target_width,
            self.target_height,
            (time.perf_counter() - started) * 1000,
        )
        return art

    def render_initial(self) -> InitialRender:
        with self._lock:
            art = self._render(0)
            self.current_index = 0
        return InitialRender(art, self.source.width, self.source.height, self.frame_count)

    def request_frame(self, frame_index: int) -> RenderedFrame:
        """Render ``frame_index`` wrapped into [0, frame_count); negatives count from the end."""
        index = frame_index % self.frame_count
        with self._lock:
            info = self.source.frame_info(index)
            art = self._render(index)
            self.current_index = index
        return RenderedFrame(art, info.delay * 10)


class PlaybackSession:
    """One viewing session: decoded source, chosen tier and its sequencer."""

    def __init__(self, data: bytes, tier: DetailTier, session_id: Optional[str] = None):
        self.id = session_id or uuid.uuid4().hex
        self.tier = tier
        self.decoder = GifDecoder(data)
        try:
            self.sequencer = AnimationSequencer(self.decoder, tier.profile)
        except Exception:
            self.decoder.close()
            raise
        self.created_at = time.time()
        self.closed = False
        self._lock = threading.Lock()

    @property
    def profile(self) -> DetailProfile:
        return self.tier.profile

    def render_initial(self) -> InitialRender:
        with self._lock:
            if self.closed:
                raise SessionNotFoundError(self.id)
            return self.sequencer.render_initial()

    def request_frame(self, frame_index: int) -> RenderedFrame:
        """Render through the sequencer; a disposed session answers as not found."""
        with self._lock:
            if self.closed:
                raise SessionNotFoundError(self.id)
            return self.sequencer.request_frame(frame_index)

    def close(self) -> None:
        with self._lock:
            if self.closed:
                return
            self.closed = True
            self.decoder.close()


class SessionStore:
    """Live sessions keyed by id; the oldest is disposed past ``max_sessions``."""

    def __init__(self, max_sessions: int):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, PlaybackSession]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, data: bytes, tier_label: Optional[str]) -> PlaybackSession:
        session = PlaybackSession(data, select_tier(tier_label))
        evicted = []
        with self._lock:
            self._sessions[session.id] = session
            while len(self._sessions) > self.max_sessions:
                evicted.append(self._sessions.popitem(last=False)[1])
        for old in evicted:
            log.info("Session %s evicted (limit %d)", old.id, self.max_sessions)
            old.close()
        log.info(
            "Session %s created: %s, %dx%d, %d frame(s)",
            session.id,
            session.tier.value,
            session.decoder.width,
            session.decoder.height,
            session.sequencer.frame_count,
        )
        return session

    def get(self, session_id: str) -> PlaybackSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def dispose(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFoundError(session_id)
        session.close()
        log.info("Session %s disposed", session_id)

    def discard(self, session_id: str) -> None:
        """Like dispose, but a session that is already gone is not an error."""
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is not None:
            session.close()

    def clear(self) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.close()
