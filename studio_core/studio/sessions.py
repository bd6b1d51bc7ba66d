import threading
import time
import uuid
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from loguru import logger

from studio_core.config_manager import StudioConfig
from studio_core.intelligence.analyst import ViralAnalyst
from studio_core.studio.controller import StudioController


class SessionStore:
    """
    In-memory map of browser session id -> StudioController. Lost on restart.

    Entries idle longer than ``session_ttl_seconds`` are evicted on the next
    ``create``/``get``; past ``max_sessions`` the least recently used go first.
    """

    def __init__(
        self,
        analyst: ViralAnalyst,
        studio_config: Optional[StudioConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.analyst = analyst
        self.cfg = studio_config or StudioConfig()
        self._clock = clock
        # Ordered oldest-touched first
        self._sessions: "OrderedDict[str, Tuple[StudioController, float]]" = OrderedDict()
        self._lock = threading.Lock()

    def _evict(self, now: float) -> None:
        expired = [sid for sid, (_, touched) in self._sessions.items() if now - touched > self.cfg.session_ttl_seconds]
        for sid in expired:
            del self._sessions[sid]
        evicted = len(expired)
        while len(self._sessions) > self.cfg.max_sessions:
            self._sessions.popitem(last=False)
            evicted += 1
        if evicted:
            logger.debug(f"Evicted {evicted} session(s); {len(self._sessions)} held")

    def create(self) -> Tuple[str, StudioController]:
        session_id = uuid.uuid4().hex
        controller = StudioController(self.analyst, self.cfg)
        with self._lock:
            now = self._clock()
            self._sessions[session_id] = (controller, now)
            self._evict(now)
        return session_id, controller

    def get(self, session_id: str) -> Optional[StudioController]:
        with self._lock:
            now = self._clock()
            self._evict(now)
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            self._sessions[session_id] = (entry[0], now)
            self._sessions.move_to_end(session_id)
            return entry[0]

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
