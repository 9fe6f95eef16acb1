# hostel/clients.py
"""
Per-browser state. Each dashboard client gets its own backend handle (and so
its own auth session), toast queue, identity store and page controllers. The
browser only holds a signed cookie naming its client id.
"""
from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Callable, Dict, Optional

from .auth_utils import create_access_token, decode_token
from .controllers.account import AccountController
from .controllers.announcements import AnnouncementsController
from .controllers.complaints import ComplaintsController
from .controllers.dashboard import DashboardController
from .controllers.fees import FeesController
from .controllers.rooms import RoomsController
from .controllers.settings import SettingsController
from .controllers.students import StudentsController
from .controllers.visitors import VisitorsController
from .repositories import Backend
from .session_store import AuthContext
from .toasts import ToastQueue

logger = logging.getLogger(__name__)

BackendFactory = Callable[[], Backend]


class ClientState:
    def __init__(self, client_id: str, backend: Backend, toast_duration_ms: int = 5000):
        self.client_id = client_id
        self.backend = backend
        self.toasts = ToastQueue(default_duration_ms=toast_duration_ms)
        self.auth = AuthContext(backend.auth, backend.profiles).initialize()

        self.account = AccountController(self.toasts, self.auth)
        self.dashboard = DashboardController(backend, self.toasts, self.auth)
        self.students = StudentsController(backend, self.toasts, self.auth)
        self.rooms = RoomsController(backend, self.toasts, self.auth)
        self.fees = FeesController(backend, self.toasts, self.auth)
        self.visitors = VisitorsController(backend, self.toasts, self.auth)
        self.complaints = ComplaintsController(backend, self.toasts, self.auth)
        self.announcements = AnnouncementsController(backend, self.toasts, self.auth)
        self.settings = SettingsController(backend, self.toasts, self.auth)

    def close(self) -> None:
        self.auth.close()
        self.backend.close()


class ClientRegistry:
    """
    Client id -> ClientState. Only the map is locked. States idle for longer
    than `idle_timeout_s` are closed and forgotten on the next lookup.
    """

    def __init__(
        self,
        backend_factory: BackendFactory,
        secret_key: str,
        toast_duration_ms: int = 5000,
        idle_timeout_s: float = 2 * 60 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._backend_factory = backend_factory
        self._secret_key = secret_key
        self._toast_duration_ms = toast_duration_ms
        self._idle_timeout_s = idle_timeout_s
        self._clock = clock
        self._clients: Dict[str, ClientState] = {}
        self._last_seen: Dict[str, float] = {}
        self._lock = threading.Lock()

    # ---- cookie
    def sign(self, client_id: str) -> str:
        # long-lived: the auth session inside carries its own expiry
        return create_access_token({"sub": client_id, "typ": "client"}, expires_minutes=60 * 24 * 30,
                                   secret_key=self._secret_key)

    def client_id_from_cookie(self, cookie: Optional[str]) -> Optional[str]:
        if not cookie:
            return None
        payload = decode_token(cookie, secret_key=self._secret_key)
        if not payload or payload.get("typ") != "client":
            return None
        return payload.get("sub")

    # ---- registry
    def lookup(self, cookie: Optional[str]) -> Optional[ClientState]:
        """The live state named by `cookie`, or None. Never registers anything."""
        self.sweep()
        client_id = self.client_id_from_cookie(cookie)
        if not client_id:
            return None
        with self._lock:
            state = self._clients.get(client_id)
            if state is not None:
                self._last_seen[client_id] = self._clock()
            return state

    def get_or_create(self, cookie: Optional[str]) -> ClientState:
        state = self.lookup(cookie)
        if state is not None:
            return state
        client_id = uuid.uuid4().hex
        state = ClientState(client_id, self._backend_factory(), self._toast_duration_ms)
        with self._lock:
            self._clients[client_id] = state
            self._last_seen[client_id] = self._clock()
        logger.debug(f"[clients] new client {client_id}")
        return state

    def drop(self, client_id: str) -> None:
        with self._lock:
            state = self._clients.pop(client_id, None)
            self._last_seen.pop(client_id, None)
        if state is not None:
            state.close()
            logger.debug(f"[clients] dropped client {client_id}")

    def sweep(self) -> int:
        now = self._clock()
        with self._lock:
            stale = [cid for cid, seen in self._last_seen.items() if now - seen > self._idle_timeout_s]
            states = [self._clients.pop(cid) for cid in stale]
            for cid in stale:
                del self._last_seen[cid]
        for state in states:
            state.close()
        if stale:
            logger.info(f"[clients] evicted {len(stale)} idle client(s)")
        return len(stale)

    def close(self) -> None:
        with self._lock:
            states = list(self._clients.values())
            self._clients.clear()
            self._last_seen.clear()
        for state in states:
            state.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._clients)
