# hostel/toasts.py
from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

TOAST_TYPES = ("info", "success", "error", "warning")


@dataclass
class Toast:
    id: int
    content: str
    type: str = "info"
    duration_ms: int = 5000
    created_at: float = field(default=0.0, repr=False)

    def expires_at(self) -> float:
        return self.created_at + self.duration_ms / 1000.0

    def to_dict(self) -> dict:
        return {"id": self.id, "content": self.content, "type": self.type, "duration": self.duration_ms}


class ToastQueue:
    """
    Transient messages for one dashboard client. A toast disappears when its
    duration has passed or when it is dismissed; nothing is persisted.
    """

    def __init__(self, default_duration_ms: int = 5000, clock: Callable[[], float] = time.monotonic):
        self.default_duration_ms = default_duration_ms
        self._clock = clock
        self._ids = itertools.count()
        self._toasts: Dict[int, Toast] = {}

    def add(self, content: str, type: str = "info", duration_ms: Optional[int] = None) -> Toast:
        if type not in TOAST_TYPES:
            type = "info"
        toast = Toast(
            id=next(self._ids),
            content=content,
            type=type,
            duration_ms=duration_ms or self.default_duration_ms,
            created_at=self._clock(),
        )
        self._toasts[toast.id] = toast
        return toast

    def success(self, content: str, duration_ms: Optional[int] = None) -> Toast:
        return self.add(content, "success", duration_ms)

    def error(self, content: str, duration_ms: Optional[int] = None) -> Toast:
        return self.add(content, "error", duration_ms)

    def warning(self, content: str, duration_ms: Optional[int] = None) -> Toast:
        return self.add(content, "warning", duration_ms)

    def dismiss(self, toast_id: int) -> bool:
        return self._toasts.pop(toast_id, None) is not None

    def active(self) -> List[Toast]:
        now = self._clock()
        for tid in [t.id for t in self._toasts.values() if t.expires_at() <= now]:
            del self._toasts[tid]
        # dicts keep insertion order
        return list(self._toasts.values())

    def clear(self) -> None:
        self._toasts.clear()

    def __len__(self) -> int:
        return len(self.active())
