# hostel/controllers/base.py
from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, Optional, TypeVar

from ..errors import RemoteError, Result
from ..repositories import Backend
from ..session_store import AuthContext
from ..toasts import ToastQueue

logger = logging.getLogger(__name__)

Row = TypeVar("Row")
T = TypeVar("T")


class PageController(Generic[Row]):
    """
    One table page: `fetch()` loads the collection, `filter()` narrows it
    in memory, mutations go through `_mutate` which toasts the outcome and
    refetches. A failed call never touches `rows`.
    """

    entity = "records"

    def __init__(self, backend: Backend, toasts: ToastQueue, auth: AuthContext):
        self.backend = backend
        self.toasts = toasts
        self.auth = auth
        self.rows: List[Row] = []
        self.loading = False

    def _load(self) -> List[Row]:
        raise NotImplementedError

    def fetch(self) -> Result[List[Row]]:
        self.loading = True
        try:
            rows = self._load()
        except RemoteError as e:
            logger.warning(f"[{self.entity}] fetch failed: {e.message}")
            self.toasts.error(f"Failed to fetch {self.entity}")
            return Result.failure(e)
        finally:
            self.loading = False
        self.rows = rows
        return Result.success(rows)

    def _mutate(
        self,
        call: Callable[[], T],
        success: str,
        refetch: bool = True,
        on_success: Optional[Callable[[T], Any]] = None,
    ) -> Result[T]:
        try:
            data = call()
        except RemoteError as e:
            logger.info(f"[{self.entity}] mutation failed: {e.message}")
            self.toasts.error(f"Error: {e.message}")
            return Result.failure(e)
        self.toasts.success(success)
        if on_success is not None:
            on_success(data)
        if refetch:
            self.fetch()
        return Result.success(data)

    def _detail(self, call: Callable[[], T]) -> Result[T]:
        try:
            return Result.success(call())
        except RemoteError as e:
            logger.error(f"[{self.entity}] error fetching details: {e.message}")
            return Result.failure(e)

    def _remove_local(self, row_id: str) -> None:
        self.rows = [r for r in self.rows if getattr(r, "id", None) != row_id]
