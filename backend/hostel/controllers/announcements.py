# hostel/controllers/announcements.py
from __future__ import annotations

from typing import List

from .. import schemas
from ..errors import RemoteError, Result
from .base import PageController


class AnnouncementsController(PageController[schemas.NoticeRow]):
    entity = "announcements"

    def _load(self) -> List[schemas.NoticeRow]:
        return self.backend.notices.list()

    @property
    def can_manage(self) -> bool:
        return self.auth.is_admin()

    def create(self, data: schemas.NoticeIn) -> Result[schemas.NoticeRow]:
        if self.auth.user is None:
            err = RemoteError("Not authenticated", code="401", status=401)
            self.toasts.error(f"Error: {err.message}")
            return Result.failure(err)
        payload = schemas.NoticeCreate(title=data.title, message=data.message, user_id=self.auth.user.id)
        return self._mutate(
            lambda: self.backend.notices.create(payload),
            "Announcement posted!",
            refetch=False,
            on_success=lambda row: self.rows.insert(0, row),
        )

    def delete(self, notice_id: str) -> Result[None]:
        return self._mutate(
            lambda: self.backend.notices.delete(notice_id),
            "Announcement deleted.",
            refetch=False,
            on_success=lambda _: self._remove_local(notice_id),
        )
