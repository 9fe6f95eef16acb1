# hostel/crud/notices.py
from __future__ import annotations

from typing import List

from sqlalchemy.orm import selectinload  # type: ignore

from .. import schemas
from ..errors import RemoteError
from ..models import Notice, utcnow
from ..repositories import NoticeRepository
from .base import SqlRepository, log_activity, not_found


class SqlNoticeRepository(SqlRepository, NoticeRepository):

    def list(self) -> List[schemas.NoticeRow]:
        with self._db() as db:
            self._current_profile(db)
            rows = (
                db.query(Notice)
                .options(selectinload(Notice.author))
                .order_by(Notice.created_at.desc())
                .all()
            )
            return [schemas.NoticeRow.model_validate(n) for n in rows]

    def create(self, data: schemas.NoticeCreate) -> schemas.NoticeRow:
        with self._db() as db:
            profile = self._require_role(db, "Admin")
            if data.user_id != profile.id:
                raise RemoteError("Notices can only be posted as yourself", code="42501", status=403)
            notice = Notice(
                title=data.title.strip(),
                message=data.message,
                user_id=profile.id,
                created_at=utcnow(),
            )
            db.add(notice)
            log_activity(db, f"Announcement posted: {notice.title}", "megaphone")
            db.flush()
            db.refresh(notice)
            return schemas.NoticeRow.model_validate(notice)

    def delete(self, notice_id: str) -> None:
        with self._db() as db:
            self._require_role(db, "Admin")
            notice = db.get(Notice, notice_id)
            if notice is None:
                raise not_found("Notice", notice_id)
            db.delete(notice)
