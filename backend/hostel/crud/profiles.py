# hostel/crud/profiles.py
from __future__ import annotations

from typing import List

from sqlalchemy.orm import selectinload  # type: ignore

from .. import schemas
from ..errors import RemoteError
from ..models import Activity, Profile
from ..repositories import ActivityRepository, ProfileRepository
from .base import SqlRepository, not_found

RECENT_ACTIVITY_LIMIT = 5


class SqlProfileRepository(SqlRepository, ProfileRepository):

    def get(self, user_id: str) -> schemas.ProfileRecord:
        with self._db() as db:
            profile = (
                db.query(Profile)
                .options(selectinload(Profile.students))
                .filter(Profile.id == user_id)
                .first()
            )
            if profile is None:
                raise not_found("Profile", user_id)
            return schemas.ProfileRecord.model_validate(profile)

    def update(self, user_id: str, data: schemas.ProfileUpdate) -> schemas.ProfileRecord:
        with self._db() as db:
            me = self._current_profile(db)
            # a user edits their own profile only
            if me.id != user_id:
                raise RemoteError("You can only update your own profile", code="42501", status=403)
            me.full_name = data.full_name.strip()
            for st in me.students:
                st.name = me.full_name
            db.flush()
            return schemas.ProfileRecord.model_validate(me)


class SqlActivityRepository(SqlRepository, ActivityRepository):

    # =========================================================
    # 🧩 Procedure: get_recent_activity
    # =========================================================
    def recent(self) -> List[schemas.ActivityRow]:
        with self._db() as db:
            self._current_profile(db)
            rows = (
                db.query(Activity)
                .order_by(Activity.created_at.desc())
                .limit(RECENT_ACTIVITY_LIMIT)
                .all()
            )
            return [schemas.ActivityRow.model_validate(a) for a in rows]
