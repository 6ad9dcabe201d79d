# pinify/core/session.py
from dataclasses import dataclass
from typing import Optional, Set

from fastapi import Depends

from pinify.core.security import get_current_user
from pinify.db.models.user import User


@dataclass
class SessionContext:
    """Per-request view of the signed-in user.

    Built when a request starts and dropped when it ends; nothing about the
    viewer is kept in module globals. ``friend_ids`` stays ``None`` until
    :meth:`load_friends` runs, and consumers treat ``None`` as "not loaded".
    """

    user: User
    friend_ids: Optional[Set[int]] = None

    @property
    def user_id(self) -> int:
        return self.user.id

    def load_friends(self) -> Set[int]:
        self.friend_ids = set(self.user.friend_ids)
        return self.friend_ids


def get_session_context(current_user: User = Depends(get_current_user)):
    ctx = SessionContext(user=current_user)
    ctx.load_friends()
    return ctx
