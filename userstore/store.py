import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str


class UserStore:
    """In-memory user records keyed by integer id.

    The record map and the id counter are guarded by one readers-writer lock:
    get/list share it, create/delete take it exclusively. Ids start at 1 and
    are never reused, even after a delete.
    """

    def __init__(self):
        self._lock = ReadWriteLock()
        self._users: Dict[int, User] = {}
        self._next_id = 1

    def create(self, name: str, email: str) -> User:
        with self._lock.write_locked():
            user = User(id=self._next_id, name=name, email=email)
            self._users[user.id] = user
            self._next_id += 1
        logger.debug("created user %d", user.id)
        return user

    def get(self, user_id: int) -> Optional[User]:
        with self._lock.read_locked():
            return self._users.get(user_id)

    def list(self) -> List[User]:
        with self._lock.read_locked():
            return list(self._users.values())

    def delete(self, user_id: int) -> bool:
        with self._lock.write_locked():
            removed = self._users.pop(user_id, None) is not None
        if removed:
            logger.debug("deleted user %d", user_id)
        return removed

    @property
    def next_id(self) -> int:
        with self._lock.read_locked():
            return self._next_id

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._users)
