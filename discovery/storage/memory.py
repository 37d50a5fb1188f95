"""In-memory storage (dev/tests)"""
import threading
from typing import Dict, List, Optional

from ..schemas import UserCreate, UserRecord
from .base import DuplicateUsernameError, UserRepository, check_changes, new_user_record


class MemoryUserRepository(UserRepository):
    name = "memory"

    def __init__(self):
        self._users: Dict[str, UserRecord] = {}
        self._lock = threading.Lock()

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        return next((u for u in self._users.values() if u.username == username), None)

    def list_candidates(self, excluding_id: str) -> List[UserRecord]:
        # snapshot so concurrent writers can't change the pool mid-ranking
        return [u for u in list(self._users.values()) if u.id != excluding_id]

    def create_user(self, data: UserCreate) -> UserRecord:
        with self._lock:
            if self.get_user_by_username(data.username):
                raise DuplicateUsernameError(data.username)
            user = new_user_record(data)
            self._users[user.id] = user
        return user

    def update_user(self, user_id: str, changes: dict) -> Optional[UserRecord]:
        check_changes(changes)
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            updated = UserRecord.model_validate({**user.model_dump(), **changes})
            self._users[user_id] = updated
        return updated
