"""JSON-file storage — the whole user table lives in one document

Layout: {"users": [<UserRecord as JSON>, ...]}
"""
import json
import logging
import os
import threading
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from ..schemas import UserCreate, UserRecord
from .base import DuplicateUsernameError, UserRepository, check_changes, new_user_record

logger = logging.getLogger(__name__)


class FileUserRepository(UserRepository):
    name = "file"

    def __init__(self, path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._users: List[UserRecord] = self._load()

    def _load(self) -> List[UserRecord]:
        """Read the data file; a missing or unreadable file starts empty"""
        if not self.path.exists():
            return []
        try:
            with self.path.open(encoding="utf-8") as f:
                raw = json.load(f)
            users = [UserRecord.model_validate(u) for u in raw.get("users", [])]
        except (OSError, json.JSONDecodeError, AttributeError, ValidationError) as e:
            logger.warning(f"Could not load {self.path}, starting empty: {e}")
            return []
        logger.info(f"Loaded {len(users):,} users from {self.path}")
        return users

    def _save(self, users: List[UserRecord]):
        """Write `users` to disk; callers swap them in only after this returns"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        payload = {"users": [u.model_dump(mode="json") for u in users]}
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.path)

    def _index(self, user_id: str) -> int:
        for i, u in enumerate(self._users):
            if u.id == user_id:
                return i
        return -1

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        i = self._index(user_id)
        return self._users[i] if i >= 0 else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        return next((u for u in self._users if u.username == username), None)

    def list_candidates(self, excluding_id: str) -> List[UserRecord]:
        return [u for u in list(self._users) if u.id != excluding_id]

    def create_user(self, data: UserCreate) -> UserRecord:
        with self._lock:
            if self.get_user_by_username(data.username):
                raise DuplicateUsernameError(data.username)
            user = new_user_record(data)
            users = self._users + [user]
            self._save(users)
            self._users = users
        return user

    def update_user(self, user_id: str, changes: dict) -> Optional[UserRecord]:
        check_changes(changes)
        with self._lock:
            i = self._index(user_id)
            if i < 0:
                return None
            updated = UserRecord.model_validate({**self._users[i].model_dump(), **changes})
            users = list(self._users)
            users[i] = updated
            self._save(users)
            self._users = users
        return updated
