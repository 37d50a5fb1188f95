"""Repository contract shared by every storage backend"""
import hashlib
import secrets
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional

from ..schemas import UserCreate, UserRecord
from ..services.proximity import RankedCandidate, rank_nearby


class DuplicateUsernameError(ValueError):
    """Raised by create_user when the username is already taken"""


# fields a caller may change through update_user
UPDATABLE_FIELDS = {
    "display_name", "age", "bio", "interests", "avatar_url",
    "show_on_map", "max_distance", "location",
}
NON_NULLABLE_FIELDS = {"display_name", "age", "show_on_map"}


def check_changes(changes: dict):
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")
    nulls = sorted(k for k in NON_NULLABLE_FIELDS if k in changes and changes[k] is None)
    if nulls:
        raise ValueError(f"Fields cannot be null: {nulls}")


def hash_password(password: str, salt: Optional[str] = None) -> str:
    """Return "salt$sha256hex" for storage"""
    salt = salt or secrets.token_hex(8)
    digest = hashlib.sha256(f"{salt}{password}".encode("utf-8")).hexdigest()
    return f"{salt}${digest}"


def new_user_record(data: UserCreate) -> UserRecord:
    """Build a fresh record with a generated id for backends without DB keys"""
    fields = data.model_dump(exclude={"password"})
    return UserRecord(
        **fields,
        id=uuid.uuid4().hex,
        password_hash=hash_password(data.password),
        created_at=datetime.now(timezone.utc),
    )


class UserRepository(ABC):
    """What the proximity engine and the user routes need from storage.

    Backends only fetch and persist; ranking lives in `get_nearby_users`
    so no backend can drift from the shared pipeline.
    """

    name = "base"

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    def list_candidates(self, excluding_id: str) -> List[UserRecord]:
        """All users except `excluding_id`; backends may pre-filter hidden or unlocated ones"""

    @abstractmethod
    def create_user(self, data: UserCreate) -> UserRecord:
        ...

    @abstractmethod
    def update_user(self, user_id: str, changes: dict) -> Optional[UserRecord]:
        """Apply `changes` (field -> value) and return the updated record, None if unknown"""

    def get_nearby_users(self, user_id: str) -> List[RankedCandidate]:
        return rank_nearby(self, user_id)
