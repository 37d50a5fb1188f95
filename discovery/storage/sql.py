"""Relational storage via SQLAlchemy"""
import uuid
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import User
from ..schemas import LocationIn, UserCreate, UserRecord
from .base import DuplicateUsernameError, UserRepository, check_changes, hash_password


def _to_record(row: User) -> UserRecord:
    location = None
    if row.latitude is not None and row.longitude is not None:
        location = LocationIn(lat=row.latitude, lng=row.longitude)
    return UserRecord(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        display_name=row.display_name,
        age=row.age,
        bio=row.bio,
        interests=row.interests,
        location=location,
        avatar_url=row.avatar_url,
        show_on_map=bool(row.show_on_map),
        max_distance=row.max_distance,
        created_at=row.created_at,
    )


class SqlUserRepository(UserRepository):
    name = "sql"

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        row = self.db.get(User, user_id)
        return _to_record(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        row = self.db.query(User).filter(User.username == username).first()
        return _to_record(row) if row else None

    def list_candidates(self, excluding_id: str) -> List[UserRecord]:
        """Cheap SQL pre-filter; the ranking pipeline re-checks every predicate"""
        rows = (
            self.db.query(User)
            .filter(
                User.id != excluding_id,
                User.show_on_map.is_(True),
                User.latitude.isnot(None),
                User.longitude.isnot(None),
            )
            .order_by(User.created_at, User.id)
            .all()
        )
        return [_to_record(r) for r in rows]

    def create_user(self, data: UserCreate) -> UserRecord:
        if self.get_user_by_username(data.username):
            raise DuplicateUsernameError(data.username)
        row = User(
            id=uuid.uuid4().hex,
            username=data.username,
            password_hash=hash_password(data.password),
            display_name=data.display_name,
            age=data.age,
            bio=data.bio,
            interests=data.interests,
            latitude=data.location.lat if data.location else None,
            longitude=data.location.lng if data.location else None,
            avatar_url=data.avatar_url,
            show_on_map=data.show_on_map,
            max_distance=data.max_distance,
        )
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateUsernameError(data.username) from e
        self.db.refresh(row)
        return _to_record(row)

    def update_user(self, user_id: str, changes: dict) -> Optional[UserRecord]:
        check_changes(changes)
        row = self.db.get(User, user_id)
        if row is None:
            return None

        for key, value in changes.items():
            if key == "location":
                loc = LocationIn.model_validate(value) if value is not None else None
                row.latitude = loc.lat if loc else None
                row.longitude = loc.lng if loc else None
            else:
                setattr(row, key, value)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(row)
        return _to_record(row)
