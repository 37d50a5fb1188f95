"""SQLAlchemy model definitions"""
from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, Text, Integer, Float, Boolean, DateTime, JSON, Index
)
from .database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    """App user; location columns are NULL until the user shares one"""
    __tablename__ = "users"

    id = Column(String(32), primary_key=True)  # uuid4().hex
    username = Column(String(64), nullable=False, unique=True)
    password_hash = Column(String(128), nullable=False)
    display_name = Column(Text, nullable=False)
    age = Column(Integer, nullable=False)
    bio = Column(Text)
    interests = Column(JSON)          # ["hiking", "coffee", ...]
    latitude = Column(Float)
    longitude = Column(Float)
    avatar_url = Column(Text)
    show_on_map = Column(Boolean, nullable=False, default=True)
    max_distance = Column(Float, default=5)  # miles; NULL means the server default
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    __table_args__ = (
        Index("idx_users_visible", "show_on_map"),
    )
