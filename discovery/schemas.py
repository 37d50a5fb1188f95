"""Pydantic schema definitions"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .services.geo import Point
from .services.proximity import Candidate


class LocationIn(BaseModel):
    """Coordinates are range-checked here, not in the distance math"""
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    def to_point(self) -> Point:
        return Point(lat=self.lat, lng=self.lng)


# === Storage records ===

class UserRecord(BaseModel):
    """Backend-neutral user snapshot returned by every repository"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    password_hash: str
    display_name: str
    age: int
    bio: Optional[str] = None
    interests: Optional[List[str]] = None
    location: Optional[LocationIn] = None
    avatar_url: Optional[str] = None
    show_on_map: bool = True
    max_distance: Optional[float] = None  # miles
    created_at: datetime

    def to_candidate(self) -> Candidate:
        return Candidate(
            id=self.id,
            location=self.location.to_point() if self.location else None,
            discoverable=self.show_on_map,
            max_distance=self.max_distance,
            payload=self,
        )


# === Requests ===

class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=6)
    display_name: str = Field(..., min_length=1)
    age: int = Field(..., ge=18, description="Users must be at least 18")
    bio: Optional[str] = None
    interests: Optional[List[str]] = None
    location: Optional[LocationIn] = None
    avatar_url: Optional[str] = None
    show_on_map: bool = True
    max_distance: float = Field(5, gt=0, description="Search radius (miles)")


class UserUpdate(BaseModel):
    display_name: Optional[str] = Field(None, min_length=1)
    age: Optional[int] = Field(None, ge=18)
    bio: Optional[str] = None
    interests: Optional[List[str]] = None
    avatar_url: Optional[str] = None
    show_on_map: Optional[bool] = None
    # null resets to the server default radius
    max_distance: Optional[float] = Field(None, gt=0)

    @field_validator("display_name", "age", "show_on_map")
    @classmethod
    def _not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


# === Responses ===

class UserOut(BaseModel):
    """Public view of a user (never carries the password hash)"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    display_name: str
    age: int
    bio: Optional[str] = None
    interests: Optional[List[str]] = None
    location: Optional[LocationIn] = None
    avatar_url: Optional[str] = None
    show_on_map: bool
    max_distance: Optional[float] = None
    created_at: datetime


class NearbyUserOut(UserOut):
    distance: float  # miles, 1 decimal


class MessageOut(BaseModel):
    message: str
