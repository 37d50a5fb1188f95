"""User endpoints"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from ..schemas import (
    LocationIn, MessageOut, NearbyUserOut, UserCreate, UserOut, UserUpdate,
)
from ..storage.base import DuplicateUsernameError, UserRepository
from ..storage.factory import get_repository

router = APIRouter(prefix="/api/v1", tags=["users"])


def _get_or_404(repo: UserRepository, user_id: str):
    user = repo.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("/users", response_model=UserOut, status_code=201)
def create_user(body: UserCreate, repo: UserRepository = Depends(get_repository)):
    try:
        user = repo.create_user(body)
    except DuplicateUsernameError:
        raise HTTPException(status_code=409, detail="Username already taken")
    return UserOut.model_validate(user.model_dump())


@router.get("/users/{user_id}", response_model=UserOut)
def get_user(user_id: str, repo: UserRepository = Depends(get_repository)):
    return UserOut.model_validate(_get_or_404(repo, user_id).model_dump())


@router.patch("/users/{user_id}/profile", response_model=UserOut)
def update_profile(
    user_id: str,
    body: UserUpdate,
    repo: UserRepository = Depends(get_repository),
):
    changes = body.model_dump(exclude_unset=True)
    updated = repo.update_user(user_id, changes)
    if updated is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserOut.model_validate(updated.model_dump())


@router.patch("/users/{user_id}/location", response_model=MessageOut)
def update_location(
    user_id: str,
    body: LocationIn,
    repo: UserRepository = Depends(get_repository),
):
    if repo.update_user(user_id, {"location": body}) is None:
        raise HTTPException(status_code=404, detail="User not found")
    return MessageOut(message="Location updated")


@router.get("/users/{user_id}/nearby", response_model=List[NearbyUserOut])
def nearby_users(user_id: str, repo: UserRepository = Depends(get_repository)):
    user = _get_or_404(repo, user_id)
    # "no location" is an error here; the engine itself just returns []
    if user.location is None:
        raise HTTPException(status_code=400, detail="Location not set")

    ranked = repo.get_nearby_users(user_id)
    return [
        NearbyUserOut(**r.candidate.payload.model_dump(), distance=r.distance_miles)
        for r in ranked
    ]


@router.get("/health")
def health(repo: UserRepository = Depends(get_repository)):
    return {"status": "ok", "storage": repo.name}
