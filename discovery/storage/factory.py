"""Backend selection for FastAPI Depends"""
import logging
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from ..config import DATA_FILE, STORAGE_BACKEND
from ..database import get_db
from .base import UserRepository
from .file import FileUserRepository
from .memory import MemoryUserRepository
from .sql import SqlUserRepository

logger = logging.getLogger(__name__)

BACKENDS = ("memory", "file", "sql")


@lru_cache(maxsize=None)
def _shared_repository(backend: str) -> UserRepository:
    """memory/file repositories hold their data in-process, so one per process"""
    logger.info(f"Storage backend: {backend}")
    if backend == "memory":
        return MemoryUserRepository()
    if backend == "file":
        return FileUserRepository(DATA_FILE)
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r} (expected one of {BACKENDS})")


def get_repository(db: Session = Depends(get_db)) -> UserRepository:
    if STORAGE_BACKEND == "sql":
        return SqlUserRepository(db)
    return _shared_repository(STORAGE_BACKEND)
