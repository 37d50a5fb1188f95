#!/usr/bin/env python3
"""Load demo users from a JSON file into the configured storage backend

Usage: python scripts/seed_users.py [path/to/users.json]
The file holds a list of user objects in the POST /api/v1/users shape.
"""

import json
import logging
import sys
from pathlib import Path

# add the project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from discovery.config import DATA_FILE, STORAGE_BACKEND
from discovery.database import SessionLocal, init_db
from discovery.schemas import UserCreate
from discovery.storage.base import DuplicateUsernameError
from discovery.storage.file import FileUserRepository
from discovery.storage.memory import MemoryUserRepository
from discovery.storage.sql import SqlUserRepository

logger = logging.getLogger("seed_users")

DEFAULT_SEED = Path(__file__).parent.parent / "data" / "seed_users.json"


def seed(repo, rows):
    """Insert rows; returns (created, skipped)"""
    created = skipped = 0
    for i, row in enumerate(rows):
        try:
            repo.create_user(UserCreate.model_validate(row))
            created += 1
        except DuplicateUsernameError:
            skipped += 1
        except ValidationError as e:
            logger.warning(f"row {i}: invalid user, skipped ({e.error_count()} errors)")
            skipped += 1
    return created, skipped


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_SEED
    rows = json.loads(path.read_text(encoding="utf-8"))

    if STORAGE_BACKEND == "sql":
        init_db()
        db = SessionLocal()
        try:
            created, skipped = seed(SqlUserRepository(db), rows)
        finally:
            db.close()
    elif STORAGE_BACKEND == "file":
        created, skipped = seed(FileUserRepository(DATA_FILE), rows)
    elif STORAGE_BACKEND == "memory":
        # nothing persists; useful only as a dry run of the seed file
        created, skipped = seed(MemoryUserRepository(), rows)
    else:
        sys.exit(f"Unknown STORAGE_BACKEND: {STORAGE_BACKEND}")

    logger.info(f"Seeded {created:,} users into '{STORAGE_BACKEND}' ({skipped:,} skipped)")


if __name__ == "__main__":
    main()
