import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from discovery.database import init_db
from discovery.main import app
from discovery.schemas import UserCreate
from discovery.storage.factory import get_repository
from discovery.storage.file import FileUserRepository
from discovery.storage.memory import MemoryUserRepository
from discovery.storage.sql import SqlUserRepository

SF = {"lat": 37.7749, "lng": -122.4194}


def make_user(username, location=None, **kwargs):
    data = {
        "username": username,
        "password": "secret123",
        "display_name": username.title(),
        "age": 30,
        "location": location,
    }
    data.update(kwargs)
    return UserCreate.model_validate(data)


@pytest.fixture
def sql_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture(params=["memory", "file", "sql"])
def repo(request, tmp_path):
    if request.param == "memory":
        return MemoryUserRepository()
    if request.param == "file":
        return FileUserRepository(tmp_path / "db.json")
    return SqlUserRepository(request.getfixturevalue("sql_session"))


@pytest.fixture
def client():
    memory = MemoryUserRepository()
    app.dependency_overrides[get_repository] = lambda: memory
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
