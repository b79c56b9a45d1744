import os

# Settings are read at import time; point them at throwaway values first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hirehub.db.base import Base
from hirehub.db.session import get_db
from hirehub.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

API = "/api/v1"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _reset_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(client):
    """Sign up and log in a user; returns its id and auth headers."""

    def _make(email, role="candidate", password="secret123", first_name="Test", last_name="User"):
        res = client.post(
            f"{API}/auth/signup",
            json={
                "email": email,
                "password": password,
                "first_name": first_name,
                "last_name": last_name,
                "role": role,
            },
        )
        assert res.status_code == 201, res.text

        login = client.post(f"{API}/auth/login", data={"username": email, "password": password})
        assert login.status_code == 200, login.text
        body = login.json()
        return {
            "id": body["user_id"],
            "headers": {"Authorization": f"Bearer {body['access_token']}"},
        }

    return _make


@pytest.fixture
def hr(make_user):
    return make_user("hr@example.com", role="hr", first_name="Priya", last_name="Rao")


@pytest.fixture
def admin(make_user):
    return make_user("admin@example.com", role="admin", first_name="Ada", last_name="Admin")


@pytest.fixture
def candidate(make_user):
    return make_user("cand@example.com", role="candidate", first_name="Ravi", last_name="Kumar")


@pytest.fixture
def post_job(client, hr):
    """Create a job as HR and return the response body."""

    def _post(**overrides):
        payload = {
            "title": "Backend Developer",
            "description": "Build APIs",
            "department": "Engineering",
            "experience_required": 4,
            "salary_min": 600000,
            "salary_max": 900000,
            "location": "Bengaluru",
            "required_skills": ["React", "Node.js"],
        }
        payload.update(overrides)
        res = client.post(f"{API}/jobs", json=payload, headers=hr["headers"])
        assert res.status_code == 201, res.text
        return res.json()

    return _post
