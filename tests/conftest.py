"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seed companies, jobs and users
- Bearer token headers
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_access_token
from app.models.company import Company
from app.models.job import Job
from app.models.user import User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session, monkeypatch):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    # Tables come from db_session; skip startup table creation on the real engine
    monkeypatch.setattr("main.init_db", lambda: None)
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed(db_session):
    """
    Seed data:
    - companies c1, c2, c3 with 1, 2 and 3 employees
    - jobs job1 (c1), job2 (c2) with equity and j3 (c1) without
    - users u1 (admin) and u2
    """
    db_session.add_all([
        Company(handle="c1", name="C1", description="Desc1", num_employees=1, logo_url="http://c1.img"),
        Company(handle="c2", name="C2", description="Desc2", num_employees=2, logo_url="http://c2.img"),
        Company(handle="c3", name="C3", description="Desc3", num_employees=3, logo_url="http://c3.img"),
    ])
    db_session.flush()

    jobs = [
        Job(title="job1", salary=10000, equity=0.01, company_handle="c1"),
        Job(title="job2", salary=200000, equity=0.07, company_handle="c2"),
        Job(title="j3", salary=50000, equity=0, company_handle="c1"),
    ]
    db_session.add_all(jobs)

    db_session.add_all([
        User(username="u1", first_name="U1F", last_name="U1L", email="u1@email.com", is_admin=True),
        User(username="u2", first_name="U2F", last_name="U2L", email="u2@email.com", is_admin=False),
    ])
    db_session.commit()

    return {"job_ids": [job.id for job in jobs]}


@pytest.fixture
def admin_headers():
    """Bearer header for admin u1"""
    token = create_access_token({"sub": "u1", "is_admin": True})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    """Bearer header for non-admin u2"""
    token = create_access_token({"sub": "u2", "is_admin": False})
    return {"Authorization": f"Bearer {token}"}
