"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seeded companies, jobs and users with their tokens
"""

import os

# Must be set before the app modules read their settings
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_access_token
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.crud import user as user_crud
from app.models import Company, Job, User  # noqa: F401
from app.schemas.company import CompanyCreate
from app.schemas.job import JobCreate
from app.schemas.user import UserRegisterRequest
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite only honours ON DELETE CASCADE with foreign keys switched on."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


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
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def companies(db_session):
    """Three companies: c1, c2, c3 with 1, 2 and 3 employees."""
    created = []
    for i in (1, 2, 3):
        created.append(company_crud.create(db_session, CompanyCreate(
            handle=f"c{i}",
            name=f"C{i}",
            description=f"Desc{i}",
            num_employees=i,
            logo_url=f"http://c{i}.img",
        )))
    return created


@pytest.fixture
def jobs(db_session, companies):
    """
    Four jobs:
    j1 at c1 (100000, 0.1), j2 at c2 (200000, 0.2),
    j3 at c3 (300000, zero equity), j4 at c1 (no salary, no equity).
    """
    rows = [
        ("j1", 100000, "0.1", "c1"),
        ("j2", 200000, "0.2", "c2"),
        ("j3", 300000, "0", "c3"),
        ("j4", None, None, "c1"),
    ]
    return [
        job_crud.create(db_session, JobCreate(
            title=title, salary=salary, equity=equity, company_handle=handle,
        ))
        for title, salary, equity, handle in rows
    ]


def _make_user(db_session, username, is_admin):
    return user_crud.register(db_session, UserRegisterRequest(
        username=username,
        password=f"password-{username}",
        first_name=f"U{username}F",
        last_name=f"U{username}L",
        email=f"{username}@email.com",
    ), is_admin=is_admin)


@pytest.fixture
def user_token(db_session):
    """Bearer token for the regular user u1."""
    user = _make_user(db_session, "u1", is_admin=False)
    return create_access_token({"sub": user.username, "is_admin": False})


@pytest.fixture
def admin_token(db_session):
    """Bearer token for the admin user u2."""
    user = _make_user(db_session, "u2", is_admin=True)
    return create_access_token({"sub": user.username, "is_admin": True})


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def user_headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}
