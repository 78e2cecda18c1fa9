import os
from dataclasses import dataclass
from datetime import date, timedelta

# Settings are read at import time; tests never need a real Postgres.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import myjob.models  # noqa: F401
from myjob.core.rate_limiter import rate_limiter
from myjob.database import Base, get_db
from myjob.dependencies import (
    get_current_employer,
    get_current_job_seeker,
    get_current_user,
    get_optional_user_id,
)
from myjob.main import app
from myjob.models import (
    Career,
    City,
    Company,
    District,
    JobPost,
    JobPostStatus,
    JobSeekerProfile,
    Location,
    Resume,
    RoleName,
    User,
)

test_engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@dataclass
class StubUser:
    id: str = "user-1"
    email: str = "seeker@example.com"
    full_name: str = "Seeker One"
    role_name: str = RoleName.JOB_SEEKER.value
    is_active: bool = True
    is_verify_email: bool = False
    avatar_url: str | None = None
    password_hash: str = "hashed-password"


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def stub_user() -> StubUser:
    return StubUser()


@pytest.fixture
def employer_user() -> StubUser:
    return StubUser(id="employer-1", email="hr@example.com", full_name="HR", role_name=RoleName.EMPLOYER.value)


def _override_common(user_id: str | None):
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_optional_user_id] = lambda: user_id


@pytest.fixture
def client(stub_user: StubUser):
    """Client authenticated as a job seeker."""
    _override_common(stub_user.id)
    app.dependency_overrides[get_current_user] = lambda: stub_user
    app.dependency_overrides[get_current_job_seeker] = lambda: stub_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def employer_client(employer_user: StubUser):
    _override_common(employer_user.id)
    app.dependency_overrides[get_current_user] = lambda: employer_user
    app.dependency_overrides[get_current_employer] = lambda: employer_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    """No auth overrides: protected routes see a missing bearer token."""
    _override_common(None)
    yield TestClient(app)
    app.dependency_overrides.clear()


# --- Real-database fixtures for service tests ---

@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=test_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@dataclass
class Lookups:
    city: City
    other_city: City
    district: District
    other_district: District
    career: Career


@pytest.fixture
def lookups(db_session) -> Lookups:
    city = City(name="Ha Noi")
    other_city = City(name="Da Nang")
    db_session.add_all([city, other_city])
    db_session.flush()
    district = District(name="Cau Giay", city_id=city.id)
    other_district = District(name="Hai Chau", city_id=other_city.id)
    career = Career(name="Software Engineering")
    db_session.add_all([district, other_district, career])
    db_session.commit()
    return Lookups(city, other_city, district, other_district, career)


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make(role_name: str = RoleName.JOB_SEEKER.value, email: str | None = None) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            id=f"u-{n}",
            email=email or f"user{n}@example.com",
            password_hash="x",
            full_name=f"User {n}",
            role_name=role_name,
        )
        db_session.add(user)
        if role_name == RoleName.JOB_SEEKER.value:
            db_session.add(JobSeekerProfile(user=user))
        db_session.commit()
        return user

    return _make


@pytest.fixture
def make_company(db_session, lookups):
    def _make(user: User, name: str = "Acme", slug: str | None = None) -> Company:
        company = Company(
            user=user,
            company_name=name,
            slug=slug or name.lower(),
            company_email="contact@acme.example",
            company_phone="0123456789",
            tax_code="TAX-1",
            location=Location(city_id=lookups.city.id, district_id=lookups.district.id, address="1 Main St"),
        )
        db_session.add(company)
        db_session.commit()
        return company

    return _make


@pytest.fixture
def make_job_post(db_session, lookups):
    counter = {"n": 0}

    def _make(
        company: Company,
        *,
        job_name: str = "Backend Engineer",
        status: int = JobPostStatus.PUBLISHED.value,
        deadline: date | None = None,
        city_id: int | None = None,
        district_id: int | None = None,
        **fields,
    ) -> JobPost:
        counter["n"] += 1
        job_post = JobPost(
            job_name=job_name,
            slug=fields.pop("slug", f"job-{counter['n']}"),
            deadline=deadline or date.today() + timedelta(days=30),
            status=status,
            career_id=lookups.career.id,
            company_id=company.id,
            user_id=company.user_id,
            location=Location(
                city_id=city_id or lookups.city.id,
                district_id=district_id or lookups.district.id,
                address="1 Main St",
            ),
            **fields,
        )
        db_session.add(job_post)
        db_session.commit()
        return job_post

    return _make


@pytest.fixture
def make_resume(db_session):
    def _make(user: User, title: str = "My CV") -> Resume:
        resume = Resume(user_id=user.id, title=title)
        db_session.add(resume)
        db_session.commit()
        return resume

    return _make
