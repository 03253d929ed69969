import os
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

# Must be set before jobboard.config is imported so a developer .env cannot leak in.
os.environ["DISABLE_DOTENV"] = "1"
os.environ.setdefault("SECRET_KEY", "test-secret-key")


@pytest.fixture()
def test_db_path(tmp_path: Path) -> Path:
    return tmp_path / "test.sqlite3"


@pytest.fixture()
def engine(test_db_path: Path):
    from jobboard.database import Base, build_engine, init_db

    engine = build_engine(f"sqlite+pysqlite:///{test_db_path}")
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def app(session_factory) -> FastAPI:
    """
    The real application with its session dependency pointed at the temporary DB.

    TestClient is used without a context manager, so the startup hook that
    creates tables in the configured DATABASE_URL never runs.
    """
    from jobboard.database import get_db
    from jobboard.main import app as fastapi_app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def signup(client):
    """Create an account and return bearer headers for it."""
    def _signup(email: str, role: str, *, password: str = "Testpass123!", full_name: str = "Test User") -> dict:
        r = client.post(
            "/auth/signup",
            json={"email": email, "password": password, "role": role, "full_name": full_name},
        )
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['access_token']}"}
    return _signup


ALL_OFF = {
    "fullName": "Off",
    "photoProfile": "Off",
    "gender": "Off",
    "domicile": "Off",
    "email": "Off",
    "phoneNumber": "Off",
    "linkedInLink": "Off",
    "dateOfBirth": "Off",
}


@pytest.fixture()
def job_payload():
    def _payload(**overrides) -> dict:
        body = {
            "jobName": "Frontend Developer",
            "jobType": "Full-time",
            "jobDescription": "Build and maintain the job board UI.",
            "companyName": "Rakamin",
            "numberOfCandidatesNeeded": 2,
            "jobSalary": {"minimum": 7000000, "maximum": 8000000},
            "status": "active",
            "minimumProfileInformation": dict(ALL_OFF),
        }
        requirements = overrides.pop("requirements", None)
        if requirements:
            body["minimumProfileInformation"].update(requirements)
        body.update(overrides)
        return body
    return _payload


@pytest.fixture()
def create_job(client, job_payload):
    def _create(headers: dict, **overrides) -> dict:
        r = client.post("/api/jobs", json=job_payload(**overrides), headers=headers)
        assert r.status_code == 201, r.text
        return r.json()["job"]
    return _create
