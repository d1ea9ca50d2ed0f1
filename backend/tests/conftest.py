import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from campusconnect.config import settings
from campusconnect.database import get_db, init_db
from campusconnect.main import app
from campusconnect.services.identity_service import identity_service

ADMIN_EMAIL = "admin@campusconnect.com"
PASSWORD = "correct-horse-battery"


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def tmp_data(tmp_path):
    data_path = tmp_path / "CampusData"
    data_path.mkdir()
    return data_path


@pytest.fixture
def test_db(tmp_data):
    db_path = tmp_data / "campus.sqlite"
    init_db(db_path)
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def fresh_identity_service():
    """Reset session state for each test."""
    original = identity_service.__dict__.copy()
    identity_service._sessions = {}
    yield identity_service
    identity_service.__dict__.update(original)


@pytest.fixture
def client(tmp_data, test_db, fresh_identity_service):
    original_data_path = settings.data_path
    settings.data_path = tmp_data
    c = TestClient(app)
    yield c
    settings.data_path = original_data_path


@pytest.fixture
def make_user(client):
    """Sign up, log in and (optionally) onboard a user.

    Returns a dict with ``headers`` for authenticated calls and the created ``profile`` JSON.
    """

    def _make(email: str, role: str = "SEEKER", full_name: str | None = None, with_profile: bool = True) -> dict:
        r = client.post("/api/auth/signup", json={"email": email, "password": PASSWORD})
        assert r.status_code == 201, r.text
        r = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
        assert r.status_code == 200, r.text
        headers = {"Authorization": f"Bearer {r.json()['token']}"}

        profile = None
        if with_profile:
            r = client.post("/api/profile", json={
                "full_name": full_name or email.split("@")[0].title(),
                "role": role,
                "department": "Computer Science",
                "year": "Junior (3rd Year)",
                "skills": ["Python"],
                "interests": ["Research"],
            }, headers=headers)
            assert r.status_code == 201, r.text
            profile = r.json()
        return {"headers": headers, "profile": profile, "email": email}

    return _make


@pytest.fixture
def admin(make_user):
    return make_user(ADMIN_EMAIL, full_name="System Administrator")


@pytest.fixture
def finder(make_user):
    return make_user("finder@uni.edu", role="FINDER", full_name="Fiona Finder")


@pytest.fixture
def seeker(make_user):
    return make_user("seeker@uni.edu", role="SEEKER", full_name="Sam Seeker")


@pytest.fixture
def create_job(client):
    def _create(owner: dict, **overrides) -> dict:
        payload = {
            "title": "Research Assistant",
            "type": "ACADEMIC_PROJECT",
            "description": "Help with an NLP research project",
            "tags": ["Python", "AI/ML"],
        }
        payload.update(overrides)
        r = client.post("/api/jobs", json=payload, headers=owner["headers"])
        assert r.status_code == 201, r.text
        return r.json()

    return _create
