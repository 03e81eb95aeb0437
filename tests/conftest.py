"""
Pytest configuration and shared fixtures.
"""

import os

os.environ.setdefault("JOBLY_ENV", "test")
os.environ.setdefault("SECRET_KEY", "secret-test-key-for-jobly-test-suite")

import pytest
from fastapi.testclient import TestClient

from jobly.auth import create_token
from jobly.database import Database
from jobly.main import create_app
from jobly.models import Company, Job


@pytest.fixture
def database(tmp_path) -> Database:
    """Open a fresh SQLite database with the schema created."""
    db = Database(f"sqlite:///{tmp_path / 'jobly_test.db'}").open()
    db.create_all()
    yield db
    db.close()


@pytest.fixture
def job_ids(database) -> dict:
    """Seed three companies and two jobs; return {title: id} for the jobs."""
    session = database.session()
    for n in (1, 2, 3):
        session.add(
            Company(
                handle=f"c{n}",
                name=f"C{n}",
                num_employees=n,
                description=f"Desc{n}",
                logo_url=f"http://c{n}.img",
            )
        )
    session.flush()

    j1 = Job(title="J1", salary=100000, equity=None, company_handle="c2")
    j2 = Job(title="J2", salary=70000, equity=0.04, company_handle="c1")
    session.add_all([j1, j2])
    session.commit()
    ids = {"J1": j1.id, "J2": j2.id}
    session.close()
    return ids


@pytest.fixture
def db_session(database, job_ids):
    """Session on the seeded database."""
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def client(database, job_ids):
    """TestClient bound to the seeded database."""
    app = create_app(database)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {create_token('admin', is_admin=True)}"}


@pytest.fixture
def user_headers() -> dict:
    return {"Authorization": f"Bearer {create_token('u1')}"}
