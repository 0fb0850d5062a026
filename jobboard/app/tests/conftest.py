"""Test configuration and fixtures for the HTTP layer."""
from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from jobboard.app.main import create_app


@pytest.fixture
def client(context):
    """Create test client around the in-memory context."""
    app = create_app(context)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Sign up an account through the API and return its token and id."""
    def _register(role="jobSeeker", email=None, name=None, password="secret123"):
        email = email or f"{role.lower()}-{uuid4().hex[:8]}@example.com"
        response = client.post(
            "/api/auth/signup",
            json={
                "name": name or f"Test {role}",
                "email": email,
                "password": password,
                "role": role,
            },
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return SimpleNamespace(
            id=body["user"]["id"],
            email=body["user"]["email"],
            token=body["token"],
            headers={"Authorization": f"Bearer {body['token']}"},
        )

    return _register


@pytest.fixture
def company(register):
    return register("company", name="Acme Corp")


@pytest.fixture
def seeker(register):
    return register("jobSeeker", name="Bob Seeker")


@pytest.fixture
def job_payload():
    return {
        "title": "Backend Engineer",
        "company": "Acme Corp",
        "salary": "$120k - $140k",
        "location": "Remote",
        "description": "Build and run the job board APIs.",
        "skillsRequired": ["python", "sql"],
        "jobType": "full-time",
    }


@pytest.fixture
def post_job(client, job_payload):
    """Post a job as the given company account and return its JSON."""
    def _post_job(account, **overrides):
        payload = {**job_payload, **overrides}
        response = client.post("/api/jobs", json=payload, headers=account.headers)
        assert response.status_code == 201, response.text
        return response.json()["job"]

    return _post_job


@pytest.fixture
def apply(client):
    """Submit an application as the given job seeker."""
    def _apply(account, job_id, filename="r.pdf", content=b"%PDF-1.4 resume", cover_letter="Hello"):
        return client.post(
            "/api/applications",
            data={"jobId": job_id, "coverLetter": cover_letter},
            files={"resume": (filename, content, "application/pdf")},
            headers=account.headers,
        )

    return _apply
