"""Shared pytest fixtures for all tests."""

import json

import pytest

from tests.test_utils import make_test_candidate, make_test_job


@pytest.fixture
def berlin_job():
    """Mid-level full-time React/Node job in Berlin."""
    return make_test_job(
        id="job-berlin",
        title="Full Stack Engineer",
        skills=["react", "node"],
        location="Berlin",
        job_type="full-time",
        experience_level="mid",
        company_id="acme",
    )


@pytest.fixture
def berlin_candidate():
    """Candidate covering every requirement of berlin_job."""
    return make_test_candidate(
        id="cand-berlin",
        skills=["react", "node", "sql"],
        experience_years=4,
        location="Berlin",
        willing_to_relocate=False,
        job_types=["full-time"],
        name="Lena Schmidt",
    )


@pytest.fixture
def payload_file(tmp_path):
    """Write a small match payload to disk and return its path."""
    payload = {
        "job_filter": {"company_id": "acme"},
        "candidates": [
            {
                "id": "c-strong",
                "skills": ["React", "Node", "SQL"],
                "experience_years": 4,
                "current_location": "Berlin",
                "preferred_job_types": ["full-time"],
                "profiles": {"full_name": "Strong Match", "avatar_url": None, "phone": None},
            },
            {
                "id": "c-weak",
                "skills": ["Photoshop"],
                "current_location": "Lisbon",
                "profiles": {"full_name": "Weak Match"},
            },
        ],
        "jobs": [
            {
                "id": "j-1",
                "title": "Full Stack Engineer",
                "company_id": "acme",
                "skills_required": ["react", "node"],
                "location": "Berlin",
                "job_type": "full-time",
                "experience_level": "mid",
            },
            {
                "id": "j-other",
                "title": "Designer",
                "company_id": "other-co",
                "skills_required": ["photoshop"],
                "location": "Lisbon",
            },
        ],
    }
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(payload))
    return path
