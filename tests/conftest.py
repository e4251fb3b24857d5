from __future__ import annotations

from typing import Any

import pytest

_ENV_VARS = (
    "TAILORED_RESUME_OUTPUT_DIR",
    "TAILORED_RESUME_DEFAULT_FORMAT",
    "TAILORED_RESUME_BATCH_CONCURRENCY",
    "TAILORED_RESUME_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test with default settings."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _flags(*names: str) -> dict[str, bool]:
    return {f"has_{name}": True for name in names}


@pytest.fixture
def full_payload() -> dict[str, Any]:
    """A generate_tailored_resume payload with every field detected."""
    return {
        "full_name": "Jane Doe",
        "contact_information": {
            "email": "jane@example.com",
            "phone": "+1 555 0100",
            "location": "Toronto, Canada",
            "linkedin": "https://linkedin.com/in/janedoe",
            "github": "https://github.com/janedoe",
            "website": "https://janedoe.dev",
            "willing_to_relocate": True,
        },
        "professional_summary": "Data engineer with eight years of pipeline experience.",
        "skills": ["Python", "SQL", "Airflow"],
        "work_experience": [
            {
                "job_title": "Senior Data Engineer",
                "company": "Northwind",
                "location": "Remote",
                "start_date": "2021-03",
                "end_date": None,
                "responsibilities": ["Led warehouse migration", "Cut storage costs by 30%"],
                **_flags(
                    "job_title",
                    "company",
                    "location",
                    "start_date",
                    "end_date",
                    "responsibilities",
                ),
            },
            {
                "job_title": "Platform Developer",
                "company": "Contoso",
                "location": "Vancouver",
                "start_date": "2017-06",
                "end_date": "2021-02",
                "responsibilities": ["Built ingestion services"],
                **_flags(
                    "job_title",
                    "company",
                    "location",
                    "start_date",
                    "end_date",
                    "responsibilities",
                ),
            },
        ],
        "education": [
            {
                "degree": "B.Sc. Computer Science",
                "institution": "University of Waterloo",
                "location": "Waterloo",
                "start_year": 2013,
                "end_year": 2017,
                "additional_details": "Dean's Honours List",
                **_flags(
                    "degree",
                    "institution",
                    "location",
                    "start_year",
                    "end_year",
                    "additional_details",
                ),
            }
        ],
        "certifications": [
            {
                "name": "AWS Certified Data Engineer",
                "issuer": "Amazon Web Services",
                "year": 2023,
                "credential_url": "https://aws.example/cred/123",
                **_flags("name", "issuer", "year", "credential_url"),
            }
        ],
        "projects": [
            {
                "title": "Resume Tailor",
                "description": "CLI that tailors resumes to postings",
                "url": "https://github.com/janedoe/tailor",
                **_flags("title", "description", "url"),
            }
        ],
        "languages": [
            {"language": "English", "proficiency": "Native", **_flags("language", "proficiency")},
            {
                "language": "French",
                "proficiency": "Professional",
                **_flags("language", "proficiency"),
            },
        ],
        "awards": [
            {
                "title": "Hackathon Winner",
                "issuer": "DevPost",
                "year": 2019,
                "description": "Best data tool",
                **_flags("title", "issuer", "year", "description"),
            }
        ],
        "source_content_analysis": _flags(
            "email",
            "phone",
            "location",
            "linkedin",
            "github",
            "social_links",
            "relocation_willingness",
            "professional_summary",
            "skills",
            "work_experience",
            "education",
            "certifications",
            "projects",
            "languages",
            "awards",
        ),
    }


@pytest.fixture
def minimal_payload() -> dict[str, Any]:
    """Name, email and two skills only."""
    return {
        "full_name": "Jane Doe",
        "contact_information": {"email": "jane@x.com", "phone": "555-0100"},
        "skills": ["Python", "SQL"],
        "source_content_analysis": {"has_email": True, "has_skills": True},
    }
