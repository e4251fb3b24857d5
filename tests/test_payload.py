"""Tests for mapping LLM payloads onto resume records."""

from __future__ import annotations

import logging

import pytest

from tailored_resume.models import (
    CertificationEntry,
    EducationEntry,
    PresenceFlags,
    ResumeRecord,
    WorkEntry,
)
from tailored_resume.services.payload import PayloadError, load_payload, record_from_payload


class TestRecordFromPayload:
    def test_full_payload(self, full_payload) -> None:
        record = record_from_payload(full_payload)

        assert isinstance(record, ResumeRecord)
        assert record.full_name == "Jane Doe"
        assert record.contact.email == "jane@example.com"
        assert record.contact.linkedin_url == "https://linkedin.com/in/janedoe"
        assert record.contact.github_url == "https://github.com/janedoe"
        assert record.contact.website_url == "https://janedoe.dev"
        assert record.contact.willing_to_relocate is True
        assert record.skills == ("Python", "SQL", "Airflow")
        assert len(record.work_experience) == 2
        assert len(record.languages) == 2

    def test_presence_flags(self, full_payload) -> None:
        presence = record_from_payload(full_payload).presence
        assert presence == PresenceFlags(
            **{name: True for name in PresenceFlags.__dataclass_fields__}
        )

    def test_work_entry_fields(self, full_payload) -> None:
        work = record_from_payload(full_payload).work_experience[0]
        assert work == WorkEntry(
            job_title="Senior Data Engineer",
            company="Northwind",
            location="Remote",
            start_date="2021-03",
            end_date=None,
            responsibilities=("Led warehouse migration", "Cut storage costs by 30%"),
            has_job_title=True,
            has_company=True,
            has_location=True,
            has_start_date=True,
            has_end_date=True,
            has_responsibilities=True,
        )

    def test_education_years_kept_as_given(self, full_payload) -> None:
        education = record_from_payload(full_payload).education[0]
        assert isinstance(education, EducationEntry)
        assert education.start_year == 2013
        assert education.end_year == 2017

    def test_summary_flag_alias(self) -> None:
        payload = {
            "full_name": "A",
            "professional_summary": "Hi",
            "source_content_analysis": {"has_summary": True},
        }
        assert record_from_payload(payload).presence.has_summary is True

    def test_truthy_non_boolean_flags_are_false(self) -> None:
        payload = {
            "full_name": "A",
            "skills": ["Python"],
            "source_content_analysis": {"has_skills": "yes", "has_email": 1},
        }
        presence = record_from_payload(payload).presence
        assert presence.has_skills is False
        assert presence.has_email is False

    def test_missing_analysis_logs_warning(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            record = record_from_payload({"full_name": "A", "skills": ["Python"]})
        assert record.presence == PresenceFlags()
        assert "source_content_analysis" in caplog.text

    def test_malformed_items_become_empty_entries(self) -> None:
        payload = {
            "full_name": "A",
            "certifications": ["AWS", None, {"name": "CKA", "has_name": True}],
            "source_content_analysis": {"has_certifications": True},
        }
        certs = record_from_payload(payload).certifications
        assert certs[0] == CertificationEntry()
        assert certs[1] == CertificationEntry()
        assert certs[2].name == "CKA"

    def test_non_list_sections_are_empty(self) -> None:
        payload = {"full_name": "A", "skills": "Python, SQL", "work_experience": {"x": 1}}
        record = record_from_payload(payload)
        assert record.skills == ()
        assert record.work_experience == ()

    def test_non_string_skills_dropped(self) -> None:
        record = record_from_payload({"full_name": "A", "skills": ["Python", 3, None]})
        assert record.skills == ("Python",)

    def test_non_boolean_relocation_ignored(self) -> None:
        payload = {"full_name": "A", "contact_information": {"willing_to_relocate": "yes"}}
        assert record_from_payload(payload).contact.willing_to_relocate is None

    def test_non_string_name_becomes_empty(self) -> None:
        assert record_from_payload({"full_name": 7}).full_name == ""

    @pytest.mark.parametrize("payload", [None, [], "text", 3])
    def test_non_mapping_rejected(self, payload) -> None:
        with pytest.raises(PayloadError):
            record_from_payload(payload)


class TestLoadPayload:
    def test_decodes_object(self) -> None:
        assert load_payload('{"full_name": "A"}') == {"full_name": "A"}

    def test_invalid_json(self) -> None:
        with pytest.raises(PayloadError, match="Invalid JSON"):
            load_payload("{not json")

    def test_non_object_json(self) -> None:
        with pytest.raises(PayloadError, match="JSON object"):
            load_payload("[1, 2]")

    def test_payload_error_is_value_error(self) -> None:
        assert issubclass(PayloadError, ValueError)
