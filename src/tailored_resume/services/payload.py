"""Map the upstream LLM payload onto :class:`ResumeRecord`.

The payload is the JSON object returned by the ``generate_tailored_resume``
function call: snake_case keys, a ``source_content_analysis`` object with
the top-level detection flags, and per-entry ``has_*`` flags on every
item of the repeatable sections.

Nothing here decides what gets rendered. Values and flags are copied
as-is (flags coerced to ``bool``) and the assembler applies the
inclusion rule. Items that are not JSON objects become empty entries
whose flags are all false, so they are filtered out downstream.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from tailored_resume.models.resume import (
    AwardEntry,
    CertificationEntry,
    ContactInfo,
    EducationEntry,
    LanguageEntry,
    PresenceFlags,
    ProjectEntry,
    ResumeRecord,
    WorkEntry,
)

logger = logging.getLogger(__name__)

__all__ = [
    "PayloadError",
    "load_payload",
    "record_from_payload",
]


class PayloadError(ValueError):
    """Raised when a payload is not a JSON object."""


# -----------------------------------------------------------------------
# Internal builders


def _flag(source: Mapping[str, Any], key: str) -> bool:
    return source.get(key) is True


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _items(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _strings(value: Any) -> tuple[str, ...]:
    return tuple(item for item in _items(value) if isinstance(item, str))


def _build_presence(analysis: Mapping[str, Any]) -> PresenceFlags:
    """Map ``source_content_analysis`` to :class:`PresenceFlags`."""
    has_summary = _flag(analysis, "has_professional_summary") or _flag(analysis, "has_summary")
    return PresenceFlags(
        has_email=_flag(analysis, "has_email"),
        has_phone=_flag(analysis, "has_phone"),
        has_location=_flag(analysis, "has_location"),
        has_linkedin=_flag(analysis, "has_linkedin"),
        has_github=_flag(analysis, "has_github"),
        has_social_links=_flag(analysis, "has_social_links"),
        has_relocation_willingness=_flag(analysis, "has_relocation_willingness"),
        has_summary=has_summary,
        has_skills=_flag(analysis, "has_skills"),
        has_work_experience=_flag(analysis, "has_work_experience"),
        has_education=_flag(analysis, "has_education"),
        has_certifications=_flag(analysis, "has_certifications"),
        has_projects=_flag(analysis, "has_projects"),
        has_languages=_flag(analysis, "has_languages"),
        has_awards=_flag(analysis, "has_awards"),
    )


def _build_contact(contact: Mapping[str, Any]) -> ContactInfo:
    relocate = contact.get("willing_to_relocate")
    return ContactInfo(
        email=contact.get("email"),
        phone=contact.get("phone"),
        location=contact.get("location"),
        linkedin_url=contact.get("linkedin"),
        github_url=contact.get("github"),
        website_url=contact.get("website"),
        willing_to_relocate=relocate if isinstance(relocate, bool) else None,
    )


def _build_work(item: Any) -> WorkEntry:
    work = _mapping(item)
    return WorkEntry(
        job_title=work.get("job_title"),
        company=work.get("company"),
        location=work.get("location"),
        start_date=work.get("start_date"),
        end_date=work.get("end_date"),
        responsibilities=_strings(work.get("responsibilities")),
        has_job_title=_flag(work, "has_job_title"),
        has_company=_flag(work, "has_company"),
        has_location=_flag(work, "has_location"),
        has_start_date=_flag(work, "has_start_date"),
        has_end_date=_flag(work, "has_end_date"),
        has_responsibilities=_flag(work, "has_responsibilities"),
    )


def _build_education(item: Any) -> EducationEntry:
    edu = _mapping(item)
    return EducationEntry(
        degree=edu.get("degree"),
        institution=edu.get("institution"),
        location=edu.get("location"),
        start_year=edu.get("start_year"),
        end_year=edu.get("end_year"),
        additional_details=edu.get("additional_details"),
        has_degree=_flag(edu, "has_degree"),
        has_institution=_flag(edu, "has_institution"),
        has_location=_flag(edu, "has_location"),
        has_start_year=_flag(edu, "has_start_year"),
        has_end_year=_flag(edu, "has_end_year"),
        has_additional_details=_flag(edu, "has_additional_details"),
    )


def _build_certification(item: Any) -> CertificationEntry:
    cert = _mapping(item)
    return CertificationEntry(
        name=cert.get("name"),
        issuer=cert.get("issuer"),
        year=cert.get("year"),
        credential_url=cert.get("credential_url"),
        has_name=_flag(cert, "has_name"),
        has_issuer=_flag(cert, "has_issuer"),
        has_year=_flag(cert, "has_year"),
        has_credential_url=_flag(cert, "has_credential_url"),
    )


def _build_project(item: Any) -> ProjectEntry:
    project = _mapping(item)
    return ProjectEntry(
        title=project.get("title"),
        description=project.get("description"),
        url=project.get("url"),
        has_title=_flag(project, "has_title"),
        has_description=_flag(project, "has_description"),
        has_url=_flag(project, "has_url"),
    )


def _build_language(item: Any) -> LanguageEntry:
    lang = _mapping(item)
    return LanguageEntry(
        language=lang.get("language"),
        proficiency=lang.get("proficiency"),
        has_language=_flag(lang, "has_language"),
        has_proficiency=_flag(lang, "has_proficiency"),
    )


def _build_award(item: Any) -> AwardEntry:
    award = _mapping(item)
    return AwardEntry(
        title=award.get("title"),
        issuer=award.get("issuer"),
        year=award.get("year"),
        description=award.get("description"),
        has_title=_flag(award, "has_title"),
        has_issuer=_flag(award, "has_issuer"),
        has_year=_flag(award, "has_year"),
        has_description=_flag(award, "has_description"),
    )


# -----------------------------------------------------------------------
# Public API


def record_from_payload(payload: Mapping[str, Any]) -> ResumeRecord:
    """Build a :class:`ResumeRecord` from an LLM payload.

    Args:
        payload: Decoded ``generate_tailored_resume`` arguments.

    Returns:
        The record. ``full_name`` is passed through untouched; an empty
        name is reported by the assembler, not here.

    Raises:
        PayloadError: If *payload* is not a mapping.
    """
    if not isinstance(payload, Mapping):
        raise PayloadError(f"Resume payload must be a JSON object, got {type(payload).__name__}")

    analysis = payload.get("source_content_analysis")
    if not isinstance(analysis, Mapping):
        logger.warning("Payload has no source_content_analysis; only the name will be shown")
        analysis = {}

    full_name = payload.get("full_name")
    return ResumeRecord(
        full_name=full_name if isinstance(full_name, str) else "",
        contact=_build_contact(_mapping(payload.get("contact_information"))),
        summary=payload.get("professional_summary"),
        skills=_strings(payload.get("skills")),
        work_experience=tuple(_build_work(w) for w in _items(payload.get("work_experience"))),
        education=tuple(_build_education(e) for e in _items(payload.get("education"))),
        certifications=tuple(
            _build_certification(c) for c in _items(payload.get("certifications"))
        ),
        projects=tuple(_build_project(p) for p in _items(payload.get("projects"))),
        languages=tuple(_build_language(lang) for lang in _items(payload.get("languages"))),
        awards=tuple(_build_award(a) for a in _items(payload.get("awards"))),
        presence=_build_presence(analysis),
    )


def load_payload(text: str) -> dict[str, Any]:
    """Decode a JSON payload string.

    Raises:
        PayloadError: If *text* is not valid JSON or not a JSON object.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PayloadError(f"Invalid JSON payload: {exc}") from exc
    if not isinstance(data, dict):
        raise PayloadError(f"Resume payload must be a JSON object, got {type(data).__name__}")
    return data
