"""Data models for tailored resume records.

A :class:`ResumeRecord` carries the tailored content produced upstream
together with the flags describing which fields were actually detected
in the candidate's original resume. Both are read-only inputs to the
document assembler.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class InvalidRecordError(ValueError):
    """Raised when a resume record has no usable full name."""


@dataclass(frozen=True, slots=True)
class ContactInfo:
    """Candidate contact details. Every field is optional."""

    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    website_url: str | None = None
    willing_to_relocate: bool | None = None


@dataclass(frozen=True, slots=True)
class PresenceFlags:
    """Which contact fields and sections were detected in the source resume."""

    has_email: bool = False
    has_phone: bool = False
    has_location: bool = False
    has_linkedin: bool = False
    has_github: bool = False
    has_social_links: bool = False
    has_relocation_willingness: bool = False
    has_summary: bool = False
    has_skills: bool = False
    has_work_experience: bool = False
    has_education: bool = False
    has_certifications: bool = False
    has_projects: bool = False
    has_languages: bool = False
    has_awards: bool = False


@dataclass(frozen=True, slots=True)
class WorkEntry:
    """A single position. Dates are kept as given (usually ``YYYY-MM``)."""

    job_title: str | None = None
    company: str | None = None
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    responsibilities: tuple[str, ...] = ()
    has_job_title: bool = False
    has_company: bool = False
    has_location: bool = False
    has_start_date: bool = False
    has_end_date: bool = False
    has_responsibilities: bool = False


@dataclass(frozen=True, slots=True)
class EducationEntry:
    """A single education record."""

    degree: str | None = None
    institution: str | None = None
    location: str | None = None
    start_year: int | str | None = None
    end_year: int | str | None = None
    additional_details: str | None = None
    has_degree: bool = False
    has_institution: bool = False
    has_location: bool = False
    has_start_year: bool = False
    has_end_year: bool = False
    has_additional_details: bool = False


@dataclass(frozen=True, slots=True)
class CertificationEntry:
    name: str | None = None
    issuer: str | None = None
    year: int | str | None = None
    credential_url: str | None = None
    has_name: bool = False
    has_issuer: bool = False
    has_year: bool = False
    has_credential_url: bool = False


@dataclass(frozen=True, slots=True)
class ProjectEntry:
    title: str | None = None
    description: str | None = None
    url: str | None = None
    has_title: bool = False
    has_description: bool = False
    has_url: bool = False


@dataclass(frozen=True, slots=True)
class LanguageEntry:
    language: str | None = None
    proficiency: str | None = None
    has_language: bool = False
    has_proficiency: bool = False


@dataclass(frozen=True, slots=True)
class AwardEntry:
    title: str | None = None
    issuer: str | None = None
    year: int | str | None = None
    description: str | None = None
    has_title: bool = False
    has_issuer: bool = False
    has_year: bool = False
    has_description: bool = False


@dataclass(frozen=True, slots=True)
class ResumeRecord:
    """Tailored resume content plus its source-detection flags.

    Attributes:
        full_name: Candidate name. Must be a non-empty string.
        contact: Contact details, each gated by a flag in ``presence``.
        summary: Professional summary paragraph.
        skills: Skill names in display order.
        work_experience: Positions, most recent first.
        education: Education records, most recent first.
        presence: Top-level detection flags.
    """

    full_name: str
    contact: ContactInfo = field(default_factory=ContactInfo)
    summary: str | None = None
    skills: tuple[str, ...] = ()
    work_experience: tuple[WorkEntry, ...] = ()
    education: tuple[EducationEntry, ...] = ()
    certifications: tuple[CertificationEntry, ...] = ()
    projects: tuple[ProjectEntry, ...] = ()
    languages: tuple[LanguageEntry, ...] = ()
    awards: tuple[AwardEntry, ...] = ()
    presence: PresenceFlags = field(default_factory=PresenceFlags)
