"""Resume document assembly.

Turns a :class:`ResumeRecord` into an ordered tuple of
:class:`DocumentBlock` values. A field is shown only when its detection
flag is set *and* its value is populated (see :func:`included`), so the
output never contains information the source resume did not have.

Section order is fixed: name, contact line, summary, skills, work
experience, education, certifications, projects, languages, awards.
Every section builder is a pure function returning its own tuple of
blocks; a section that ends up with no body is omitted entirely,
header included.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from itertools import chain
from typing import TypeVar

from tailored_resume.models.blocks import (
    Alignment,
    BlockKind,
    ColorIntent,
    DocumentBlock,
    TextRun,
    TextSize,
)
from tailored_resume.models.resume import (
    AwardEntry,
    CertificationEntry,
    ContactInfo,
    EducationEntry,
    InvalidRecordError,
    LanguageEntry,
    PresenceFlags,
    ProjectEntry,
    ResumeRecord,
    WorkEntry,
)

logger = logging.getLogger(__name__)

__all__ = [
    "assemble",
    "date_range",
    "included",
    "included_items",
    "repeatable_section",
]

T = TypeVar("T")

CONTACT_SEPARATOR = " • "
SKILL_SEPARATOR = " • "
LINE_SEPARATOR = " | "
ONGOING = "Present"

SUMMARY_TITLE = "PROFESSIONAL SUMMARY"
SKILLS_TITLE = "CORE COMPETENCIES"
EXPERIENCE_TITLE = "PROFESSIONAL EXPERIENCE"
EDUCATION_TITLE = "EDUCATION"
CERTIFICATIONS_TITLE = "CERTIFICATIONS"
PROJECTS_TITLE = "KEY PROJECTS"
LANGUAGES_TITLE = "LANGUAGES"
AWARDS_TITLE = "AWARDS & HONORS"

# (flag attribute, contact attribute, display label). A label replaces the
# raw value, which is then kept only as the hyperlink target.
_CONTACT_FIELDS: tuple[tuple[str, str, str | None], ...] = (
    ("has_email", "email", None),
    ("has_phone", "phone", None),
    ("has_location", "location", None),
    ("has_linkedin", "linkedin_url", "LinkedIn"),
    ("has_github", "github_url", "GitHub"),
    ("has_social_links", "website_url", "Portfolio"),
)


# -----------------------------------------------------------------------
# Inclusion rule


def included(flag: bool, value: object) -> str | None:
    """Return the display text for *value* if it may be rendered.

    A value qualifies only when *flag* is true and the value is a
    non-blank string or a number. Strings are trimmed; integral floats
    are shown without a fractional part.
    """
    if not flag or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value != value:  # NaN
            return None
        return str(int(value)) if value.is_integer() else str(value)
    return None


def included_items(flag: bool, values: object) -> tuple[str, ...]:
    """Apply :func:`included` to each item of a list of strings.

    Non-string and blank items are dropped.
    """
    if not flag or not isinstance(values, (list, tuple)):
        return ()
    return tuple(item.strip() for item in values if isinstance(item, str) and item.strip())


def date_range(
    has_start: bool,
    start: object,
    has_end: bool,
    end: object,
) -> str | None:
    """Return the display range for a start/end pair, or *None*.

    ``has_end`` with an empty end value means the period is ongoing and
    renders as ``Present``; a false ``has_end`` means no end information
    exists, so no end marker is shown.
    """
    start_text = included(has_start, start)
    if start_text:
        if has_end:
            return f"{start_text} - {included(True, end) or ONGOING}"
        return start_text

    end_text = included(has_end, end)
    if end_text:
        return f"Until {end_text}"
    return None


# -----------------------------------------------------------------------
# Block helpers


def _join_runs(runs: Sequence[TextRun], separator: TextRun) -> tuple[TextRun, ...]:
    joined: list[TextRun] = []
    for index, run in enumerate(runs):
        if index:
            joined.append(separator)
        joined.append(run)
    return tuple(joined)


def section_header(title: str) -> DocumentBlock:
    return DocumentBlock(
        kind=BlockKind.HEADER,
        runs=(TextRun(title, bold=True, color=ColorIntent.PRIMARY, size=TextSize.HEADER),),
        spacing_before=15,
        spacing_after=9,
        level=1,
    )


def _spacer() -> DocumentBlock:
    return DocumentBlock(kind=BlockKind.SPACER, spacing_after=9)


def _bullet(*runs: TextRun) -> DocumentBlock:
    return DocumentBlock(kind=BlockKind.BULLET_ITEM, runs=runs, indent=2, spacing_after=5)


def _heading_line(primary: str | None, secondary: str | None) -> DocumentBlock | None:
    """Entry heading such as ``Title | Company``; *None* if both are missing."""
    runs: list[TextRun] = []
    if primary:
        runs.append(
            TextRun(primary, bold=True, color=ColorIntent.ACCENT, size=TextSize.SUBHEADER)
        )
    if secondary:
        runs.append(
            TextRun(
                secondary,
                bold=not primary,
                color=ColorIntent.PRIMARY if primary else ColorIntent.ACCENT,
                size=TextSize.SUBHEADER,
            )
        )
    if not runs:
        return None
    separator = TextRun(LINE_SEPARATOR, color=ColorIntent.PRIMARY, size=TextSize.SUBHEADER)
    return DocumentBlock(
        kind=BlockKind.PARAGRAPH,
        runs=_join_runs(runs, separator),
        indent=1,
        spacing_after=5,
    )


def _detail_line(*parts: str | None) -> DocumentBlock | None:
    """Italic ``location | dates`` line; *None* if every part is missing."""
    present = [part for part in parts if part]
    if not present:
        return None
    return DocumentBlock(
        kind=BlockKind.PARAGRAPH,
        runs=(
            TextRun(
                LINE_SEPARATOR.join(present),
                italic=True,
                color=ColorIntent.SECONDARY,
                size=TextSize.SMALL,
            ),
        ),
        indent=1,
        spacing_after=6,
    )


def _compact(*blocks: DocumentBlock | None) -> tuple[DocumentBlock, ...]:
    return tuple(block for block in blocks if block is not None)


# -----------------------------------------------------------------------
# Generic repeatable section


def repeatable_section(
    title: str,
    gate: bool,
    entries: Sequence[object] | None,
    entry_type: type[T],
    keep: Callable[[T], bool],
    render: Callable[[T], tuple[DocumentBlock, ...]],
    *,
    separated: bool = False,
) -> tuple[DocumentBlock, ...]:
    """Build a section made of repeated entries.

    The section is gated by *gate*, entries that are not *entry_type* or
    fail *keep* are dropped, and the header is emitted only when at least
    one entry survives. With *separated*, a spacer goes between
    consecutive entries (never after the last one).
    """
    if not gate or not entries:
        return ()

    retained = [entry for entry in entries if isinstance(entry, entry_type) and keep(entry)]
    dropped = len(entries) - len(retained)
    if dropped:
        logger.debug("Dropped %d %s entries without identifying fields", dropped, title)
    if not retained:
        return ()

    blocks: list[DocumentBlock] = [section_header(title)]
    for index, entry in enumerate(retained):
        if separated and index:
            blocks.append(_spacer())
        blocks.extend(render(entry))
    return tuple(blocks)


# -----------------------------------------------------------------------
# Sections


def name_section(full_name: object) -> tuple[DocumentBlock, ...]:
    if not isinstance(full_name, str) or not full_name.strip():
        raise InvalidRecordError("Resume record requires a non-empty full name")
    return (
        DocumentBlock(
            kind=BlockKind.HEADER,
            runs=(
                TextRun(
                    full_name.strip().upper(),
                    bold=True,
                    color=ColorIntent.PRIMARY,
                    size=TextSize.NAME,
                ),
            ),
            alignment=Alignment.CENTER,
            spacing_after=10,
            level=0,
        ),
    )


def contact_section(contact: ContactInfo, presence: PresenceFlags) -> tuple[DocumentBlock, ...]:
    fragments: list[TextRun] = []
    for flag_name, field_name, label in _CONTACT_FIELDS:
        value = included(getattr(presence, flag_name), getattr(contact, field_name))
        if not value:
            continue
        if label:
            fragments.append(TextRun(label, color=ColorIntent.PRIMARY, link=value))
        else:
            fragments.append(TextRun(value))

    if presence.has_relocation_willingness and contact.willing_to_relocate is True:
        fragments.append(TextRun("Open to relocation"))

    if not fragments:
        return ()
    separator = TextRun(CONTACT_SEPARATOR, color=ColorIntent.SECONDARY)
    return (
        DocumentBlock(
            kind=BlockKind.PARAGRAPH,
            runs=_join_runs(fragments, separator),
            alignment=Alignment.CENTER,
            spacing_after=15,
        ),
    )


def summary_section(summary: str | None, presence: PresenceFlags) -> tuple[DocumentBlock, ...]:
    text = included(presence.has_summary, summary)
    if not text:
        return ()
    return (
        section_header(SUMMARY_TITLE),
        DocumentBlock(
            kind=BlockKind.PARAGRAPH,
            runs=(TextRun(text),),
            alignment=Alignment.JUSTIFIED,
            indent=1,
            spacing_after=12,
        ),
    )


def skills_section(skills: Sequence[str], presence: PresenceFlags) -> tuple[DocumentBlock, ...]:
    names = included_items(presence.has_skills, skills)
    if not names:
        return ()
    return (
        section_header(SKILLS_TITLE),
        DocumentBlock(
            kind=BlockKind.PARAGRAPH,
            runs=(TextRun(SKILL_SEPARATOR.join(names)),),
            alignment=Alignment.JUSTIFIED,
            indent=1,
            spacing_after=12,
        ),
    )


# -- work experience ---------------------------------------------------


def _keep_work(entry: WorkEntry) -> bool:
    return bool(
        included(entry.has_job_title, entry.job_title)
        or included(entry.has_company, entry.company)
    )


def _work_blocks(entry: WorkEntry) -> tuple[DocumentBlock, ...]:
    dates = date_range(entry.has_start_date, entry.start_date, entry.has_end_date, entry.end_date)
    bullets = tuple(
        _bullet(TextRun(item))
        for item in included_items(entry.has_responsibilities, entry.responsibilities)
    )
    return (
        _compact(
            _heading_line(
                included(entry.has_job_title, entry.job_title),
                included(entry.has_company, entry.company),
            ),
            _detail_line(included(entry.has_location, entry.location), dates),
        )
        + bullets
    )


def work_section(
    entries: Sequence[WorkEntry], presence: PresenceFlags
) -> tuple[DocumentBlock, ...]:
    return repeatable_section(
        EXPERIENCE_TITLE,
        presence.has_work_experience,
        entries,
        WorkEntry,
        _keep_work,
        _work_blocks,
        separated=True,
    )


# -- education ---------------------------------------------------------


def _keep_education(entry: EducationEntry) -> bool:
    return bool(
        included(entry.has_degree, entry.degree)
        or included(entry.has_institution, entry.institution)
    )


def _education_blocks(entry: EducationEntry) -> tuple[DocumentBlock, ...]:
    years = date_range(entry.has_start_year, entry.start_year, entry.has_end_year, entry.end_year)
    details = included(entry.has_additional_details, entry.additional_details)
    details_block = None
    if details:
        details_block = DocumentBlock(
            kind=BlockKind.PARAGRAPH,
            runs=(TextRun(details, italic=True),),
            indent=1,
            spacing_after=9,
        )
    return _compact(
        _heading_line(
            included(entry.has_degree, entry.degree),
            included(entry.has_institution, entry.institution),
        ),
        _detail_line(included(entry.has_location, entry.location), years),
        details_block,
    )


def education_section(
    entries: Sequence[EducationEntry], presence: PresenceFlags
) -> tuple[DocumentBlock, ...]:
    return repeatable_section(
        EDUCATION_TITLE,
        presence.has_education,
        entries,
        EducationEntry,
        _keep_education,
        _education_blocks,
        separated=True,
    )


# -- certifications ----------------------------------------------------


def _keep_certification(entry: CertificationEntry) -> bool:
    return bool(included(entry.has_name, entry.name) or included(entry.has_issuer, entry.issuer))


def _certification_blocks(entry: CertificationEntry) -> tuple[DocumentBlock, ...]:
    head = [
        part
        for part in (
            included(entry.has_name, entry.name),
            included(entry.has_issuer, entry.issuer),
        )
        if part
    ]
    runs = [TextRun(" - ".join(head))]
    year = included(entry.has_year, entry.year)
    if year:
        runs.append(TextRun(f" ({year})"))
    url = included(entry.has_credential_url, entry.credential_url)
    if url:
        runs.append(TextRun(f"{LINE_SEPARATOR}{url}", color=ColorIntent.SECONDARY, link=url))
    return (_bullet(*runs),)


def certifications_section(
    entries: Sequence[CertificationEntry], presence: PresenceFlags
) -> tuple[DocumentBlock, ...]:
    return repeatable_section(
        CERTIFICATIONS_TITLE,
        presence.has_certifications,
        entries,
        CertificationEntry,
        _keep_certification,
        _certification_blocks,
    )


# -- projects ----------------------------------------------------------


def _keep_project(entry: ProjectEntry) -> bool:
    return bool(
        included(entry.has_title, entry.title)
        or included(entry.has_description, entry.description)
    )


def _project_blocks(entry: ProjectEntry) -> tuple[DocumentBlock, ...]:
    title = included(entry.has_title, entry.title)
    description = included(entry.has_description, entry.description)
    runs: list[TextRun] = []
    if title:
        suffix = ": " if description else ""
        runs.append(TextRun(f"{title}{suffix}", bold=True, color=ColorIntent.ACCENT))
    if description:
        runs.append(TextRun(description))
    url = included(entry.has_url, entry.url)
    if url:
        runs.append(TextRun(f" ({url})", color=ColorIntent.SECONDARY, link=url))
    return (_bullet(*runs),)


def projects_section(
    entries: Sequence[ProjectEntry], presence: PresenceFlags
) -> tuple[DocumentBlock, ...]:
    return repeatable_section(
        PROJECTS_TITLE,
        presence.has_projects,
        entries,
        ProjectEntry,
        _keep_project,
        _project_blocks,
    )


# -- languages ---------------------------------------------------------


def _keep_language(entry: LanguageEntry) -> bool:
    return bool(included(entry.has_language, entry.language))


def _language_blocks(entry: LanguageEntry) -> tuple[DocumentBlock, ...]:
    language = included(entry.has_language, entry.language)
    proficiency = included(entry.has_proficiency, entry.proficiency)
    if not proficiency:
        return (_bullet(TextRun(language or "", bold=True, color=ColorIntent.ACCENT)),)
    return (
        _bullet(
            TextRun(f"{language}: ", bold=True, color=ColorIntent.ACCENT),
            TextRun(proficiency),
        ),
    )


def languages_section(
    entries: Sequence[LanguageEntry], presence: PresenceFlags
) -> tuple[DocumentBlock, ...]:
    return repeatable_section(
        LANGUAGES_TITLE,
        presence.has_languages,
        entries,
        LanguageEntry,
        _keep_language,
        _language_blocks,
    )


# -- awards ------------------------------------------------------------


def _keep_award(entry: AwardEntry) -> bool:
    return bool(included(entry.has_title, entry.title) or included(entry.has_issuer, entry.issuer))


def _award_blocks(entry: AwardEntry) -> tuple[DocumentBlock, ...]:
    head = " - ".join(
        part
        for part in (
            included(entry.has_title, entry.title),
            included(entry.has_issuer, entry.issuer),
        )
        if part
    )
    year = included(entry.has_year, entry.year)
    if year:
        head = f"{head} ({year})"
    runs = [TextRun(head, bold=True, color=ColorIntent.ACCENT)]
    description = included(entry.has_description, entry.description)
    if description:
        runs.append(TextRun(f": {description}"))
    return (_bullet(*runs),)


def awards_section(
    entries: Sequence[AwardEntry], presence: PresenceFlags
) -> tuple[DocumentBlock, ...]:
    return repeatable_section(
        AWARDS_TITLE,
        presence.has_awards,
        entries,
        AwardEntry,
        _keep_award,
        _award_blocks,
    )


# -----------------------------------------------------------------------
# Public API


def assemble(record: ResumeRecord) -> tuple[DocumentBlock, ...]:
    """Assemble the ordered document blocks for *record*.

    Args:
        record: Tailored resume content with its detection flags.

    Returns:
        Blocks in display order, ready for any renderer.

    Raises:
        InvalidRecordError: If ``record.full_name`` is missing or blank.
    """
    presence = record.presence or PresenceFlags()
    contact = record.contact or ContactInfo()

    blocks = tuple(
        chain(
            name_section(record.full_name),
            contact_section(contact, presence),
            summary_section(record.summary, presence),
            skills_section(record.skills, presence),
            work_section(record.work_experience, presence),
            education_section(record.education, presence),
            certifications_section(record.certifications, presence),
            projects_section(record.projects, presence),
            languages_section(record.languages, presence),
            awards_section(record.awards, presence),
        )
    )
    logger.debug("Assembled %d document blocks", len(blocks))
    return blocks
