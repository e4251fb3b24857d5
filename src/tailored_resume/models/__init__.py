"""Data models and type definitions"""

from tailored_resume.models.blocks import (
    Alignment,
    BlockKind,
    ColorIntent,
    DocumentBlock,
    TextRun,
    TextSize,
    block_to_dict,
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

__all__ = [
    "Alignment",
    "AwardEntry",
    "BlockKind",
    "CertificationEntry",
    "ColorIntent",
    "ContactInfo",
    "DocumentBlock",
    "EducationEntry",
    "InvalidRecordError",
    "LanguageEntry",
    "PresenceFlags",
    "ProjectEntry",
    "ResumeRecord",
    "TextRun",
    "TextSize",
    "WorkEntry",
    "block_to_dict",
]
