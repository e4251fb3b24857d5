"""Services"""

from tailored_resume.services.assembler import assemble, included
from tailored_resume.services.payload import PayloadError, load_payload, record_from_payload
from tailored_resume.services.resume_generator import (
    BatchItemResult,
    BatchJob,
    build_blocks,
    generate_batch,
    generate_resume_bytes,
    generate_resume_file,
    generate_resume_pdf_latex,
    resume_file_name,
)

__all__ = [
    "assemble",
    "included",
    "PayloadError",
    "load_payload",
    "record_from_payload",
    "BatchItemResult",
    "BatchJob",
    "build_blocks",
    "generate_batch",
    "generate_resume_bytes",
    "generate_resume_file",
    "generate_resume_pdf_latex",
    "resume_file_name",
]
