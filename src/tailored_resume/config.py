"""Runtime settings read from the environment.

Values may also come from a ``.env`` file in the working directory:

- ``TAILORED_RESUME_OUTPUT_DIR``: where generated files are written.
- ``TAILORED_RESUME_DEFAULT_FORMAT``: renderer used when none is given.
- ``TAILORED_RESUME_BATCH_CONCURRENCY``: worker limit for batch runs.
- ``TAILORED_RESUME_LOG_LEVEL``: logging level name for the CLI.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "generated_resumes"
DEFAULT_FORMAT = "docx"
DEFAULT_BATCH_CONCURRENCY = 2
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True, slots=True)
class Settings:
    output_dir: Path
    default_format: str
    batch_concurrency: int
    log_level: str


def _get_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", name, raw, default)
        return default
    return max(value, minimum)


def get_settings() -> Settings:
    """Return settings for the current environment.

    Read on every call so tests can override variables with ``monkeypatch``.
    """
    output_dir = os.getenv("TAILORED_RESUME_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR
    return Settings(
        output_dir=Path(output_dir).expanduser(),
        default_format=(os.getenv("TAILORED_RESUME_DEFAULT_FORMAT") or DEFAULT_FORMAT).lower(),
        batch_concurrency=_get_int(
            "TAILORED_RESUME_BATCH_CONCURRENCY", DEFAULT_BATCH_CONCURRENCY
        ),
        log_level=(os.getenv("TAILORED_RESUME_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )
