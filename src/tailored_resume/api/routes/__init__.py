"""Route handlers for the API."""

from tailored_resume.api.routes import health, resumes

__all__ = [
    "health",
    "resumes",
]
