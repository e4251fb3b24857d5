"""HTTP service for tailored resumes.

Clients post the tailored resume payload (content plus the flags saying
what the source resume actually contained) and get back either the
assembled blocks for an on-screen preview, a single rendered file, or a
batch of files, one per job posting.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tailored_resume.api.routes import health, resumes
from tailored_resume.renderers import list_renderers

API_VERSION = "0.1.0"

app = FastAPI(
    title="Tailored Resume API",
    description=(
        "Assembles tailored resumes without adding anything the source resume "
        f"did not contain, and renders them as {', '.join(list_renderers())}."
    ),
    version=API_VERSION,
    openapi_tags=[
        {"name": "resumes", "description": "Preview, download and batch-render resumes"},
        {"name": "health", "description": "Liveness and available output formats"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(health.router)
app.include_router(resumes.router, prefix="/api")


def main() -> None:
    """Serve the API with uvicorn on port 8000, reloading on code changes."""
    import uvicorn

    uvicorn.run(
        "tailored_resume.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
