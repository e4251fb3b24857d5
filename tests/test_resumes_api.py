"""Tests for resume API endpoints."""

from __future__ import annotations

import base64
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from tailored_resume.api.main import app


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(app)


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "formats": ["docx", "pdf", "tex", "txt"],
        }


class TestListFormats:
    def test_lists_all_renderers(self, client: TestClient) -> None:
        response = client.get("/api/resumes/formats")
        assert response.status_code == 200
        data = response.json()
        assert [item["name"] for item in data] == ["docx", "pdf", "tex", "txt"]
        assert data[1]["media_type"] == "application/pdf"


class TestPreviewResume:
    def test_returns_blocks(self, client: TestClient, minimal_payload) -> None:
        response = client.post("/api/resumes/preview", json={"resume": minimal_payload})
        assert response.status_code == 200
        blocks = response.json()["blocks"]
        assert [b["text"] for b in blocks] == [
            "JANE DOE",
            "jane@x.com",
            "CORE COMPETENCIES",
            "Python • SQL",
        ]
        assert blocks[0]["kind"] == "header"
        assert blocks[0]["level"] == 0
        assert blocks[0]["alignment"] == "center"
        assert blocks[2]["runs"][0]["color"] == "primary"

    def test_links_exposed(self, client: TestClient, full_payload) -> None:
        response = client.post("/api/resumes/preview", json={"resume": full_payload})
        assert response.status_code == 200
        contact = response.json()["blocks"][1]
        links = [run["link"] for run in contact["runs"] if run["link"]]
        assert links == [
            "https://linkedin.com/in/janedoe",
            "https://github.com/janedoe",
            "https://janedoe.dev",
        ]

    def test_bullet_kind(self, client: TestClient, full_payload) -> None:
        response = client.post("/api/resumes/preview", json={"resume": full_payload})
        kinds = {b["kind"] for b in response.json()["blocks"]}
        assert kinds == {"header", "paragraph", "bulletItem", "spacer"}

    def test_missing_name_is_422(self, client: TestClient, minimal_payload) -> None:
        minimal_payload["full_name"] = "   "
        response = client.post("/api/resumes/preview", json={"resume": minimal_payload})
        assert response.status_code == 422
        assert "full name" in response.json()["detail"]

    def test_non_object_resume_is_422(self, client: TestClient) -> None:
        response = client.post("/api/resumes/preview", json={"resume": ["a"]})
        assert response.status_code == 422


class TestDownloadResume:
    def test_docx_download(self, client: TestClient, full_payload) -> None:
        response = client.post(
            "/api/resumes/download",
            json={
                "resume": full_payload,
                "job_title": "Senior Data Engineer",
                "company": "Northwind",
            },
        )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
        )
        assert response.headers["content-disposition"] == (
            'attachment; filename="Senior_Data_Engineer_Northwind_Resume.docx"'
        )
        assert response.content[:2] == b"PK"

    @pytest.mark.parametrize(
        ("fmt", "prefix"),
        [("pdf", b"%PDF"), ("txt", b"JANE DOE\n"), ("tex", b"\\documentclass")],
    )
    def test_other_formats(self, client: TestClient, minimal_payload, fmt, prefix) -> None:
        response = client.post(
            "/api/resumes/download", json={"resume": minimal_payload, "format": fmt}
        )
        assert response.status_code == 200
        assert response.content.startswith(prefix)
        assert f'filename="tailored_resume.{fmt}"' in response.headers["content-disposition"]

    def test_unknown_format_is_400(self, client: TestClient, minimal_payload) -> None:
        response = client.post(
            "/api/resumes/download", json={"resume": minimal_payload, "format": "odt"}
        )
        assert response.status_code == 400
        assert "Available: docx, pdf, tex, txt" in response.json()["detail"]

    def test_missing_name_is_422(self, client: TestClient) -> None:
        response = client.post("/api/resumes/download", json={"resume": {"skills": ["Python"]}})
        assert response.status_code == 422

    def test_non_ascii_file_name(self, client: TestClient, minimal_payload) -> None:
        response = client.post(
            "/api/resumes/download",
            json={
                "resume": minimal_payload,
                "format": "txt",
                "job_title": "数据工程师",
                "company": "Acme",
            },
        )
        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            'attachment; filename="Acme_Resume.txt"; '
            "filename*=UTF-8''%E6%95%B0%E6%8D%AE%E5%B7%A5%E7%A8%8B%E5%B8%88_Acme_Resume.txt"
        )

    def test_accented_file_name_folds_to_ascii(
        self, client: TestClient, minimal_payload
    ) -> None:
        response = client.post(
            "/api/resumes/download",
            json={
                "resume": minimal_payload,
                "format": "txt",
                "job_title": "Développeuse – Back-end",
                "company": "Café",
            },
        )
        assert response.status_code == 200
        disposition = response.headers["content-disposition"]
        assert disposition.startswith(
            'attachment; filename="Developpeuse__Back-end_Cafe_Resume.txt"; filename*=UTF-8\'\''
        )

    def test_cjk_title_keeps_ascii_suffix(
        self, client: TestClient, minimal_payload
    ) -> None:
        response = client.post(
            "/api/resumes/download",
            json={"resume": minimal_payload, "format": "pdf", "job_title": "工程师"},
        )
        assert response.status_code == 200
        assert response.headers["content-disposition"].startswith(
            "attachment; filename=\"Resume.pdf\"; filename*=UTF-8''%E5%B7%A5"
        )


class TestBatchResumes:
    def test_renders_each_job_in_order(
        self, client: TestClient, full_payload, minimal_payload
    ) -> None:
        response = client.post(
            "/api/resumes/batch",
            json={
                "format": "txt",
                "jobs": [
                    {"resume": full_payload, "job_title": "Data Engineer", "company": "Northwind"},
                    {"resume": minimal_payload, "company": "Contoso"},
                ],
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["format"] == "txt"
        assert data["media_type"] == "text/plain; charset=utf-8"
        assert data["failed"] == 0
        assert [item["file_name"] for item in data["results"]] == [
            "Data_Engineer_Northwind_Resume.txt",
            "Contoso_Resume.txt",
        ]
        first = base64.b64decode(data["results"][0]["content_base64"]).decode("utf-8")
        assert "PROFESSIONAL EXPERIENCE" in first

    def test_invalid_job_does_not_fail_batch(self, client: TestClient, minimal_payload) -> None:
        response = client.post(
            "/api/resumes/batch",
            json={
                "format": "docx",
                "jobs": [{"resume": {"full_name": ""}}, {"resume": minimal_payload}],
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["failed"] == 1
        bad, good = data["results"]
        assert bad["ok"] is False
        assert "full name" in bad["error"]
        assert bad["content_base64"] is None
        assert good["ok"] is True
        assert base64.b64decode(good["content_base64"])[:2] == b"PK"

    def test_unknown_format_is_400(self, client: TestClient, minimal_payload) -> None:
        response = client.post(
            "/api/resumes/batch",
            json={"format": "odt", "jobs": [{"resume": minimal_payload}]},
        )
        assert response.status_code == 400

    def test_empty_job_list_is_422(self, client: TestClient) -> None:
        response = client.post("/api/resumes/batch", json={"format": "txt", "jobs": []})
        assert response.status_code == 422

    def test_uses_configured_concurrency(
        self, client: TestClient, minimal_payload, monkeypatch
    ) -> None:
        monkeypatch.setenv("TAILORED_RESUME_BATCH_CONCURRENCY", "3")
        with patch(
            "tailored_resume.services.resume_generator.ThreadPoolExecutor",
            wraps=ThreadPoolExecutor,
        ) as executor:
            response = client.post(
                "/api/resumes/batch",
                json={"format": "txt", "jobs": [{"resume": minimal_payload}] * 2},
            )
        assert response.status_code == 200
        executor.assert_called_once_with(max_workers=3)


class TestAppMetadata:
    def test_openapi_lists_batch_route(self, client: TestClient) -> None:
        schema = client.get("/openapi.json").json()
        assert schema["info"]["title"] == "Tailored Resume API"
        assert "/api/resumes/batch" in schema["paths"]

    def test_download_header_exposed_to_browsers(
        self, client: TestClient, minimal_payload
    ) -> None:
        response = client.post(
            "/api/resumes/download",
            json={"resume": minimal_payload, "format": "txt"},
            headers={"Origin": "http://localhost:3000"},
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "content-disposition" in response.headers["access-control-expose-headers"].lower()
