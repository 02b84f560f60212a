"""
Tests for the application document route.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.adapters.memory_repo import InMemoryApplicationRepo
from src.api.deps import get_base_uri, get_document_generator
from src.api.routes import documents
from src.api.routes.documents import build_content_disposition
from src.components.application_document import ApplicationDocumentGenerator, PdfOptions
from src.domain.entities import Application, ApplicationState, Person
from src.rules.models import DocumentSettings

# --- Test Doubles ---


class StubTemplatePaths:
    def get(self, name: str) -> str:
        return f"tpl/{name}.html"


class StubViewRenderer:
    def render(self, template_uri: str, model: Any) -> str:
        return f"<p>{model.reference_number}</p>"


@dataclass
class StubPdf:
    html: str

    def to_bytes(self) -> bytes:
        return b"%PDF-1.7 " + self.html.encode()


class StubPdfRenderer:
    def render_from_html(self, html: str, options: PdfOptions) -> StubPdf:
        return StubPdf(html)


# --- Test Setup ---


@pytest.fixture
def pending_app() -> Application:
    return Application(
        reference_number="APP-7",
        state=ApplicationState.PENDING,
        person=Person(first_name="Sam", surname="Lee"),
        date=datetime(2024, 1, 1),
    )


@pytest.fixture
def closed_app() -> Application:
    return Application(
        reference_number="APP-8",
        state=ApplicationState.CLOSED,
        person=Person(first_name="Kim", surname="Ng"),
        date=datetime(2024, 1, 1),
    )


@pytest.fixture
def app(pending_app: Application, closed_app: Application) -> FastAPI:
    """Test FastAPI app with document routes and stubbed collaborators."""
    app = FastAPI()
    app.include_router(documents.router, prefix="/api/applications")

    generator = ApplicationDocumentGenerator(
        repo=InMemoryApplicationRepo([pending_app, closed_app]),
        template_paths=StubTemplatePaths(),
        view_renderer=StubViewRenderer(),
        settings=DocumentSettings(support_email="s@example.com", signature="S", tax_rate="0.1"),
        pdf_renderer=StubPdfRenderer(),
    )
    app.dependency_overrides[get_document_generator] = lambda: generator
    app.dependency_overrides[get_base_uri] = lambda: "https://host/"
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


# --- Route Tests ---


class TestGetDocument:
    def test_returns_pdf(self, client: TestClient, pending_app: Application) -> None:
        response = client.get(f"/api/applications/{pending_app.id}/document")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == f'inline; filename="{pending_app.id}.pdf"'
        assert response.headers["cache-control"] == "no-store"
        assert response.content.startswith(b"%PDF")
        assert b"APP-7" in response.content

    def test_download_disposition(self, client: TestClient, pending_app: Application) -> None:
        response = client.get(f"/api/applications/{pending_app.id}/document?download=1")

        assert response.headers["content-disposition"].startswith("attachment;")

    def test_unknown_application_is_404(self, client: TestClient) -> None:
        response = client.get(f"/api/applications/{uuid4()}/document")

        assert response.status_code == 404

    def test_unsupported_state_is_404(self, client: TestClient, closed_app: Application) -> None:
        response = client.get(f"/api/applications/{closed_app.id}/document")

        assert response.status_code == 404

    def test_invalid_id_is_422(self, client: TestClient) -> None:
        response = client.get("/api/applications/not-a-uuid/document")

        assert response.status_code == 422


class TestContentDisposition:
    def test_inline(self) -> None:
        assert build_content_disposition("a.pdf") == 'inline; filename="a.pdf"'

    def test_quotes_escaped(self) -> None:
        assert build_content_disposition('a"b.pdf', download=True) == 'attachment; filename="a\\"b.pdf"'
