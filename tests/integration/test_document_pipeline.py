"""
End-to-end document generation with the real templates and Jinja renderer.

The PDF step is replaced by a recorder so the markup can be inspected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

from src.adapters.memory_repo import InMemoryApplicationRepo
from src.adapters.render.jinja_renderer import JinjaViewRenderer
from src.adapters.templates.path_provider import RulesTemplatePathProvider
from src.components.application_document import (
    DEFAULT_PDF_OPTIONS,
    ApplicationDocumentGenerator,
    PdfOptions,
)
from src.domain.entities import (
    Application,
    ApplicationState,
    Fund,
    LegalEntity,
    Person,
    Product,
    Review,
)
from src.rules.loader import load_rules

PROJECT_ROOT = Path(__file__).parent.parent.parent


@dataclass
class RecordedPdf:
    html: str

    def to_bytes(self) -> bytes:
        return self.html.encode("utf-8")


@dataclass
class RecordingPdfRenderer:
    calls: list[tuple[str, PdfOptions]] = field(default_factory=list)

    def render_from_html(self, html: str, options: PdfOptions) -> RecordedPdf:
        self.calls.append((html, options))
        return RecordedPdf(html)


def make_application(state: ApplicationState, **overrides) -> Application:
    fields = {
        "reference_number": "APP-0042",
        "state": state,
        "person": Person(first_name="Lerato", surname="Mokoena"),
        "date": datetime(2024, 3, 5, 9, 0),
        "is_legal_entity": True,
        "legal_entity": LegalEntity(name="Mokoena Holdings", registration_number="2018/55"),
        "products": [
            Product(
                name="Growth",
                funds=[Fund(name="Equity Fund", amount=Decimal("1200"), fees=Decimal("200"))],
            )
        ],
    }
    fields.update(overrides)
    return Application(**fields)


@pytest.fixture
def rules():
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def pdf_renderer() -> RecordingPdfRenderer:
    return RecordingPdfRenderer()


def generate(app: Application, rules, pdf_renderer) -> str:
    generator = ApplicationDocumentGenerator(
        repo=InMemoryApplicationRepo([app]),
        template_paths=RulesTemplatePathProvider(rules.templates),
        view_renderer=JinjaViewRenderer(),
        settings=rules.documents,
        pdf_renderer=pdf_renderer,
    )
    pdf = generator.generate(app.id, str(PROJECT_ROOT) + "/")
    assert pdf is not None
    return pdf.decode("utf-8")


def test_pending_document(rules, pdf_renderer):
    html = generate(make_application(ApplicationState.PENDING), rules, pdf_renderer)

    assert "APP-0042" in html
    assert "Lerato Mokoena" in html
    assert "05 March 2024" in html
    assert rules.documents.support_email in html
    assert "Application Received" in html
    assert "Mokoena Holdings" not in html
    assert pdf_renderer.calls[0][1] is DEFAULT_PDF_OPTIONS


def test_activated_document(rules, pdf_renderer):
    html = generate(make_application(ApplicationState.ACTIVATED), rules, pdf_renderer)

    assert "Application Activated" in html
    assert "Mokoena Holdings" in html
    assert "Equity Fund" in html
    # (1200 - 200) * 0.15
    assert "150.00" in html


def test_in_review_document(rules, pdf_renderer):
    app = make_application(
        ApplicationState.IN_REVIEW,
        is_legal_entity=False,
        current_review=Review(reason="Outstanding proof of address required", opened_at=datetime(2024, 4, 1)),
    )

    html = generate(app, rules, pdf_renderer)

    assert "Application In Review" in html
    assert "address verification for FICA purposes." in html
    assert "01 April 2024" in html
    assert "Mokoena Holdings" not in html
