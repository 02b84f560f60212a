"""
Application document component - entry points.

Wraps ApplicationDocumentGenerator and reports the degraded paths as
structured errors instead of a bare None.
"""

from __future__ import annotations

from src.domain.entities import ApplicationState
from src.rules.models import DocumentSettings

from ._impl import STATE_VIEWS, ApplicationDocumentGenerator, log_not_found
from .models import DocumentValidationError, GenerateDocumentInput, GenerateDocumentOutput
from .ports import ApplicationRepoPort, PdfRendererPort, TemplatePathPort, ViewRendererPort


def supported_states() -> tuple[ApplicationState, ...]:
    """States that produce a document."""
    return tuple(STATE_VIEWS)


def run_generate(
    inp: GenerateDocumentInput,
    *,
    repo: ApplicationRepoPort,
    template_paths: TemplatePathPort,
    view_renderer: ViewRendererPort,
    settings: DocumentSettings,
    pdf_renderer: PdfRendererPort,
) -> GenerateDocumentOutput:
    """
    Generate an application document.

    Args:
        inp: Application id and base URI.
        repo: Application repository.
        template_paths: Logical template name resolver.
        view_renderer: Template renderer.
        settings: Document settings.
        pdf_renderer: HTML to PDF renderer.

    Returns:
        GenerateDocumentOutput with PDF bytes, or errors when no document
        could be produced.
    """
    generator = ApplicationDocumentGenerator(
        repo=repo,
        template_paths=template_paths,
        view_renderer=view_renderer,
        settings=settings,
        pdf_renderer=pdf_renderer,
    )

    application = repo.get_by_id(inp.application_id)
    if application is None:
        log_not_found(inp.application_id)
        return GenerateDocumentOutput(
            pdf=None,
            errors=[
                DocumentValidationError(
                    code="not_found",
                    message=f"Application {inp.application_id} not found",
                    field="application_id",
                )
            ],
            success=False,
        )

    pdf = generator.generate_for_application(application, inp.base_uri)
    if pdf is None:
        return GenerateDocumentOutput(
            pdf=None,
            errors=[
                DocumentValidationError(
                    code="unsupported_state",
                    message=f"No document for applications in state '{application.state.value}'",
                    field="state",
                )
            ],
            success=False,
        )

    return GenerateDocumentOutput(pdf=pdf, errors=[], success=True)
