"""
ApplicationDocumentGenerator - Lifecycle-aware PDF summaries of applications.

Fetches an application, picks a template and view model from its current
state, renders the markup and converts it to PDF.

Key behaviors:
- Pending, Activated and InReview applications each have a view model builder
- Missing applications and unsupported states log one warning and return None
- Collaborator failures propagate unchanged
- Every document uses the same fixed PDF options
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from uuid import UUID

from src.domain.entities import Application, ApplicationState
from src.rules.models import DocumentSettings

from ._portfolio import flatten_funds, portfolio_total
from .errors import MissingReviewError
from .models import (
    DEFAULT_PDF_OPTIONS,
    ActivatedApplicationViewModel,
    ApplicationViewModel,
    InReviewApplicationViewModel,
    PendingApplicationViewModel,
)
from .ports import ApplicationRepoPort, PdfRendererPort, TemplatePathPort, ViewRendererPort

logger = logging.getLogger(__name__)

# --- Template Names ---

PENDING_TEMPLATE = "PendingApplication"
ACTIVATED_TEMPLATE = "ActivatedApplication"
IN_REVIEW_TEMPLATE = "InReviewApplication"

# --- In Review Messages ---

IN_REVIEW_PREFIX = "Your application has been placed in review"
ADDRESS_SUFFIX = " pending outstanding address verification for FICA purposes."
BANK_SUFFIX = " pending outstanding bank account verification."
SUSPICIOUS_SUFFIX = " because of suspicious account behaviour. Please contact support ASAP."

# Checked in order, first hit wins
REVIEW_REASON_SUFFIXES: tuple[tuple[str, str], ...] = (
    ("address", ADDRESS_SUFFIX),
    ("bank", BANK_SUFFIX),
)


def join_template_uri(base_uri: str, path: str) -> str:
    """
    Join a base URI and a template path with exactly one separator.

    Only a single trailing "/" is dropped from the base. An empty base
    leaves the path as given.
    """
    if not base_uri:
        return path
    if base_uri.endswith("/"):
        base_uri = base_uri[:-1]
    if not path.startswith("/"):
        path = "/" + path
    return base_uri + path


def log_not_found(application_id: UUID) -> None:
    logger.warning(f"No application found for id '{application_id}'")


def full_name(application: Application) -> str:
    return f"{application.person.first_name} {application.person.surname}"


def in_review_message(reason: str) -> str:
    """Build the in-review notice for a review reason (case-sensitive match)."""
    for keyword, suffix in REVIEW_REASON_SUFFIXES:
        if keyword in reason:
            return IN_REVIEW_PREFIX + suffix
    return IN_REVIEW_PREFIX + SUSPICIOUS_SUFFIX

# --- View Model Builders ---


def build_pending_view(
    application: Application, settings: DocumentSettings
) -> PendingApplicationViewModel:
    return PendingApplicationViewModel(
        reference_number=application.reference_number,
        state=application.state.description,
        full_name=full_name(application),
        applied_on=application.date,
        support_email=settings.support_email,
        signature=settings.signature,
    )


def build_activated_view(
    application: Application, settings: DocumentSettings
) -> ActivatedApplicationViewModel:
    funds = flatten_funds(application.products)
    return ActivatedApplicationViewModel(
        reference_number=application.reference_number,
        state=application.state.description,
        full_name=full_name(application),
        applied_on=application.date,
        support_email=settings.support_email,
        signature=settings.signature,
        legal_entity=application.legal_entity if application.is_legal_entity else None,
        portfolio_funds=funds,
        portfolio_total_amount=portfolio_total(funds, settings.tax_rate),
    )


def build_in_review_view(
    application: Application, settings: DocumentSettings
) -> InReviewApplicationViewModel:
    review = application.current_review
    if review is None:
        raise MissingReviewError(application.id)

    funds = flatten_funds(application.products)
    return InReviewApplicationViewModel(
        reference_number=application.reference_number,
        state=application.state.description,
        full_name=full_name(application),
        applied_on=application.date,
        support_email=settings.support_email,
        signature=settings.signature,
        legal_entity=application.legal_entity if application.is_legal_entity else None,
        portfolio_funds=funds,
        portfolio_total_amount=portfolio_total(funds, settings.tax_rate),
        in_review_message=in_review_message(review.reason),
        in_review_information=review,
    )


ViewBuilder = Callable[[Application, DocumentSettings], ApplicationViewModel]

STATE_VIEWS: dict[ApplicationState, tuple[str, ViewBuilder]] = {
    ApplicationState.PENDING: (PENDING_TEMPLATE, build_pending_view),
    ApplicationState.ACTIVATED: (ACTIVATED_TEMPLATE, build_activated_view),
    ApplicationState.IN_REVIEW: (IN_REVIEW_TEMPLATE, build_in_review_view),
}

# --- Generator ---


class ApplicationDocumentGenerator:
    """
    Renders an application summary PDF.

    All collaborators are required and held for the generator's lifetime.
    The generator keeps no other state, so it is as thread-safe as they are.
    """

    def __init__(
        self,
        repo: ApplicationRepoPort,
        template_paths: TemplatePathPort,
        view_renderer: ViewRendererPort,
        settings: DocumentSettings,
        pdf_renderer: PdfRendererPort,
    ) -> None:
        """
        Initialize generator.

        Raises:
            ValueError: if any collaborator is None
        """
        collaborators = {
            "repo": repo,
            "template_paths": template_paths,
            "view_renderer": view_renderer,
            "settings": settings,
            "pdf_renderer": pdf_renderer,
        }
        for name, value in collaborators.items():
            if value is None:
                raise ValueError(f"{name} is required")

        self._repo = repo
        self._template_paths = template_paths
        self._view_renderer = view_renderer
        self._settings = settings
        self._pdf_renderer = pdf_renderer

    def generate(self, application_id: UUID, base_uri: str) -> bytes | None:
        """
        Generate the PDF summary for an application.

        Returns:
            PDF bytes, or None if the application does not exist or its
            state has no document.
        """
        application = self._repo.get_by_id(application_id)
        if application is None:
            log_not_found(application_id)
            return None

        return self.generate_for_application(application, base_uri)

    def generate_for_application(self, application: Application, base_uri: str) -> bytes | None:
        """Generate the PDF for an already fetched application."""
        html = self.render_html(application, base_uri)
        if html is None:
            return None

        pdf = self._pdf_renderer.render_from_html(html, DEFAULT_PDF_OPTIONS)
        return pdf.to_bytes()

    def render_html(self, application: Application, base_uri: str) -> str | None:
        """Render the state-specific markup, or None for an unsupported state."""
        view = STATE_VIEWS.get(application.state)
        if view is None:
            logger.warning(
                f"The application '{application.reference_number}' ({application.id}) "
                f"is in state '{application.state.value}' and no valid document "
                f"can be generated for it."
            )
            return None

        template_name, build = view
        model = build(application, self._settings)
        template_uri = join_template_uri(base_uri, self._template_paths.get(template_name))
        return self._view_renderer.render(template_uri, model)
