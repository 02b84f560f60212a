"""
Application document component - PDF summaries of applications by lifecycle state.
"""

from ._impl import (
    ApplicationDocumentGenerator,
    build_activated_view,
    build_in_review_view,
    build_pending_view,
    in_review_message,
    join_template_uri,
)
from ._portfolio import flatten_funds, portfolio_total
from .component import run_generate, supported_states
from .errors import (
    DocumentError,
    DuplicateApplicationError,
    MissingReviewError,
    UnknownTemplateError,
)
from .models import (
    DEFAULT_PDF_OPTIONS,
    PDF_HEADER_HTML,
    ActivatedApplicationViewModel,
    DocumentValidationError,
    GenerateDocumentInput,
    GenerateDocumentOutput,
    HeaderOptions,
    HeaderRepeat,
    InReviewApplicationViewModel,
    PageNumbers,
    PdfOptions,
    PendingApplicationViewModel,
)
from .ports import (
    ApplicationRepoPort,
    PdfArtifact,
    PdfRendererPort,
    TemplatePathPort,
    ViewRendererPort,
)

__all__ = [
    # Entry points
    "run_generate",
    "supported_states",
    "ApplicationDocumentGenerator",
    # Builders
    "build_pending_view",
    "build_activated_view",
    "build_in_review_view",
    "in_review_message",
    "join_template_uri",
    "flatten_funds",
    "portfolio_total",
    # Models
    "PendingApplicationViewModel",
    "ActivatedApplicationViewModel",
    "InReviewApplicationViewModel",
    "GenerateDocumentInput",
    "GenerateDocumentOutput",
    "DocumentValidationError",
    "PdfOptions",
    "HeaderOptions",
    "HeaderRepeat",
    "PageNumbers",
    "DEFAULT_PDF_OPTIONS",
    "PDF_HEADER_HTML",
    # Errors
    "DocumentError",
    "DuplicateApplicationError",
    "MissingReviewError",
    "UnknownTemplateError",
    # Ports
    "ApplicationRepoPort",
    "TemplatePathPort",
    "ViewRendererPort",
    "PdfRendererPort",
    "PdfArtifact",
]
