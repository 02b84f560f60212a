"""
Application document input/output models.

View models are flat, frozen projections of an application built in a single
step for template rendering. PDF options are fixed and shared by every
document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from src.domain.entities import Fund, LegalEntity, Review

# --- PDF Options ---


class PageNumbers(str, Enum):
    """Page numbering style."""

    NONE = "none"
    NUMERIC = "numeric"


class HeaderRepeat(str, Enum):
    """Which pages carry the document header."""

    FIRST_PAGE_ONLY = "first_page_only"
    ALL_PAGES = "all_pages"


PDF_HEADER_HTML = (
    '<div class="document-header">'
    '<span class="document-header__brand">Client Services</span>'
    '<span class="document-header__title">Application Summary</span>'
    "</div>"
)


@dataclass(frozen=True)
class HeaderOptions:
    repeat: HeaderRepeat = HeaderRepeat.FIRST_PAGE_ONLY
    html: str = PDF_HEADER_HTML


@dataclass(frozen=True)
class PdfOptions:
    """Layout options handed to the PDF renderer."""

    page_numbers: PageNumbers = PageNumbers.NUMERIC
    header: HeaderOptions = field(default_factory=HeaderOptions)


DEFAULT_PDF_OPTIONS = PdfOptions()

# --- View Models ---


@dataclass(frozen=True)
class PendingApplicationViewModel:
    reference_number: str
    state: str
    full_name: str
    applied_on: datetime
    support_email: str
    signature: str


@dataclass(frozen=True)
class ActivatedApplicationViewModel:
    reference_number: str
    state: str
    full_name: str
    applied_on: datetime
    support_email: str
    signature: str
    legal_entity: LegalEntity | None
    portfolio_funds: tuple[Fund, ...]
    portfolio_total_amount: Decimal


@dataclass(frozen=True)
class InReviewApplicationViewModel:
    reference_number: str
    state: str
    full_name: str
    applied_on: datetime
    support_email: str
    signature: str
    legal_entity: LegalEntity | None
    portfolio_funds: tuple[Fund, ...]
    portfolio_total_amount: Decimal
    in_review_message: str
    in_review_information: Review


ApplicationViewModel = (
    PendingApplicationViewModel | ActivatedApplicationViewModel | InReviewApplicationViewModel
)

# --- Component Input/Output ---


@dataclass(frozen=True)
class DocumentValidationError:
    """Reason a document was not produced."""

    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class GenerateDocumentInput:
    application_id: UUID
    base_uri: str


@dataclass(frozen=True)
class GenerateDocumentOutput:
    pdf: bytes | None
    errors: list[DocumentValidationError] = field(default_factory=list)
    success: bool = True
