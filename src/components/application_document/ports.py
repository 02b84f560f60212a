"""
Application document port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol
from uuid import UUID

from src.domain.entities import Application

from .models import PdfOptions


class ApplicationRepoPort(Protocol):
    """Port for fetching a single application."""

    def get_by_id(self, application_id: UUID) -> Application | None:
        """
        Get application by ID, or None if no application matches.

        Raises DuplicateApplicationError if more than one matches.
        """
        ...


class TemplatePathPort(Protocol):
    """Port for resolving logical template names."""

    def get(self, name: str) -> str:
        """Get the path fragment for a logical template name."""
        ...


class ViewRendererPort(Protocol):
    """Port for rendering a template to markup."""

    def render(self, template_uri: str, model: Any) -> str:
        """Render the template at template_uri with the given view model."""
        ...


class PdfArtifact(Protocol):
    def to_bytes(self) -> bytes:
        ...


class PdfRendererPort(Protocol):
    """Port for converting markup to PDF."""

    def render_from_html(self, html: str, options: PdfOptions) -> PdfArtifact:
        """Render HTML markup to a PDF artifact."""
        ...
