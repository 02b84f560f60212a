"""
Application document errors.

Only domain failures live here. Missing applications and unsupported states
are not errors: the generator logs them and returns None.
"""

from __future__ import annotations

from uuid import UUID


class DocumentError(Exception):
    """Base class for application document failures."""


class DuplicateApplicationError(DocumentError):
    """More than one application matched a single identifier."""

    def __init__(self, application_id: UUID, count: int) -> None:
        self.application_id = application_id
        self.count = count
        super().__init__(f"Expected one application for id '{application_id}', found {count}")


class UnknownTemplateError(DocumentError):
    """A logical template name has no configured path."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No template path configured for '{name}'")


class MissingReviewError(DocumentError):
    """An in-review application carries no current review record."""

    def __init__(self, application_id: UUID) -> None:
        self.application_id = application_id
        super().__init__(f"Application '{application_id}' is in review but has no current review")
