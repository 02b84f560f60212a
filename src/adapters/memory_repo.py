from collections.abc import Iterable
from uuid import UUID

from src.components.application_document.errors import DuplicateApplicationError
from src.domain.entities import Application


class InMemoryApplicationRepo:
    """
    Application repository backed by a list.

    Records are kept as added, duplicates included, so the single-match
    contract is enforced on read like a real store would.
    """

    def __init__(self, applications: Iterable[Application] = ()) -> None:
        self._applications: list[Application] = list(applications)

    def add(self, application: Application) -> None:
        self._applications.append(application)

    def get_by_id(self, application_id: UUID) -> Application | None:
        matches = [a for a in self._applications if a.id == application_id]
        if len(matches) > 1:
            raise DuplicateApplicationError(application_id, len(matches))
        return matches[0] if matches else None
