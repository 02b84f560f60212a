from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

# --- Enums ---


class ApplicationState(str, Enum):
    """Lifecycle state of an application."""

    PENDING = "pending"
    ACTIVATED = "activated"
    IN_REVIEW = "in_review"
    CLOSED = "closed"
    DECLINED = "declined"

    @property
    def description(self) -> str:
        """Human-readable label used on rendered documents."""
        return _STATE_DESCRIPTIONS[self]


_STATE_DESCRIPTIONS = {
    ApplicationState.PENDING: "Pending",
    ApplicationState.ACTIVATED: "Activated",
    ApplicationState.IN_REVIEW: "In Review",
    ApplicationState.CLOSED: "Closed",
    ApplicationState.DECLINED: "Declined",
}

# --- Applicant ---

class Person(BaseModel):
    model_config = ConfigDict(frozen=True)

    first_name: str
    surname: str


class LegalEntity(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    registration_number: str
    vat_number: str | None = None

# --- Portfolio ---

class Fund(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str
    amount: Decimal
    fees: Decimal = Decimal("0")


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str
    funds: list[Fund] = Field(default_factory=list)

# --- Review ---

class Review(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    reason: str
    opened_at: datetime = Field(default_factory=datetime.utcnow)
    reviewer: str | None = None

# --- Application ---

class Application(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    reference_number: str
    state: ApplicationState
    person: Person
    date: datetime
    is_legal_entity: bool = False
    legal_entity: LegalEntity | None = None
    products: list[Product] = Field(default_factory=list)
    current_review: Review | None = None  # only meaningful while in review
