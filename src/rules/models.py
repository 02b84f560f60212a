from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class DocumentSettings(BaseModel):
    """Static values printed on every generated document."""

    model_config = ConfigDict(frozen=True)

    support_email: str
    signature: str
    tax_rate: Decimal = Field(ge=0)

    @field_validator("support_email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("support_email must be an email address")
        return value


class TemplateRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_uri: str = "."
    paths: dict[str, str]


class StorageRules(BaseModel):
    db_filename: str = "applications.db"
    migrations_dir: str = "migrations"


class Rules(BaseModel):
    project: ProjectRules
    documents: DocumentSettings
    templates: TemplateRules
    storage: StorageRules = Field(default_factory=StorageRules)
