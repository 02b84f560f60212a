import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from src.adapters.render.jinja_renderer import JinjaViewRenderer
from src.adapters.render.weasyprint_renderer import WeasyPrintPdfRenderer
from src.adapters.sqlite.repos import SQLiteApplicationRepo
from src.adapters.templates.path_provider import RulesTemplatePathProvider
from src.components.application_document import ApplicationDocumentGenerator
from src.rules.loader import load_rules
from src.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("APPDOC_DATA_DIR", "./data"))
        self.rules_path = Path(os.environ.get("APPDOC_RULES_PATH", str(self.base_dir / "rules.yaml")))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


def get_db_path(rules: Rules = Depends(get_rules)) -> str:
    return str(get_settings().data_dir / rules.storage.db_filename)


# --- Repos ---
def get_application_repo(db_path: str = Depends(get_db_path)) -> SQLiteApplicationRepo:
    return SQLiteApplicationRepo(db_path)


# --- Renderers ---
@lru_cache
def get_view_renderer() -> JinjaViewRenderer:
    return JinjaViewRenderer()


def get_pdf_renderer(rules: Rules = Depends(get_rules)) -> WeasyPrintPdfRenderer:
    return WeasyPrintPdfRenderer(base_url=rules.templates.base_uri)


# --- Components ---
def get_document_generator(
    repo: SQLiteApplicationRepo = Depends(get_application_repo),
    rules: Rules = Depends(get_rules),
    view_renderer: JinjaViewRenderer = Depends(get_view_renderer),
    pdf_renderer: WeasyPrintPdfRenderer = Depends(get_pdf_renderer),
) -> ApplicationDocumentGenerator:
    return ApplicationDocumentGenerator(
        repo=repo,
        template_paths=RulesTemplatePathProvider(rules.templates),
        view_renderer=view_renderer,
        settings=rules.documents,
        pdf_renderer=pdf_renderer,
    )


def get_base_uri(rules: Rules = Depends(get_rules)) -> str:
    return rules.templates.base_uri
