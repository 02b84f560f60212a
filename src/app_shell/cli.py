import argparse
import logging
import os
import sys
from pathlib import Path
from uuid import UUID

from src.adapters.render.jinja_renderer import JinjaViewRenderer
from src.adapters.render.weasyprint_renderer import WeasyPrintPdfRenderer
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteApplicationRepo
from src.adapters.templates.path_provider import RulesTemplatePathProvider
from src.components.application_document import ApplicationDocumentGenerator
from src.rules.loader import load_rules
from src.rules.models import Rules

logger = logging.getLogger("cli")

RULES_PATH = os.environ.get("APPDOC_RULES_PATH", "rules.yaml")
DATA_DIR = os.environ.get("APPDOC_DATA_DIR", "./data")


def get_rules(rules_path: str) -> Rules:
    if not Path(rules_path).exists():
        logger.error(f"Rules file {rules_path} not found.")
        sys.exit(1)
    return load_rules(Path(rules_path))


def db_path_for(rules: Rules, data_dir: str) -> str:
    return str(Path(data_dir) / rules.storage.db_filename)


def build_generator(rules: Rules, data_dir: str) -> ApplicationDocumentGenerator:
    return ApplicationDocumentGenerator(
        repo=SQLiteApplicationRepo(db_path_for(rules, data_dir)),
        template_paths=RulesTemplatePathProvider(rules.templates),
        view_renderer=JinjaViewRenderer(),
        settings=rules.documents,
        pdf_renderer=WeasyPrintPdfRenderer(base_url=rules.templates.base_uri),
    )


def handle_migrate(rules: Rules, args: argparse.Namespace) -> int:
    Path(args.data_dir).mkdir(parents=True, exist_ok=True)
    migrator = SQLiteMigrator(db_path_for(rules, args.data_dir), rules.storage.migrations_dir)
    applied = migrator.run_migrations()
    print(f"Applied {len(applied)} migrations.")
    return 0


def handle_generate(rules: Rules, args: argparse.Namespace) -> int:
    try:
        application_id = UUID(args.application_id)
    except ValueError:
        logger.error(f"'{args.application_id}' is not a valid application id.")
        return 1

    generator = build_generator(rules, args.data_dir)
    base_uri = args.base_uri or rules.templates.base_uri
    pdf = generator.generate(application_id, base_uri)
    if pdf is None:
        logger.error(f"No document generated for application {application_id}.")
        return 1

    out = Path(args.out or f"{application_id}.pdf")
    out.write_bytes(pdf)
    print(f"Wrote {len(pdf)} bytes to {out}")
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    parser = argparse.ArgumentParser(description="Application document CLI")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    parser.add_argument("--data-dir", default=DATA_DIR, help="Directory holding the database")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply database migrations")

    # generate
    generate_parser = subparsers.add_parser("generate", help="Render an application PDF")
    generate_parser.add_argument("application_id", help="Application UUID")
    generate_parser.add_argument("--base-uri", help="Base URI for template paths")
    generate_parser.add_argument("--out", help="Output file (default: <id>.pdf)")

    args = parser.parse_args(argv)
    rules = get_rules(args.rules)

    if args.command == "migrate":
        return handle_migrate(rules, args)
    return handle_generate(rules, args)


if __name__ == "__main__":
    sys.exit(main())
