"""
Rules loading and validation tests.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest
import yaml
from pydantic import ValidationError

from src.rules.loader import load_document_settings, load_rules

PROJECT_ROOT = Path(__file__).parent.parent.parent


def valid_rules() -> dict[str, Any]:
    return {
        "project": {"slug": "test", "rules_version": "1.0"},
        "documents": {
            "support_email": "support@example.com",
            "signature": "Regards",
            "tax_rate": "0.15",
        },
        "templates": {
            "base_uri": "./",
            "paths": {"PendingApplication": "templates/pending_application.html"},
        },
    }


def write_rules(tmp_path: Path, data: Any) -> Path:
    path = tmp_path / "rules.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


class TestLoadRules:
    def test_project_rules_file_is_valid(self) -> None:
        rules = load_rules(PROJECT_ROOT / "rules.yaml")

        assert rules.documents.tax_rate == Decimal("0.15")
        assert set(rules.templates.paths) == {
            "PendingApplication",
            "ActivatedApplication",
            "InReviewApplication",
        }

    def test_project_templates_exist(self) -> None:
        rules = load_rules(PROJECT_ROOT / "rules.yaml")

        for path in rules.templates.paths.values():
            assert (PROJECT_ROOT / path).is_file(), path

    def test_loads_valid_file(self, tmp_path: Path) -> None:
        rules = load_rules(write_rules(tmp_path, valid_rules()))

        assert rules.documents.support_email == "support@example.com"
        assert rules.documents.tax_rate == Decimal("0.15")
        assert rules.storage.db_filename == "applications.db"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_rules(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("documents: [unclosed")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_rules(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="mapping"):
            load_rules(write_rules(tmp_path, ["a", "b"]))

    def test_missing_section(self, tmp_path: Path) -> None:
        data = valid_rules()
        del data["documents"]

        with pytest.raises(ValueError, match="validation failed"):
            load_rules(write_rules(tmp_path, data))

    def test_negative_tax_rate_rejected(self, tmp_path: Path) -> None:
        data = valid_rules()
        data["documents"]["tax_rate"] = "-0.1"

        with pytest.raises(ValueError, match="validation failed"):
            load_rules(write_rules(tmp_path, data))

    def test_bad_support_email_rejected(self, tmp_path: Path) -> None:
        data = valid_rules()
        data["documents"]["support_email"] = "not-an-email"

        with pytest.raises(ValueError, match="validation failed"):
            load_rules(write_rules(tmp_path, data))

    def test_markdown_fenced_block(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.md"
        path.write_text("# Rules\n\nSome prose.\n\n```yaml\n" + yaml.safe_dump(valid_rules()) + "```\n")

        rules = load_rules(path)

        assert rules.project.slug == "test"


class TestDocumentSettings:
    def test_settings_are_immutable(self, tmp_path: Path) -> None:
        settings = load_document_settings(write_rules(tmp_path, valid_rules()))

        with pytest.raises(ValidationError):
            settings.tax_rate = Decimal("1")  # type: ignore[misc]
