import os
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path

# Add root to pythonpath
sys.path.append(os.getcwd())

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteApplicationRepo
from src.domain.entities import (
    Application,
    ApplicationState,
    Fund,
    LegalEntity,
    Person,
    Product,
    Review,
)
from src.rules.loader import load_rules


def sample_applications() -> list[Application]:
    products = [
        Product(
            name="Retirement Annuity",
            funds=[
                Fund(name="Balanced Growth", amount=Decimal("12000.00"), fees=Decimal("180.00")),
                Fund(name="Global Equity", amount=Decimal("8000.00"), fees=Decimal("96.00")),
            ],
        ),
        Product(
            name="Tax Free Savings",
            funds=[Fund(name="Money Market", amount=Decimal("3500.00"), fees=Decimal("12.50"))],
        ),
    ]
    return [
        Application(
            reference_number="APP-0001",
            state=ApplicationState.PENDING,
            person=Person(first_name="Thandi", surname="Nkosi"),
            date=datetime(2024, 3, 1, 9, 30),
        ),
        Application(
            reference_number="APP-0002",
            state=ApplicationState.ACTIVATED,
            person=Person(first_name="Pieter", surname="van Wyk"),
            date=datetime(2024, 2, 14, 11, 0),
            is_legal_entity=True,
            legal_entity=LegalEntity(name="Van Wyk Holdings", registration_number="2019/123456/07"),
            products=products,
        ),
        Application(
            reference_number="APP-0003",
            state=ApplicationState.IN_REVIEW,
            person=Person(first_name="Aisha", surname="Patel"),
            date=datetime(2024, 1, 20, 15, 45),
            products=products[:1],
            current_review=Review(reason="Outstanding proof of address required"),
        ),
        Application(
            reference_number="APP-0004",
            state=ApplicationState.CLOSED,
            person=Person(first_name="Sipho", surname="Dlamini"),
            date=datetime(2023, 11, 2, 8, 15),
        ),
    ]


def seed():
    rules = load_rules(Path(os.environ.get("APPDOC_RULES_PATH", "rules.yaml")))
    data_dir = Path(os.environ.get("APPDOC_DATA_DIR", "./data"))
    data_dir.mkdir(parents=True, exist_ok=True)

    db_path = str(data_dir / rules.storage.db_filename)
    print(f"Seeding to {db_path}")

    SQLiteMigrator(db_path, rules.storage.migrations_dir).run_migrations()

    repo = SQLiteApplicationRepo(db_path)
    for application in sample_applications():
        repo.save(application)
        print(f"  {application.reference_number} [{application.state.value}] {application.id}")


if __name__ == "__main__":
    seed()
