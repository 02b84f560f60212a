import sqlite3
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from src.components.application_document.errors import DuplicateApplicationError
from src.domain.entities import (
    Application,
    ApplicationState,
    Fund,
    LegalEntity,
    Person,
    Product,
    Review,
)


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLiteApplicationRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def get_by_id(self, application_id: UUID) -> Application | None:
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT * FROM applications WHERE id = ?", (str(application_id),)
            ).fetchall()
            if not rows:
                return None
            if len(rows) > 1:
                raise DuplicateApplicationError(application_id, len(rows))

            products = self._load_products(conn, application_id)
            review = self._load_current_review(conn, application_id)
            return self._row_to_application(rows[0], products, review)
        finally:
            conn.close()

    def _load_products(self, conn: sqlite3.Connection, application_id: UUID) -> list[Product]:
        product_rows = conn.execute(
            "SELECT * FROM products WHERE application_id = ? ORDER BY position",
            (str(application_id),),
        ).fetchall()

        products = []
        for p in product_rows:
            fund_rows = conn.execute(
                "SELECT * FROM funds WHERE product_id = ? ORDER BY position", (p["id"],)
            ).fetchall()
            funds = [
                Fund(
                    id=UUID(f["id"]),
                    name=f["name"],
                    amount=Decimal(f["amount"]),
                    fees=Decimal(f["fees"]),
                )
                for f in fund_rows
            ]
            products.append(Product(id=UUID(p["id"]), name=p["name"], funds=funds))
        return products

    def _load_current_review(
        self, conn: sqlite3.Connection, application_id: UUID
    ) -> Review | None:
        row = conn.execute(
            "SELECT * FROM reviews WHERE application_id = ? AND is_current = 1 "
            "ORDER BY opened_at DESC LIMIT 1",
            (str(application_id),),
        ).fetchone()
        if row is None:
            return None
        return Review(
            id=UUID(row["id"]),
            reason=row["reason"],
            opened_at=datetime.fromisoformat(row["opened_at"]),
            reviewer=row["reviewer"],
        )

    def _row_to_application(
        self, row: dict[str, Any], products: list[Product], review: Review | None
    ) -> Application:
        legal_entity = None
        if row["legal_entity_name"] is not None:
            legal_entity = LegalEntity(
                name=row["legal_entity_name"],
                registration_number=row["legal_entity_registration_number"],
                vat_number=row["legal_entity_vat_number"],
            )

        return Application(
            id=UUID(row["id"]),
            reference_number=row["reference_number"],
            state=ApplicationState(row["state"]),
            person=Person(first_name=row["first_name"], surname=row["surname"]),
            date=datetime.fromisoformat(row["applied_on"]),
            is_legal_entity=bool(row["is_legal_entity"]),
            legal_entity=legal_entity,
            products=products,
            current_review=review,
        )

    def save(self, application: Application) -> Application:
        """Replace the stored aggregate for this application id."""
        app_id = str(application.id)
        conn = self._get_conn()
        try:
            # 1. Clear existing aggregate
            conn.execute(
                "DELETE FROM funds WHERE product_id IN "
                "(SELECT id FROM products WHERE application_id = ?)",
                (app_id,),
            )
            conn.execute("DELETE FROM products WHERE application_id = ?", (app_id,))
            conn.execute("DELETE FROM reviews WHERE application_id = ?", (app_id,))
            conn.execute("DELETE FROM applications WHERE id = ?", (app_id,))

            # 2. Application row
            entity = application.legal_entity
            conn.execute(
                """
                INSERT INTO applications (
                    id, reference_number, state, first_name, surname, applied_on,
                    is_legal_entity, legal_entity_name,
                    legal_entity_registration_number, legal_entity_vat_number
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
                (
                    app_id,
                    application.reference_number,
                    application.state.value,
                    application.person.first_name,
                    application.person.surname,
                    application.date.isoformat(),
                    1 if application.is_legal_entity else 0,
                    entity.name if entity else None,
                    entity.registration_number if entity else None,
                    entity.vat_number if entity else None,
                ),
            )

            # 3. Products and funds, keeping order
            for p_pos, product in enumerate(application.products):
                conn.execute(
                    "INSERT INTO products (id, application_id, name, position) "
                    "VALUES (?, ?, ?, ?)",
                    (str(product.id), app_id, product.name, p_pos),
                )
                for f_pos, fund in enumerate(product.funds):
                    conn.execute(
                        "INSERT INTO funds (id, product_id, name, amount, fees, position) "
                        "VALUES (?, ?, ?, ?, ?, ?)",
                        (
                            str(fund.id),
                            str(product.id),
                            fund.name,
                            str(fund.amount),
                            str(fund.fees),
                            f_pos,
                        ),
                    )

            # 4. Current review
            review = application.current_review
            if review is not None:
                conn.execute(
                    "INSERT INTO reviews (id, application_id, reason, opened_at, reviewer) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (
                        str(review.id),
                        app_id,
                        review.reason,
                        review.opened_at.isoformat(),
                        review.reviewer,
                    ),
                )

            conn.commit()
            return application
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
