"""
Company persistence (raw SQL).
"""

from __future__ import annotations

from core.db import Database, affected_rows


async def list_companies(db: Database) -> list[dict]:
    # No ORDER BY: list order is whatever the database returns.
    return await db.fetch_all(
        """
        SELECT code, name, description
        FROM companies
        """
    )


async def get_company(db: Database, code: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT code, name, description
        FROM companies
        WHERE code = $1
        """,
        code,
    )


async def insert_company(db: Database, *, code: str, name: str, description: str) -> dict | None:
    """
    Insert a company. Returns None when `code` is already taken.
    """
    return await db.fetch_one(
        """
        INSERT INTO companies (code, name, description)
        VALUES ($1, $2, $3)
        ON CONFLICT (code) DO NOTHING
        RETURNING code, name, description
        """,
        code,
        name,
        description,
    )


async def update_company(db: Database, code: str, *, name: str, description: str) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE companies
        SET name = $2,
            description = $3
        WHERE code = $1
        RETURNING code, name, description
        """,
        code,
        name,
        description,
    )


async def delete_company(db: Database, code: str) -> bool:
    # Dependent invoices go with it (ON DELETE CASCADE).
    status = await db.execute(
        """
        DELETE FROM companies
        WHERE code = $1
        """,
        code,
    )
    return affected_rows(status) > 0
