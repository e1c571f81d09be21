"""
Invoice persistence (raw SQL).

Paid-state rules live in the SQL so each write stays a single statement:
- becoming paid sets paid_date (given value, else today)
- staying paid keeps paid_date unless a new one is given
- becoming unpaid clears paid_date
"""

from __future__ import annotations

from datetime import date

from core.db import Database, affected_rows

INVOICE_COLUMNS = "id, comp_code, amt, paid, add_date, paid_date"


async def list_invoices(db: Database) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, comp_code
        FROM invoices
        """
    )


async def get_invoice_with_company(db: Database, invoice_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT i.id, i.comp_code, i.amt, i.paid, i.add_date, i.paid_date,
               c.code AS company_code,
               c.name AS company_name,
               c.description AS company_description
        FROM invoices AS i
        JOIN companies AS c ON c.code = i.comp_code
        WHERE i.id = $1
        """,
        invoice_id,
    )


async def insert_invoice(
    db: Database,
    *,
    comp_code: str,
    amt: float,
    paid: bool,
    add_date: date | None = None,
    paid_date: date | None = None,
) -> dict | None:
    """
    Insert an invoice. Returns None when `comp_code` matches no company.
    """
    return await db.fetch_one(
        f"""
        INSERT INTO invoices (comp_code, amt, paid, add_date, paid_date)
        SELECT c.code,
               $2::float8,
               $3::boolean,
               COALESCE($4::date, CURRENT_DATE),
               CASE WHEN $3::boolean THEN COALESCE($5::date, CURRENT_DATE) END
        FROM companies AS c
        WHERE c.code = $1
        RETURNING {INVOICE_COLUMNS}
        """,
        comp_code,
        amt,
        paid,
        add_date,
        paid_date,
    )


async def update_invoice(
    db: Database,
    invoice_id: int,
    *,
    amt: float | None = None,
    paid: bool | None = None,
    paid_date: date | None = None,
) -> dict | None:
    """
    Apply a partial update; None arguments leave the column as is.
    Returns None when no invoice has `invoice_id`.
    """
    return await db.fetch_one(
        f"""
        UPDATE invoices
        SET amt = COALESCE($2::float8, amt),
            paid = COALESCE($3::boolean, paid),
            paid_date = CASE
                WHEN $3::boolean IS NULL THEN
                    CASE WHEN paid THEN COALESCE($4::date, paid_date) END
                WHEN $3::boolean THEN
                    COALESCE($4::date, CASE WHEN paid THEN paid_date END, CURRENT_DATE)
                ELSE NULL
            END
        WHERE id = $1
        RETURNING {INVOICE_COLUMNS}
        """,
        invoice_id,
        amt,
        paid,
        paid_date,
    )


async def delete_invoice(db: Database, invoice_id: int) -> bool:
    status = await db.execute(
        """
        DELETE FROM invoices
        WHERE id = $1
        """,
        invoice_id,
    )
    return affected_rows(status) > 0
