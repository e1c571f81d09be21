"""
Invoice business logic.

Scope:
- input validation (required fields, positive amount, paid/paid_date pairing)
- shaping rows into the response objects
- mapping missing rows to `Failure` values

Duplicate submissions are not detected: an invoice has no business key, so
each create produces a new row with a fresh id.
"""

from __future__ import annotations

import logging

import asyncpg

from core import errors
from core.db import Database
from core.errors import Failure

from . import repository, schemas

NO_SUCH_INVOICE = "No such invoice"
NO_SUCH_COMPANY = "No such company"
AMOUNT_NOT_POSITIVE = "Amount must be positive"
PAID_DATE_REQUIRES_PAID = "paid_date requires paid=true"

# invoices.id is a Postgres SERIAL (int4).
MAX_INVOICE_ID = 2_147_483_647

logger = logging.getLogger(__name__)


def _is_storable_id(invoice_id: int) -> bool:
    return 1 <= invoice_id <= MAX_INVOICE_ID


def _to_invoice(row: dict) -> dict:
    return {
        "id": int(row["id"]),
        "comp_code": str(row["comp_code"]),
        "amt": float(row["amt"]),
        "paid": bool(row["paid"]),
        "add_date": row["add_date"],
        "paid_date": row["paid_date"],
    }


def _to_invoice_detail(row: dict) -> dict:
    invoice = _to_invoice(row)
    invoice["company"] = {
        "code": str(row["company_code"]),
        "name": str(row["company_name"]),
        "description": str(row["company_description"]),
    }
    return invoice


async def list_invoices(db: Database) -> list[dict]:
    rows = await repository.list_invoices(db)
    return [{"id": int(row["id"]), "comp_code": str(row["comp_code"])} for row in rows]


async def get_invoice(db: Database, invoice_id: int) -> dict | Failure:
    if not _is_storable_id(invoice_id):
        return errors.not_found(NO_SUCH_INVOICE)

    row = await repository.get_invoice_with_company(db, invoice_id)
    if row is None:
        return errors.not_found(NO_SUCH_INVOICE)
    return _to_invoice_detail(row)


async def create_invoice(db: Database, payload: schemas.InvoiceCreate) -> dict | Failure:
    comp_code = (payload.comp_code or "").strip()
    if not comp_code or payload.amt is None:
        return errors.bad_request()
    if payload.amt <= 0:
        return errors.bad_request(AMOUNT_NOT_POSITIVE)

    paid = bool(payload.paid)
    if payload.paid_date is not None and not paid:
        return errors.bad_request(PAID_DATE_REQUIRES_PAID)

    try:
        row = await repository.insert_invoice(
            db,
            comp_code=comp_code,
            amt=payload.amt,
            paid=paid,
            add_date=payload.add_date,
            paid_date=payload.paid_date,
        )
    except asyncpg.ForeignKeyViolationError:
        # Company deleted between the lookup and the insert.
        row = None

    if row is None:
        return errors.bad_request(NO_SUCH_COMPANY)

    invoice = _to_invoice(row)
    logger.info("invoice_created id=%s comp_code=%s", invoice["id"], comp_code)
    return invoice


async def update_invoice(
    db: Database,
    invoice_id: int,
    payload: schemas.InvoiceUpdate,
) -> dict | Failure:
    if payload.is_empty():
        return errors.bad_request()
    if payload.amt is not None and payload.amt <= 0:
        return errors.bad_request(AMOUNT_NOT_POSITIVE)
    if payload.paid is False and payload.paid_date is not None:
        return errors.bad_request(PAID_DATE_REQUIRES_PAID)

    if not _is_storable_id(invoice_id):
        return errors.not_found(NO_SUCH_INVOICE)

    row = await repository.update_invoice(
        db,
        invoice_id,
        amt=payload.amt,
        paid=payload.paid,
        paid_date=payload.paid_date,
    )
    if row is None:
        return errors.not_found(NO_SUCH_INVOICE)

    invoice = _to_invoice(row)
    logger.info("invoice_updated id=%s paid=%s", invoice["id"], invoice["paid"])
    return invoice


async def delete_invoice(db: Database, invoice_id: int) -> dict | Failure:
    if not _is_storable_id(invoice_id) or not await repository.delete_invoice(db, invoice_id):
        return errors.not_found(NO_SUCH_INVOICE)

    logger.info("invoice_deleted id=%s", invoice_id)
    return {"status": "deleted"}
