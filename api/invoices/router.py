"""
Invoice API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from core.db import Database, get_db
from core.errors import respond

from . import schemas, service

router = APIRouter()


@router.get("/invoices")
async def list_invoices(db: Database = Depends(get_db)) -> JSONResponse:
    """
    Return '{invoices: [{id, comp_code}, ...]}'.

    Amount and paid state are left out; use GET /invoices/{id} for those.
    """
    invoices = await service.list_invoices(db)
    return respond(invoices, "invoices")


@router.get("/invoices/{invoice_id}")
async def get_invoice(invoice_id: int, db: Database = Depends(get_db)) -> JSONResponse:
    """
    Return '{invoice: {id, comp_code, amt, paid, add_date, paid_date,
    company: {code, name, description}}}'.
    """
    return respond(await service.get_invoice(db, invoice_id), "invoice")


@router.post("/invoices")
async def create_invoice(
    payload: schemas.InvoiceCreate,
    db: Database = Depends(get_db),
) -> JSONResponse:
    result = await service.create_invoice(db, payload)
    return respond(result, "invoice", status_code=status.HTTP_201_CREATED)


@router.put("/invoices/{invoice_id}")
async def update_invoice(
    invoice_id: int,
    payload: schemas.InvoiceUpdate,
    db: Database = Depends(get_db),
) -> JSONResponse:
    return respond(await service.update_invoice(db, invoice_id, payload), "invoice")


@router.delete("/invoices/{invoice_id}")
async def delete_invoice(invoice_id: int, db: Database = Depends(get_db)) -> JSONResponse:
    return respond(await service.delete_invoice(db, invoice_id))
