"""
Company API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from core.db import Database, get_db
from core.errors import respond

from . import schemas, service

router = APIRouter()


@router.get("/companies")
async def list_companies(db: Database = Depends(get_db)) -> JSONResponse:
    """
    Return '{companies: [{code, name, description}, ...]}'.
    """
    companies = await service.list_companies(db)
    return respond(companies, "companies")


@router.get("/companies/{code}")
async def get_company(code: str, db: Database = Depends(get_db)) -> JSONResponse:
    return respond(await service.get_company(db, code), "company")


@router.post("/companies")
async def create_company(
    payload: schemas.CompanyCreate,
    db: Database = Depends(get_db),
) -> JSONResponse:
    result = await service.create_company(db, payload)
    return respond(result, "company", status_code=status.HTTP_201_CREATED)


@router.put("/companies/{code}")
async def update_company(
    code: str,
    payload: schemas.CompanyUpdate,
    db: Database = Depends(get_db),
) -> JSONResponse:
    return respond(await service.update_company(db, code, payload), "company")


@router.delete("/companies/{code}")
async def delete_company(code: str, db: Database = Depends(get_db)) -> JSONResponse:
    return respond(await service.delete_company(db, code))
