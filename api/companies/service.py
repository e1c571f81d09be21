"""
Company business logic.

Every operation returns either the shaped result or a `Failure`.
"""

from __future__ import annotations

import logging

from core import errors
from core.db import Database
from core.errors import Failure

from . import repository, schemas

NO_SUCH_COMPANY = "No such company"
ALREADY_EXISTS = "Company already exists"

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str:
    return (value or "").strip()


def _to_company(row: dict) -> dict:
    return {
        "code": str(row["code"]),
        "name": str(row["name"]),
        "description": str(row["description"]),
    }


async def list_companies(db: Database) -> list[dict]:
    rows = await repository.list_companies(db)
    return [_to_company(row) for row in rows]


async def get_company(db: Database, code: str) -> dict | Failure:
    row = await repository.get_company(db, code)
    if row is None:
        return errors.not_found(NO_SUCH_COMPANY)
    return _to_company(row)


async def create_company(db: Database, payload: schemas.CompanyCreate) -> dict | Failure:
    code = _clean(payload.code)
    name = _clean(payload.name)
    description = _clean(payload.description)
    if not (code and name and description):
        return errors.bad_request()

    row = await repository.insert_company(db, code=code, name=name, description=description)
    if row is None:
        return errors.bad_request(ALREADY_EXISTS)

    logger.info("company_created code=%s", code)
    return _to_company(row)


async def update_company(db: Database, code: str, payload: schemas.CompanyUpdate) -> dict | Failure:
    name = _clean(payload.name)
    description = _clean(payload.description)
    if not (name and description):
        return errors.bad_request()

    row = await repository.update_company(db, code, name=name, description=description)
    if row is None:
        return errors.not_found(NO_SUCH_COMPANY)

    logger.info("company_updated code=%s", code)
    return _to_company(row)


async def delete_company(db: Database, code: str) -> dict | Failure:
    if not await repository.delete_company(db, code):
        return errors.not_found(NO_SUCH_COMPANY)

    logger.info("company_deleted code=%s", code)
    return {"status": "deleted"}
