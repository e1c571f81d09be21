"""
Company request bodies.

Fields are optional at the schema level so that a missing field is reported
by the service as "Missing required data" (400) rather than as a framework
validation error.
"""

from __future__ import annotations

from pydantic import BaseModel


class CompanyCreate(BaseModel):
    code: str | None = None
    name: str | None = None
    description: str | None = None


class CompanyUpdate(BaseModel):
    # `code` is immutable; if a client sends it, it is dropped here.
    name: str | None = None
    description: str | None = None
