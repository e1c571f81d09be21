"""
Invoice request bodies.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator


class _AmountBody(BaseModel):
    amt: float | None = Field(default=None, allow_inf_nan=False)

    @field_validator("amt", mode="before")
    @classmethod
    def _amt_must_be_json_number(cls, value: Any) -> Any:
        # Lax float parsing would turn true into 1.0 and "12" into 12.0.
        if isinstance(value, (bool, str)):
            raise ValueError("amt must be a number")
        return value


class InvoiceCreate(_AmountBody):
    comp_code: str | None = None
    paid: bool | None = None
    # Server fills add_date with today when absent or null.
    add_date: date | None = None
    paid_date: date | None = None


class InvoiceUpdate(_AmountBody):
    paid: bool | None = None
    paid_date: date | None = None

    def is_empty(self) -> bool:
        return self.amt is None and self.paid is None and self.paid_date is None
