"""Request schemas for Billing API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class PeriodRequestSchema(BaseModel):
    period_start: date = Field(..., description="First day of the period (inclusive)")
    period_end: date = Field(..., description="Last day of the period (inclusive)")

    @model_validator(mode="after")
    def validate_period(self):
        if self.period_end < self.period_start:
            raise ValueError("period_end must not be before period_start")
        return self


class GenerateBillsRequestSchema(PeriodRequestSchema):
    """
    Request schema for generating bills

    Used for POST /billing/bills/generate endpoint.
    """

    customer_id: Optional[int] = Field(
        default=None,
        description="Bill a single customer (defaults to all active customers)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "period_start": "2024-01-01",
                "period_end": "2024-01-31"
            }
        }


class SendAllBillsRequestSchema(PeriodRequestSchema):
    """Used for POST /billing/bills/send-all endpoint."""


class RecordPaymentRequestSchema(BaseModel):
    """
    Request schema for recording a payment

    Used for POST /billing/bills/{bill_id}/payments endpoint.
    """

    amount_paid: Decimal = Field(
        ...,
        description="Amount received (must be > 0)"
    )

    paid_on: Optional[date] = Field(
        default=None,
        description="Payment date (defaults to today)"
    )

    note: Optional[str] = Field(
        default=None,
        max_length=500,
        description="Optional note, e.g. 'Cash' or 'UPI'"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "amount_paid": "400.00",
                "paid_on": "2024-02-05",
                "note": "Cash"
            }
        }


class ManualBillRequestSchema(PeriodRequestSchema):
    """Used for POST /billing/bills/manual endpoint."""

    customer_id: int
    total_liters: Decimal = Field(..., gt=0)
    price_per_liter: Decimal = Field(..., gt=0)
    notes: Optional[str] = Field(default=None, max_length=500)
