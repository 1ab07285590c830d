"""Bill Domain Entity

The generated charge document for one customer over one period.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    Numeric,
    String,
    UniqueConstraint,
)
from src.domain.base import BaseModel, IdType


class BillStatus(str, Enum):
    """Settlement status"""
    GENERATED = "GENERATED"
    SENT = "SENT"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"


class Bill(BaseModel, table=True):
    """
    Bill - Priced aggregate of a customer's deliveries over a period

    Domain Rules:
    - One bill per (customer_id, period_start, period_end)
    - invoice_number is globally unique and never changes once assigned
    - total_amount = round(total_liters * price_per_liter, 2) half-up
    - Status transitions: GENERATED -> SENT -> PARTIALLY_PAID / PAID;
      payments can move any state to PARTIALLY_PAID or PAID
    """

    __tablename__ = "bills"
    __table_args__ = (
        UniqueConstraint('customer_id', 'period_start', 'period_end', name='uq_bill_customer_period'),
        Index('ix_bills_period', 'period_start', 'period_end'),
        Index('ix_bills_status', 'status'),
        CheckConstraint('total_liters >= 0', name='bill_liters_non_negative'),
    )

    id: int = Field(
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique bill identifier (auto-increment)"
    )

    customer_id: int = Field(
        sa_column=Column(IdType, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Customer"
    )

    period_start: date = Field(
        sa_column=Column(Date, nullable=False),
        description="First day of the billing period (inclusive)"
    )

    period_end: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Last day of the billing period (inclusive)"
    )

    total_liters: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Sum of delivered liters in the period"
    )

    price_per_liter: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Rate applied at generation time"
    )

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Amount due, rounded to the cent"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique invoice number (e.g., INV-2024-01-001)"
    )

    status: BillStatus = Field(
        default=BillStatus.GENERATED,
        description="Settlement status"
    )

    whatsapp_message_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True, index=True),
        description="Message id returned by the messaging provider"
    )

    sent_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when the invoice was delivered to the customer"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Bill creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "customer_id": 1,
                "period_start": "2024-01-01",
                "period_end": "2024-01-31",
                "total_liters": "45.50",
                "price_per_liter": "60.00",
                "total_amount": "2730.00",
                "invoice_number": "INV-2024-01-001",
                "status": "GENERATED",
            }
        }


def status_after_payments(
    total_paid: Decimal, total_amount: Decimal, current: BillStatus
) -> BillStatus:
    """
    Derive the settlement status from the amount paid so far.

    With no payments the bill keeps SENT if it was delivered, otherwise it is
    GENERATED. Overpayment is still PAID.
    """
    if total_paid <= 0:
        return BillStatus.SENT if current == BillStatus.SENT else BillStatus.GENERATED
    if total_paid >= total_amount:
        return BillStatus.PAID
    return BillStatus.PARTIALLY_PAID
