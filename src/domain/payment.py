"""Payment Domain Entity

Append-only record of money received against a bill.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Date, ForeignKey, Numeric, String
from src.domain.base import BaseModel, IdType


class Payment(BaseModel, table=True):
    """
    Payment - Money received against one bill

    Domain Rules:
    - Belongs to exactly one bill
    - amount_paid > 0
    - Immutable (no edits, no deletes in normal flow)
    """

    __tablename__ = "payments"
    __table_args__ = (
        Index('ix_payments_bill_id', 'bill_id'),
        CheckConstraint('amount_paid > 0', name='amount_paid_positive'),
    )

    id: int = Field(
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique payment identifier (auto-increment)"
    )

    bill_id: int = Field(
        sa_column=Column(IdType, ForeignKey("bills.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Bill"
    )

    amount_paid: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Amount received"
    )

    paid_on: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Date the payment was received"
    )

    note: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Record timestamp (immutable)"
    )
