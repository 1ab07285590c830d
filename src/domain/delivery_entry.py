"""Delivery Entry Domain Entity

One day's recorded milk quantity for one customer.
"""

from datetime import datetime, date
from decimal import Decimal
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


class DeliveryEntry(BaseModel, table=True):
    """
    Delivery Entry - Liters delivered to a customer on one date

    Domain Rules:
    - One entry per (customer_id, delivery_date)
    - total_liters is required and non-negative
    - morning/evening split is optional; when present the caller keeps
      total_liters = morning_liters + evening_liters
    - An all-empty save deletes the entry (no tombstone)
    """

    __tablename__ = "delivery_entries"
    __table_args__ = (
        UniqueConstraint('customer_id', 'delivery_date', name='uq_delivery_customer_date'),
        Index('ix_delivery_entries_date', 'delivery_date'),
        CheckConstraint('total_liters >= 0', name='total_liters_non_negative'),
    )

    id: int = Field(
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique entry identifier (auto-increment)"
    )

    customer_id: int = Field(
        sa_column=Column(IdType, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Customer"
    )

    delivery_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Delivery date"
    )

    morning_liters: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(10, 2), nullable=True),
        description="Morning quantity (SPLIT entry mode)"
    )

    evening_liters: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(10, 2), nullable=True),
        description="Evening quantity (SPLIT entry mode)"
    )

    total_liters: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Total liters delivered that day"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)
