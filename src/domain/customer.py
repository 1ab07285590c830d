"""Customer Domain Entity

A household receiving daily milk deliveries.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Boolean, CheckConstraint, Date, Numeric, String
from src.domain.base import BaseModel, IdType


class Customer(BaseModel, table=True):
    """
    Customer - Milk delivery customer

    Domain Rules:
    - price_per_liter overrides the farm-wide rate when set
    - Inactive customers are skipped by bill generation
    - Deactivation is preferred over deletion; deletion cascades explicitly
      (payments -> bills -> deliveries -> customer)
    """

    __tablename__ = "customers"
    __table_args__ = (
        Index('ix_customers_is_active', 'is_active'),
        CheckConstraint(
            'price_per_liter IS NULL OR price_per_liter > 0',
            name='customer_price_positive',
        ),
    )

    id: int = Field(
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique customer identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Customer display name"
    )

    phone_number: str = Field(
        sa_column=Column(String(20), nullable=False),
        description="Phone number in E.164 format (e.g., +919876543210)"
    )

    address: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
        description="Delivery address"
    )

    price_per_liter: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(10, 2), nullable=True),
        description="Custom rate per liter (None = use global rate)"
    )

    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True),
        description="Active customers are billed"
    )

    start_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Date deliveries started"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Customer creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Ramesh Kumar",
                "phone_number": "+919876543210",
                "address": "12 Gandhi Road",
                "price_per_liter": "55.00",
                "is_active": True,
                "start_date": "2024-01-01",
            }
        }
