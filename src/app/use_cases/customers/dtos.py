"""Data Transfer Objects for Customer Use Cases"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from src.app.use_cases.billing.dtos import BillResponseDTO
from src.app.use_cases.deliveries.dtos import DeliveryEntryDTO
from src.domain.customer import Customer


class CreateCustomerCommandDTO(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone_number: str = Field(..., min_length=10, max_length=20)
    address: Optional[str] = None
    price_per_liter: Optional[Decimal] = Field(
        default=None,
        description="Custom rate (None = use global rate)"
    )
    start_date: Optional[date] = Field(
        default=None,
        description="Defaults to today"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Ramesh Kumar",
                "phone_number": "9876543210",
                "address": "12 Gandhi Road",
                "price_per_liter": None,
                "start_date": "2024-01-01"
            }
        }


class UpdateCustomerCommandDTO(BaseModel):
    """
    Fields left as None are not changed

    clear_price_override resets the customer to the global rate.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    phone_number: Optional[str] = Field(default=None, min_length=10, max_length=20)
    address: Optional[str] = None
    price_per_liter: Optional[Decimal] = None
    clear_price_override: bool = False
    start_date: Optional[date] = None


class CustomerStatsDTO(BaseModel):
    """Lifetime totals; balance is total_billed - total_paid"""

    total_liters: Decimal = Decimal("0")
    delivery_days: int = 0
    total_billed: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")

    @classmethod
    def from_totals(cls, totals: Dict[str, Any]) -> "CustomerStatsDTO":
        return cls(
            total_liters=totals["total_liters"],
            delivery_days=totals["delivery_days"],
            total_billed=totals["total_billed"],
            total_paid=totals["total_paid"],
            balance=totals["total_billed"] - totals["total_paid"],
        )


class CustomerResponseDTO(BaseModel):
    customer_id: int
    name: str
    phone_number: str
    address: Optional[str] = None
    price_per_liter: Optional[Decimal] = None
    is_active: bool
    start_date: date
    created_at: datetime
    updated_at: datetime
    stats: Optional[CustomerStatsDTO] = None

    @classmethod
    def from_customer(
        cls, customer: Customer, stats: Optional[CustomerStatsDTO] = None
    ) -> "CustomerResponseDTO":
        return cls(
            customer_id=customer.id,
            name=customer.name,
            phone_number=customer.phone_number,
            address=customer.address,
            price_per_liter=customer.price_per_liter,
            is_active=customer.is_active,
            start_date=customer.start_date,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
            stats=stats,
        )


class DeleteCustomerResponseDTO(BaseModel):
    customer_id: int
    deleted: Dict[str, int] = Field(
        default_factory=dict,
        description="Rows removed per table"
    )


class CustomerDetailDTO(CustomerResponseDTO):
    """A customer with lifetime stats, recent bills and recent deliveries"""

    recent_bills: List[BillResponseDTO] = Field(default_factory=list)
    recent_entries: List[DeliveryEntryDTO] = Field(default_factory=list)
