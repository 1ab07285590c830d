"""Request schemas for the delivery ledger API"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class DeliveryEntryRequestSchema(BaseModel):
    customer_id: int
    morning_liters: Optional[Decimal] = None
    evening_liters: Optional[Decimal] = None
    total_liters: Optional[Decimal] = Field(
        default=None,
        description="Defaults to morning + evening"
    )
    notes: Optional[str] = Field(default=None, max_length=500)


class SaveDeliveriesRequestSchema(BaseModel):
    """
    Used for PUT /deliveries/{delivery_date}

    An entry with no quantities removes that customer's record for the day.
    """

    entries: List[DeliveryEntryRequestSchema] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "entries": [
                    {"customer_id": 1, "morning_liters": "1.0", "evening_liters": "0.5"},
                    {"customer_id": 2, "total_liters": "2.0"},
                    {"customer_id": 3}
                ]
            }
        }


class MonthlyEntryRequestSchema(DeliveryEntryRequestSchema):
    delivery_date: date


class SaveMonthlyDeliveriesRequestSchema(BaseModel):
    """
    Used for POST /deliveries/bulk

    Only the cells changed in the month grid need to be sent.
    """

    changes: List[MonthlyEntryRequestSchema] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "changes": [
                    {"delivery_date": "2024-01-01", "customer_id": 1, "total_liters": "1.5"},
                    {"delivery_date": "2024-01-02", "customer_id": 1}
                ]
            }
        }
