"""Settings Domain Entity

Single-row farm configuration.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel

SETTINGS_ID = "default"


class EntryMode(str, Enum):
    """How daily liters are collected"""
    SPLIT = "SPLIT"      # morning + evening
    SINGLE = "SINGLE"    # one total per day


class BillingCycleType(str, Enum):
    MONTHLY = "MONTHLY"


class Settings(BaseModel, table=True):
    """
    Settings - Farm identity, default rate and messaging credentials

    Domain Rules:
    - Exactly one row, id = "default"
    - Created with defaults on first read
    - entry_mode only affects how liters are collected, never billing math
    """

    __tablename__ = "settings"

    id: str = Field(
        default=SETTINGS_ID,
        sa_column=Column(String(20), primary_key=True),
    )

    farm_name: str = Field(
        sa_column=Column(String(255), nullable=False),
    )

    farm_address: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
    )

    farm_phone: Optional[str] = Field(
        default=None,
        sa_column=Column(String(20), nullable=True),
    )

    global_price_per_liter: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Default rate when a customer has no override"
    )

    billing_cycle_type: BillingCycleType = Field(default=BillingCycleType.MONTHLY)

    entry_mode: EntryMode = Field(default=EntryMode.SPLIT)

    whatsapp_instance_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="Green API idInstance"
    )

    whatsapp_api_token: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Green API apiTokenInstance"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def messaging_configured(self) -> bool:
        return bool(self.whatsapp_instance_id and self.whatsapp_api_token)
