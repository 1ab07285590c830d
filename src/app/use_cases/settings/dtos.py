"""Data Transfer Objects for Settings Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.settings import Settings, EntryMode, BillingCycleType


class UpdateSettingsCommandDTO(BaseModel):
    """
    Command DTO for updating farm settings

    Fields left as None are not changed.
    """

    farm_name: Optional[str] = None
    farm_address: Optional[str] = None
    farm_phone: Optional[str] = None
    global_price_per_liter: Optional[Decimal] = Field(
        default=None,
        description="Default rate per liter (must be > 0)"
    )
    billing_cycle_type: Optional[BillingCycleType] = None
    entry_mode: Optional[EntryMode] = None
    whatsapp_instance_id: Optional[str] = None
    whatsapp_api_token: Optional[str] = None


class SettingsResponseDTO(BaseModel):
    """
    Response DTO for settings

    The WhatsApp token is never returned, only whether messaging is set up.
    """

    farm_name: str
    farm_address: Optional[str] = None
    farm_phone: Optional[str] = None
    global_price_per_liter: Decimal
    billing_cycle_type: str
    entry_mode: str
    whatsapp_instance_id: Optional[str] = None
    whatsapp_configured: bool = False
    updated_at: datetime

    @classmethod
    def from_settings(cls, settings: Settings) -> "SettingsResponseDTO":
        return cls(
            farm_name=settings.farm_name,
            farm_address=settings.farm_address,
            farm_phone=settings.farm_phone,
            global_price_per_liter=settings.global_price_per_liter,
            billing_cycle_type=settings.billing_cycle_type.value,
            entry_mode=settings.entry_mode.value,
            whatsapp_instance_id=settings.whatsapp_instance_id,
            whatsapp_configured=settings.messaging_configured(),
            updated_at=settings.updated_at,
        )
