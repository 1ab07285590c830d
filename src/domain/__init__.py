from .base import BaseModel
from .customer import Customer
from .delivery_entry import DeliveryEntry
from .bill import Bill, BillStatus
from .payment import Payment
from .settings import Settings, EntryMode, BillingCycleType, SETTINGS_ID

__all__ = [
    "BaseModel",
    "Customer",
    "DeliveryEntry",
    "Bill",
    "BillStatus",
    "Payment",
    "Settings",
    "EntryMode",
    "BillingCycleType",
    "SETTINGS_ID",
]
