from .customer_repository import CustomerRepository
from .delivery_entry_repository import DeliveryEntryRepository
from .bill_repository import BillRepository
from .payment_repository import PaymentRepository
from .settings_repository import SettingsRepository

__all__ = [
    "CustomerRepository",
    "DeliveryEntryRepository",
    "BillRepository",
    "PaymentRepository",
    "SettingsRepository",
]
