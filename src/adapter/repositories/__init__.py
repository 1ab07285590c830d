from .customer_repository import SqlAlchemyCustomerRepository
from .delivery_entry_repository import SqlAlchemyDeliveryEntryRepository
from .bill_repository import SqlAlchemyBillRepository
from .payment_repository import SqlAlchemyPaymentRepository
from .settings_repository import SqlAlchemySettingsRepository

__all__ = [
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyDeliveryEntryRepository",
    "SqlAlchemyBillRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemySettingsRepository",
]
