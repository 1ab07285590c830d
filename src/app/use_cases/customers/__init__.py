"""Customer use cases"""
from .create_customer import CreateCustomer
from .update_customer import UpdateCustomer, ToggleCustomerStatus
from .delete_customer import DeleteCustomer
from .list_customers import ListCustomers
from .get_customer import GetCustomer
from .dtos import (
    CreateCustomerCommandDTO,
    UpdateCustomerCommandDTO,
    CustomerResponseDTO,
    CustomerStatsDTO,
    CustomerDetailDTO,
    DeleteCustomerResponseDTO,
)

__all__ = [
    "CreateCustomer",
    "UpdateCustomer",
    "ToggleCustomerStatus",
    "DeleteCustomer",
    "ListCustomers",
    "GetCustomer",
    "CreateCustomerCommandDTO",
    "UpdateCustomerCommandDTO",
    "CustomerResponseDTO",
    "CustomerStatsDTO",
    "CustomerDetailDTO",
    "DeleteCustomerResponseDTO",
]
