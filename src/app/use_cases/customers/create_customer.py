"""CreateCustomer Use Case"""

from datetime import date
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.customer import Customer
from src.domain.phone import format_e164
from src.domain.pricing import fits_cents
from .dtos import CreateCustomerCommandDTO, CustomerResponseDTO


class CreateCustomer:
    """
    Use Case: Register a customer

    Business Rules:
    1. Phone number is stored in E.164 (+91 assumed for 10 digits)
    2. A custom rate, when given, must be positive
    3. New customers are active
    """

    def __init__(self, uow: UnitOfWork, customer_repo: CustomerRepository):
        self.uow = uow
        self.customer_repo = customer_repo

    async def execute(self, command: CreateCustomerCommandDTO) -> Result[CustomerResponseDTO]:
        if command.price_per_liter is not None and (
            command.price_per_liter <= 0 or not fits_cents(command.price_per_liter)
        ):
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Price per liter must be greater than zero with at most 2 decimal places",
                    reason=f"price_per_liter={command.price_per_liter}",
                )
            )

        try:
            customer = await self.customer_repo.create(
                Customer(
                    name=command.name.strip(),
                    phone_number=format_e164(command.phone_number),
                    address=command.address,
                    price_per_liter=command.price_per_liter,
                    is_active=True,
                    start_date=command.start_date or date.today(),
                )
            )
            await self.uow.commit()
            return Return.ok(CustomerResponseDTO.from_customer(customer))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_CUSTOMER_FAILED",
                    message="Failed to create customer",
                    reason=str(e),
                )
            )
