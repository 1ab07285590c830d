"""UpdateCustomer and ToggleCustomerStatus Use Cases"""

from datetime import datetime
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.phone import format_e164
from src.domain.pricing import fits_cents
from .dtos import UpdateCustomerCommandDTO, CustomerResponseDTO


def _not_found(customer_id: int) -> Error:
    return Error(
        code="CUSTOMER_NOT_FOUND",
        message=f"Customer with ID {customer_id} not found",
        reason="Customer does not exist",
    )


class UpdateCustomer:
    """
    Use Case: Edit customer details

    Rate changes only affect bills generated afterwards; existing bills
    keep the rate they were generated with until regenerated.
    """

    def __init__(self, uow: UnitOfWork, customer_repo: CustomerRepository):
        self.uow = uow
        self.customer_repo = customer_repo

    async def execute(
        self, customer_id: int, command: UpdateCustomerCommandDTO
    ) -> Result[CustomerResponseDTO]:
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
            customer = await self.customer_repo.get_by_id(customer_id)
            if not customer:
                return Return.err(_not_found(customer_id))

            if command.name is not None:
                customer.name = command.name.strip()
            if command.phone_number is not None:
                customer.phone_number = format_e164(command.phone_number)
            if command.address is not None:
                customer.address = command.address
            if command.start_date is not None:
                customer.start_date = command.start_date
            if command.clear_price_override:
                customer.price_per_liter = None
            elif command.price_per_liter is not None:
                customer.price_per_liter = command.price_per_liter
            customer.updated_at = datetime.utcnow()

            customer = await self.customer_repo.update(customer)
            await self.uow.commit()
            return Return.ok(CustomerResponseDTO.from_customer(customer))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_CUSTOMER_FAILED",
                    message="Failed to update customer",
                    reason=str(e),
                )
            )


class ToggleCustomerStatus:
    """Flips is_active; inactive customers are left out of bill generation"""

    def __init__(self, uow: UnitOfWork, customer_repo: CustomerRepository):
        self.uow = uow
        self.customer_repo = customer_repo

    async def execute(self, customer_id: int) -> Result[CustomerResponseDTO]:
        try:
            customer = await self.customer_repo.get_by_id(customer_id)
            if not customer:
                return Return.err(_not_found(customer_id))

            customer.is_active = not customer.is_active
            customer.updated_at = datetime.utcnow()
            customer = await self.customer_repo.update(customer)
            await self.uow.commit()
            return Return.ok(CustomerResponseDTO.from_customer(customer))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="TOGGLE_CUSTOMER_FAILED",
                    message="Failed to change customer status",
                    reason=str(e),
                )
            )
