"""DeleteCustomer Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.services.unit_of_work import UnitOfWork
from .dtos import DeleteCustomerResponseDTO

logger = logging.getLogger(__name__)


class DeleteCustomer:
    """
    Use Case: Permanently delete a customer

    Business Rules:
    1. Customer must exist
    2. Payments, bills and deliveries of the customer go with it
    3. All-or-nothing: a failure leaves every row in place
    """

    def __init__(self, uow: UnitOfWork, customer_repo: CustomerRepository):
        self.uow = uow
        self.customer_repo = customer_repo

    async def execute(self, customer_id: int) -> Result[DeleteCustomerResponseDTO]:
        try:
            customer = await self.customer_repo.get_by_id(customer_id)
            if not customer:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer with ID {customer_id} not found",
                        reason="Customer does not exist",
                    )
                )

            counts = await self.customer_repo.delete_cascade(customer_id)
            await self.uow.commit()

            logger.info(f"Deleted customer {customer_id}: {counts}")
            return Return.ok(DeleteCustomerResponseDTO(customer_id=customer_id, deleted=counts))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_CUSTOMER_FAILED",
                    message="Failed to delete customer",
                    reason=str(e),
                )
            )
