"""GetCustomer Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.delivery_entry_repository import DeliveryEntryRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.use_cases.billing.dtos import BillResponseDTO
from src.app.use_cases.deliveries.dtos import DeliveryEntryDTO
from src.domain.pricing import to_decimal
from .dtos import CustomerDetailDTO, CustomerStatsDTO

RECENT_BILLS = 12
RECENT_ENTRIES = 30


class GetCustomer:
    """
    Use Case: Read one customer for the detail screen

    Returns the customer with lifetime totals, the last twelve bills
    (newest period first) and the last thirty delivery days.
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        bill_repo: BillRepository,
        delivery_repo: DeliveryEntryRepository,
        payment_repo: PaymentRepository,
    ):
        self.customer_repo = customer_repo
        self.bill_repo = bill_repo
        self.delivery_repo = delivery_repo
        self.payment_repo = payment_repo

    async def execute(self, customer_id: int) -> Result[CustomerDetailDTO]:
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

            stats = await self.customer_repo.get_stats([customer_id])
            bills = await self.bill_repo.list_for_customer(customer_id, limit=RECENT_BILLS)
            paid = await self.payment_repo.totals_by_bill([b.id for b in bills])
            entries = await self.delivery_repo.recent_for_customer(
                customer_id, limit=RECENT_ENTRIES
            )

            detail = CustomerDetailDTO.from_customer(
                customer, CustomerStatsDTO.from_totals(stats[customer_id])
            )
            detail.recent_bills = [
                BillResponseDTO.from_bill(b, to_decimal(paid.get(b.id, 0))) for b in bills
            ]
            detail.recent_entries = [DeliveryEntryDTO.from_entry(e) for e in entries]
            return Return.ok(detail)

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_CUSTOMER_FAILED",
                    message="Failed to load customer",
                    reason=str(e),
                )
            )
