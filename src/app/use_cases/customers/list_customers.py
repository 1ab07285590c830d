"""ListCustomers Use Case"""

from typing import List, Optional
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from .dtos import CustomerResponseDTO, CustomerStatsDTO


class ListCustomers:
    def __init__(self, customer_repo: CustomerRepository):
        self.customer_repo = customer_repo

    async def execute(
        self,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        with_stats: bool = False,
    ) -> Result[List[CustomerResponseDTO]]:
        try:
            customers = await self.customer_repo.list(active=active, search=search or None)
            if not with_stats:
                return Return.ok([CustomerResponseDTO.from_customer(c) for c in customers])

            stats = await self.customer_repo.get_stats([c.id for c in customers])
            return Return.ok(
                [
                    CustomerResponseDTO.from_customer(c, CustomerStatsDTO.from_totals(stats[c.id]))
                    for c in customers
                ]
            )
        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_CUSTOMERS_FAILED",
                    message="Failed to list customers",
                    reason=str(e),
                )
            )
