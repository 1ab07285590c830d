"""GetDashboardStats Use Case"""

from datetime import date
from decimal import Decimal
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.delivery_entry_repository import DeliveryEntryRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.settings_repository import SettingsRepository
from src.app.use_cases.settings.get_settings import default_settings
from src.domain.pricing import quantize_money, to_decimal
from .dtos import DashboardStatsDTO
from .list_bills import PENDING_STATUSES


class GetDashboardStats:
    """
    Use Case: Today's and this month's deliveries with outstanding money

    Read only. A missing settings row is treated as the defaults and is
    not written.
    """

    def __init__(
        self,
        delivery_repo: DeliveryEntryRepository,
        customer_repo: CustomerRepository,
        bill_repo: BillRepository,
        payment_repo: PaymentRepository,
        settings_repo: SettingsRepository,
    ):
        self.delivery_repo = delivery_repo
        self.customer_repo = customer_repo
        self.bill_repo = bill_repo
        self.payment_repo = payment_repo
        self.settings_repo = settings_repo

    async def execute(self, today: Optional[date] = None) -> Result[DashboardStatsDTO]:
        today = today or date.today()
        month_start = today.replace(day=1)

        try:
            settings = await self.settings_repo.get() or default_settings()
            rate = to_decimal(settings.global_price_per_liter)

            today_liters, today_customers = await self.delivery_repo.daily_summary(today)
            month_liters = await self.delivery_repo.sum_for_range(month_start, today)

            pending = await self.bill_repo.list_by_statuses(PENDING_STATUSES)
            paid = await self.payment_repo.totals_by_bill([b.id for b in pending])
            pending_amount = sum(
                (b.total_amount - to_decimal(paid.get(b.id, 0)) for b in pending),
                Decimal("0"),
            )

            return Return.ok(
                DashboardStatsDTO(
                    today=today,
                    today_liters=to_decimal(today_liters),
                    today_customers=today_customers,
                    today_revenue=quantize_money(to_decimal(today_liters) * rate),
                    month_start=month_start,
                    month_liters=to_decimal(month_liters),
                    month_revenue=quantize_money(to_decimal(month_liters) * rate),
                    active_customers=await self.customer_repo.count_active(),
                    pending_bills=len(pending),
                    pending_amount=pending_amount,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="DASHBOARD_STATS_FAILED",
                    message="Failed to load dashboard figures",
                    reason=str(e),
                )
            )
