"""Dashboard API Routes"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.billing import DashboardStatsDTO, GetDashboardStats
from src.adapter.repositories.bill_repository import SqlAlchemyBillRepository
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.delivery_entry_repository import SqlAlchemyDeliveryEntryRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.settings_repository import SqlAlchemySettingsRepository
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardStatsDTO)
async def get_dashboard_stats(
    today: Optional[date] = Query(default=None, description="Reference day (defaults to today)"),
    session: AsyncSession = Depends(get_session)
):
    """Liters and estimated revenue for today and the month so far, with unpaid totals."""
    use_case = GetDashboardStats(
        SqlAlchemyDeliveryEntryRepository(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyBillRepository(session),
        SqlAlchemyPaymentRepository(session),
        SqlAlchemySettingsRepository(session),
    )
    result = await use_case.execute(today)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
