"""Monthly Billing Job

Generates bills for a calendar month and optionally sends them over
WhatsApp. Meant to be run once per month from cron or a scheduler.
"""

import asyncio
import logging
import time
from calendar import monthrange
from datetime import date
from typing import Callable, Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.bill_repository import SqlAlchemyBillRepository
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.delivery_entry_repository import SqlAlchemyDeliveryEntryRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.settings_repository import SqlAlchemySettingsRepository
from src.adapter.services.messaging_service import create_messaging_service
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.invoice_number_allocator import InvoiceNumberAllocator
from src.app.services.messaging_service import MessagingService
from src.app.services.pdf_service import PdfService
from src.app.use_cases.billing import (
    GenerateBills,
    GenerateBillsCommandDTO,
    MonthlyBillingResultDTO,
    SendAllBills,
    SendBill,
)
from src.domain.settings import Settings

logger = logging.getLogger(__name__)


def previous_month(today: date) -> tuple[int, int]:
    if today.month == 1:
        return today.year - 1, 12
    return today.year, today.month - 1


def month_period(year: int, month: int) -> tuple[date, date]:
    _, last_day = monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


class MonthlyBillingWorker:
    """
    Run-once job for monthly billing

    Usage:
        # Bill the previous month (typical cron usage)
        worker = MonthlyBillingWorker()
        result = await worker.run_once()

        # Bill January 2024 and send the bills
        result = await worker.run_once(year=2024, month=1, send=True)

    Generation is idempotent: re-running a month recalculates its bills
    and keeps their invoice numbers.
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        pdf_service: Optional[PdfService] = None,
        messaging_factory: Optional[Callable[[Settings], MessagingService]] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            pdf_service: Renderer for bill PDFs (defaults to ReportLab)
            messaging_factory: Builds the WhatsApp client from settings
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.pdf_service = pdf_service or ReportLabPdfService(
            currency_symbol=ApplicationConfig.CURRENCY_SYMBOL
        )
        self.messaging_factory = messaging_factory or create_messaging_service

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("MonthlyBillingWorker initialized")

    def _get_billing_period(
        self, year: Optional[int] = None, month: Optional[int] = None
    ) -> tuple[date, date]:
        if year is None or month is None:
            year, month = previous_month(date.today())
        return month_period(year, month)

    async def _generate(self, period_start: date, period_end: date, result: MonthlyBillingResultDTO) -> bool:
        async with self.async_session_factory() as session:
            bill_repo = SqlAlchemyBillRepository(session)
            use_case = GenerateBills(
                uow=SqlAlchemyUnitOfWork(session),
                customer_repo=SqlAlchemyCustomerRepository(session),
                delivery_repo=SqlAlchemyDeliveryEntryRepository(session),
                bill_repo=bill_repo,
                payment_repo=SqlAlchemyPaymentRepository(session),
                settings_repo=SqlAlchemySettingsRepository(session),
                allocator=InvoiceNumberAllocator(
                    bill_repo, max_attempts=ApplicationConfig.INVOICE_ALLOCATION_MAX_ATTEMPTS
                ),
                insert_attempts=ApplicationConfig.BILL_INSERT_ATTEMPTS,
            )
            generated = await use_case.execute(
                GenerateBillsCommandDTO(period_start=period_start, period_end=period_end)
            )

        if generated.is_err():
            logger.error(f"Bill generation failed: {generated.error.message} ({generated.error.reason})")
            result.error = generated.error.message
            return False

        result.generated_count = generated.value.generated_count
        result.skipped_count = generated.value.skipped_count
        result.failed_count = generated.value.failed_count

        for outcome in generated.value.results:
            if not outcome.success:
                logger.warning(
                    f"Customer {outcome.customer_id} not billed: {outcome.error_code} {outcome.error}"
                )
        return True

    async def _send(self, period_start: date, period_end: date, result: MonthlyBillingResultDTO):
        async with self.async_session_factory() as session:
            send_bill = SendBill(
                uow=SqlAlchemyUnitOfWork(session),
                bill_repo=SqlAlchemyBillRepository(session),
                customer_repo=SqlAlchemyCustomerRepository(session),
                delivery_repo=SqlAlchemyDeliveryEntryRepository(session),
                payment_repo=SqlAlchemyPaymentRepository(session),
                settings_repo=SqlAlchemySettingsRepository(session),
                pdf_service=self.pdf_service,
                messaging_factory=self.messaging_factory,
                currency_symbol=ApplicationConfig.CURRENCY_SYMBOL,
            )
            use_case = SendAllBills(SqlAlchemyBillRepository(session), send_bill)
            sent = await use_case.execute(period_start, period_end)

        if sent.is_err():
            logger.error(f"Sending bills failed: {sent.error.message} ({sent.error.reason})")
            result.error = sent.error.message
            return

        result.sent_count = sent.value.sent_count
        result.send_failed_count = sent.value.failed_count

    async def run_once(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        send: bool = False,
    ) -> MonthlyBillingResultDTO:
        """
        Bill one calendar month

        Args:
            year: Year (optional, defaults to previous month)
            month: Month (optional, defaults to previous month)
            send: Also send the month's unpaid bills over WhatsApp

        Returns:
            MonthlyBillingResultDTO with summary
        """
        start_time = time.time()
        period_start, period_end = self._get_billing_period(year, month)

        logger.info(f"Starting monthly billing for {period_start} to {period_end}")

        result = MonthlyBillingResultDTO(period_start=period_start, period_end=period_end)

        if await self._generate(period_start, period_end, result) and send:
            await self._send(period_start, period_end, result)

        result.execution_time_ms = int((time.time() - start_time) * 1000)

        logger.info(
            f"Monthly billing complete: {result.generated_count} generated, "
            f"{result.skipped_count} skipped, {result.failed_count} failed, "
            f"{result.sent_count} sent, {result.execution_time_ms}ms"
        )

        return result

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("MonthlyBillingWorker shutdown complete")


async def main():
    """
    Entry point for running the job as a standalone script

    Usage:
        # Bill the previous month
        python -m src.worker.monthly_billing

        # Bill a specific month and send the bills
        python -m src.worker.monthly_billing --year 2024 --month 1 --send
    """
    import argparse

    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Monthly Billing Job")
    parser.add_argument("--year", type=int, help="Year to bill")
    parser.add_argument("--month", type=int, help="Month to bill (1-12)")
    parser.add_argument("--send", action="store_true", help="Send bills over WhatsApp")
    args = parser.parse_args()

    worker = MonthlyBillingWorker()

    try:
        result = await worker.run_once(year=args.year, month=args.month, send=args.send)
        print(f"Billing complete for {result.period_start} to {result.period_end}:")
        print(f"  Generated: {result.generated_count}")
        print(f"  Skipped (no deliveries): {result.skipped_count}")
        print(f"  Failed: {result.failed_count}")
        if args.send:
            print(f"  Sent: {result.sent_count}")
            print(f"  Send failures: {result.send_failed_count}")
        print(f"  Execution time: {result.execution_time_ms}ms")
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
