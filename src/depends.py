from typing import Callable
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.messaging_service import create_messaging_service
from src.adapter.services.pdf_service import ReportLabPdfService
from src.app.services.messaging_service import MessagingService
from src.app.services.pdf_service import PdfService
from src.domain.settings import Settings

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_pdf_service() -> PdfService:
    return ReportLabPdfService(currency_symbol=ApplicationConfig.CURRENCY_SYMBOL)


def get_messaging_factory() -> Callable[[Settings], MessagingService]:
    return create_messaging_service
