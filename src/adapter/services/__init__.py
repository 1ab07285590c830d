from .unit_of_work import SqlAlchemyUnitOfWork
from .messaging_service import GreenApiMessagingService, create_messaging_service
from .pdf_service import ReportLabPdfService

__all__ = [
    "SqlAlchemyUnitOfWork",
    "GreenApiMessagingService",
    "create_messaging_service",
    "ReportLabPdfService",
]
