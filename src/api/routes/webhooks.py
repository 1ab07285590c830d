"""WhatsApp webhook

Receives Green API notifications. Only outgoing message status
notifications are acted on; everything else is acknowledged and ignored.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.app.use_cases.billing.apply_delivery_receipt import ApplyDeliveryReceipt
from src.adapter.repositories.bill_repository import SqlAlchemyBillRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])

OUTGOING_STATUS_WEBHOOK = "outgoingMessageStatus"


@router.post("/whatsapp", status_code=status.HTTP_200_OK)
async def whatsapp_webhook(
    payload: Dict[str, Any],
    authorization: Optional[str] = Header(default=None),
    session: AsyncSession = Depends(get_session)
):
    token = ApplicationConfig.WHATSAPP_VERIFY_TOKEN
    if token and authorization != f"Bearer {token}":
        raise ClientError(
            Error(code="UNAUTHORIZED", message="Invalid webhook token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if payload.get("typeWebhook") != OUTGOING_STATUS_WEBHOOK:
        return {"status": "ignored"}

    message_id = payload.get("idMessage")
    if not message_id:
        return {"status": "ignored"}

    use_case = ApplyDeliveryReceipt(SqlAlchemyUnitOfWork(session), SqlAlchemyBillRepository(session))
    result = await use_case.execute(message_id, str(payload.get("status", "")))

    if result.is_err():
        logger.error(f"Delivery receipt for {message_id} failed: {result.error.reason}")
        raise ClientError(result.error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return {"status": "updated" if result.value.updated else "ok"}
