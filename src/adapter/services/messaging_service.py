"""Messaging Service Implementations

Delivers invoice documents over WhatsApp through the Green API.
"""

import logging
from typing import Optional
import httpx
from config import ApplicationConfig
from src.app.services.messaging_service import MessagingService
from src.domain.exceptions import MessageDeliveryError, MessagingNotConfiguredError
from src.domain.phone import to_whatsapp_chat_id
from src.domain.settings import Settings

logger = logging.getLogger(__name__)


class GreenApiMessagingService(MessagingService):
    """
    Messaging service backed by the Green API WhatsApp gateway

    URL scheme: {base_url}/waInstance{instance_id}/{method}/{api_token}
    """

    def __init__(
        self,
        instance_id: str,
        api_token: str,
        base_url: str = "https://api.green-api.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Green API messaging service

        Args:
            instance_id: Green API idInstance
            api_token: Green API apiTokenInstance
            base_url: Gateway base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.instance_id = instance_id
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _url(self, method: str) -> str:
        return f"{self.base_url}/waInstance{self.instance_id}/{method}/{self.api_token}"

    async def send_document(
        self,
        phone_number: str,
        document: bytes,
        file_name: str,
        caption: str,
    ) -> str:
        """
        Upload a document to a WhatsApp chat

        Returns:
            Green API idMessage

        Raises:
            MessageDeliveryError: HTTP failure or response without idMessage
        """
        chat_id = to_whatsapp_chat_id(phone_number)
        form = {"chatId": chat_id, "fileName": file_name, "caption": caption}
        files = {"file": (file_name, document, "application/pdf")}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self._url("sendFileByUpload"), data=form, files=files
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Green API rejected document {file_name} for {chat_id}: "
                f"{e.response.status_code} {e.response.text}"
            )
            raise MessageDeliveryError(
                f"Green API error {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Failed to reach Green API for {chat_id}: {e}")
            raise MessageDeliveryError(f"Green API request failed: {e}") from e
        except ValueError as e:
            raise MessageDeliveryError("Green API returned a non-JSON response") from e

        message_id = payload.get("idMessage")
        if not message_id:
            raise MessageDeliveryError(f"Green API response has no idMessage: {payload}")

        logger.info(f"Sent {file_name} to {chat_id} (message {message_id})")
        return message_id


def create_messaging_service(settings: Settings) -> MessagingService:
    """
    Factory function to build the messaging service from farm settings

    Credentials live in the settings row, so the service is built per call.

    Raises:
        MessagingNotConfiguredError: instance id or token missing
    """
    if not settings.messaging_configured():
        raise MessagingNotConfiguredError(
            "WhatsApp is not configured. Add the Green API instance id and token in settings."
        )

    return GreenApiMessagingService(
        instance_id=settings.whatsapp_instance_id,
        api_token=settings.whatsapp_api_token,
        base_url=ApplicationConfig.GREEN_API_BASE_URL,
        timeout=float(ApplicationConfig.MESSAGING_TIMEOUT_SECONDS),
    )
