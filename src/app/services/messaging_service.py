"""Messaging Service Interface

Defines the contract for delivering an invoice document to a customer.
"""

from abc import ABC, abstractmethod


class MessagingService(ABC):
    """
    Abstract outbound messaging channel (WhatsApp)

    The service only sends once: retries and delivery confirmation beyond
    this call are the provider's concern.
    """

    @abstractmethod
    async def send_document(
        self,
        phone_number: str,
        document: bytes,
        file_name: str,
        caption: str,
    ) -> str:
        """
        Send a document to a phone number

        Args:
            phone_number: Destination in E.164 format
            document: File contents
            file_name: File name shown to the recipient
            caption: Text sent with the document

        Returns:
            Provider message identifier

        Raises:
            MessageDeliveryError: provider rejected or could not be reached
        """
        pass
