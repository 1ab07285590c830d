"""HTTP error mapping for use case errors"""

from typing import Optional
from fastapi import status
from libs.result import Error

ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "BILL_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CUSTOMER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "BILL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "INVOICE_NUMBER_CONFLICT": status.HTTP_409_CONFLICT,
    "MESSAGING_NOT_CONFIGURED": status.HTTP_400_BAD_REQUEST,
    "DELIVERY_FAILED": status.HTTP_502_BAD_GATEWAY,
    "STORAGE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


class ClientError(Exception):
    """
    Raised by routes to return a use case Error as JSON

    Body: {"error": {"code": ..., "message": ..., "reason": ...}}
    """

    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or ERROR_STATUS.get(
            error.code, status.HTTP_400_BAD_REQUEST
        )

    def to_body(self) -> dict:
        return {"error": self.error.model_dump()}
