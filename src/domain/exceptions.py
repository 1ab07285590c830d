"""
Domain exceptions for the billing service.

Adapters raise these; use cases translate them into Result errors.
"""


class BillingError(Exception):
    """
    Base class for billing-related errors.

    All domain exceptions inherit from this class to allow grouped
    exception handling.
    """


class ConflictError(BillingError):
    """
    Raised when a write violates a uniqueness rule.

    Typically an invoice number or a (customer, period) bill key taken
    by a concurrent writer.
    """


class InvoiceNumberExhaustedError(ConflictError):
    """No free invoice number was found within the allowed attempts."""


class StorageUnavailableError(BillingError):
    """The database could not be reached. Not retried by the service."""


class MessagingNotConfiguredError(BillingError):
    """WhatsApp credentials are missing from settings."""


class MessageDeliveryError(BillingError):
    """The messaging provider rejected or failed to deliver a message."""


class PdfRenderError(BillingError):
    """Invoice PDF generation failed."""
