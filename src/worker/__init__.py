"""Background jobs for the billing service"""
from .monthly_billing import MonthlyBillingWorker

__all__ = ["MonthlyBillingWorker"]
