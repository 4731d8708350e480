"""
Domain exceptions for the reports app.

Exception Hierarchy:
    ReportsServiceError (base)
    └── InvalidLedgerTypeError
"""
from apps.common.exceptions import ServiceError


class ReportsServiceError(ServiceError):
    """Base exception for report queries."""
    pass


class InvalidLedgerTypeError(ReportsServiceError):
    """Ledger type must be one of 'all', 'seller' or 'customer'."""
    pass
