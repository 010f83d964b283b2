"""Errors raised by the register core.

A product that does not exist is not an error: ``ProductLookupClient.lookup``
returns ``None`` for it. Everything here is either a backend/transport failure
or a purchase the backend explicitly refused.
"""
from typing import Optional


class RegisterError(Exception):
    """Base class for register failures."""


class BackendError(RegisterError):
    """Backend answered with a non-2xx status, an unreadable body, or not at all."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProductLookupError(BackendError):
    pass


class PurchaseError(BackendError):
    pass


class PurchaseRejectedError(RegisterError):
    """Backend accepted the request (2xx) but reported ``success: false``."""

    def __init__(self, result):
        super().__init__(f"Purchase rejected by backend (total_amount={result.total_amount})")
        self.result = result


class CheckoutInProgressError(RegisterError):
    """The cart is locked while its purchase is waiting on the backend."""
