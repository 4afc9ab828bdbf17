"""Exceptions raised by the Merchant Center account samples"""
from typing import Optional


class MerchantSampleError(Exception):
    """Base class for every error the samples report and stop on"""


class ConfigError(MerchantSampleError, ValueError):
    """Sample configuration is missing or malformed"""


class CredentialsError(MerchantSampleError):
    """No usable Google credentials could be found"""


class ContentApiError(MerchantSampleError):
    """A Content API call failed. Never retried."""

    def __init__(self, operation: str, detail: str, status: Optional[int] = None):
        self.operation = operation
        self.detail = detail
        self.status = status
        prefix = f"Content API error in {operation}"
        if status is not None:
            prefix += f" (HTTP {status})"
        super().__init__(f"{prefix}: {detail}")


class AccessDeniedError(MerchantSampleError):
    """The authenticated user cannot access the configured account"""

    def __init__(self, merchant_id: int, cause: Optional[Exception] = None):
        self.merchant_id = merchant_id
        self.cause = cause
        message = f"Authenticated user does not have access to Merchant Center {merchant_id}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class AccountRoleError(MerchantSampleError):
    """An operation was attempted on the wrong kind of account"""
