"""Errors parts package.

Prefer importing from ``taskmaster_providers.base.errors`` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import classify_exception, is_retryable, status_to_code

__all__ = ["ErrorCode", "ProviderError", "classify_exception", "is_retryable", "status_to_code"]
