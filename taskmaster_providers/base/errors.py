"""Unified provider error taxonomy public surface.

Re-exports the implementations under ``taskmaster_providers.base.errors_parts``
so callers have one stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, is_retryable, status_to_code

__all__ = ["ErrorCode", "ProviderError", "classify_exception", "is_retryable", "status_to_code"]
