"""
Error mapping utilities for provider clients.

This module converts httpx failures and unexpected responses into the typed
``ProviderError`` hierarchy, and maps those errors back to HTTP statuses for
the server layer.
"""

from typing import Any, Dict

import httpx

from ..errors import (
    ConfigurationError,
    ProviderError,
    ProviderRejected,
    TransportError,
)


class ErrorMapper:
    """Maps transport failures and responses to standardized ProviderError."""

    # Common HTTP status codes that indicate retryable errors
    RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

    # Provider statuses that are surfaced to the client unchanged
    PASSTHROUGH_STATUS_CODES = {400, 403}

    @staticmethod
    def is_retryable(error: Exception) -> bool:
        """
        Determine if an error is retryable.

        Args:
            error: The exception to check

        Returns:
            bool: True if repeating the call may succeed
        """
        if isinstance(error, ProviderError) and error.original_error is not None:
            if ErrorMapper.is_retryable(error.original_error):
                return True

        status_code = getattr(error, 'status_code', None)
        if status_code is not None and status_code in ErrorMapper.RETRYABLE_STATUS_CODES:
            return True

        if isinstance(error, (httpx.TimeoutException, httpx.ConnectError)):
            return True

        return False

    @staticmethod
    def map_transport_error(error: httpx.HTTPError, provider: str) -> TransportError:
        """
        Wrap an httpx exception that produced no response.

        Args:
            error: The httpx exception
            provider: Provider name

        Returns:
            TransportError with retry metadata
        """
        if isinstance(error, httpx.TimeoutException):
            message = f"{provider} request timed out"
        elif isinstance(error, httpx.ConnectError):
            message = f"Could not connect to {provider}"
        else:
            message = f"{provider} transport error: {error}"

        transport_error = TransportError(message, provider=provider)
        transport_error.original_error = error
        transport_error.is_retryable = ErrorMapper.is_retryable(error)
        return transport_error

    @staticmethod
    def map_response(response: httpx.Response, provider: str) -> ProviderRejected:
        """Build a ProviderRejected carrying the status and body of ``response``."""
        rejected = ProviderRejected(provider, response.status_code, response.text)
        rejected.is_retryable = response.status_code in ErrorMapper.RETRYABLE_STATUS_CODES
        return rejected

    @staticmethod
    def http_status(error: ProviderError) -> int:
        """
        HTTP status the server layer should answer with.

        Configuration problems become 401, transport failures 502, provider
        400/403 pass through, everything else is 500.
        """
        if isinstance(error, ConfigurationError):
            return 401
        if isinstance(error, TransportError):
            return 502
        if error.status_code in ErrorMapper.PASSTHROUGH_STATUS_CODES:
            return error.status_code
        return 500

    @staticmethod
    def get_error_classification(error: ProviderError) -> Dict[str, Any]:
        """
        Get detailed error classification for logging.

        Args:
            error: The ProviderError to classify

        Returns:
            Dict with error classification details
        """
        return {
            'provider': error.provider,
            'status_code': error.status_code,
            'is_retryable': error.is_retryable,
            'error_type': type(error.original_error).__name__ if error.original_error else None,
            'category': ErrorMapper._categorize_error(error)
        }

    @staticmethod
    def _categorize_error(error: ProviderError) -> str:
        if isinstance(error, ConfigurationError):
            return 'configuration'
        if isinstance(error, TransportError):
            if isinstance(error.original_error, httpx.TimeoutException):
                return 'timeout'
            return 'network'

        if error.status_code:
            if error.status_code in (401, 403):
                return 'authentication'
            elif error.status_code == 429:
                return 'rate_limit'
            elif error.status_code >= 500:
                return 'server_error'
            elif error.status_code >= 400:
                return 'client_error'

        return 'unknown'
