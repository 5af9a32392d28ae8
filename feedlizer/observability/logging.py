"""
Structured logging utility for provider clients.

This module provides a consistent logging interface for the feed and
bookmarking providers, ensuring every line carries standard fields like
provider, endpoint and request_id.
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Optional

from ..errors import ProviderError
from ..providers.errors import ErrorMapper

# Structured fields whose values never reach the log
REDACTED_FIELDS = frozenset({
    "consumer_secret",
    "password",
    "token_secret",
    "oauth_signature",
    "oauth_token",
    "x_auth_password",
})


class ProviderLogger:
    """Structured logger for provider clients."""

    def __init__(self, provider_name: str):
        """
        Initialize logger for a specific provider.

        Args:
            provider_name: Name of the provider (e.g., "feedly", "instapaper")
        """
        self.provider = provider_name
        self.logger = logging.getLogger(f"feedlizer.providers.{provider_name}")

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured fields."""
        fields = [f"provider={self.provider}"]

        for key, value in kwargs.items():
            if value is None:
                continue
            if key in REDACTED_FIELDS:
                value = "***"
            fields.append(f"{key}={value}")

        return f"[{' '.join(fields)}] {message}"

    def debug(self, message: str, request_id: Optional[str] = None, **kwargs):
        self.logger.debug(self._format_message(message, request_id=request_id, **kwargs))

    def info(self, message: str, request_id: Optional[str] = None, **kwargs):
        self.logger.info(self._format_message(message, request_id=request_id, **kwargs))

    def warning(self, message: str, request_id: Optional[str] = None, **kwargs):
        self.logger.warning(self._format_message(message, request_id=request_id, **kwargs))

    def error(self, message: str, request_id: Optional[str] = None,
              error: Optional[Exception] = None, **kwargs):
        """Log error message; ``error`` contributes its type and text."""
        if error:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_msg'] = str(error)

        self.logger.error(self._format_message(message, request_id=request_id, **kwargs))

    @contextmanager
    def track_request(self, method: str, endpoint: str, request_id: Optional[str] = None):
        """
        Context manager to track request timing and log key events.

        Args:
            method: The operation being performed (e.g., "add_bookmark")
            endpoint: The provider path being called
            request_id: Optional request ID (generated if not provided)

        Yields:
            Dict with request metadata including request_id
        """
        if request_id is None:
            request_id = uuid.uuid4().hex[:8]

        started = time.monotonic()
        self.debug(f"Starting {method}", request_id=request_id, endpoint=endpoint)
        metadata = {'request_id': request_id, 'endpoint': endpoint, 'operation': method}

        try:
            yield metadata
        except ProviderError as e:
            classification = ErrorMapper.get_error_classification(e)
            self.error(
                f"{method} failed",
                request_id=request_id,
                endpoint=endpoint,
                status=classification["status_code"],
                retryable=classification["is_retryable"],
                category=classification["category"],
                cause=classification["error_type"],
                duration_ms=int((time.monotonic() - started) * 1000),
                error=e
            )
            raise
        except Exception as e:
            self.error(
                f"{method} failed",
                request_id=request_id,
                endpoint=endpoint,
                duration_ms=int((time.monotonic() - started) * 1000),
                error=e
            )
            raise

        self.info(
            f"{method} completed",
            request_id=request_id,
            endpoint=endpoint,
            duration_ms=int((time.monotonic() - started) * 1000)
        )
