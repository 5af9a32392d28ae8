"""
Typed errors raised by the provider clients.

Every failure that crosses a provider boundary is a ``ProviderError`` so the
server layer can map it to a response without knowing which call failed.
"""

from typing import Optional


class ProviderError(Exception):
    """
    Base exception for provider-related errors.

    Attributes:
        message: Error message
        provider: Provider name ("feedly", "instapaper")
        status_code: HTTP status code if applicable
        body: Raw response body if applicable, kept for diagnostics
        is_retryable: Whether the caller may safely try again
        original_error: The original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code
        self.body = body
        self.is_retryable = False  # Set by ErrorMapper
        self.original_error: Optional[BaseException] = None


class ConfigurationError(ProviderError):
    """Required credentials or settings are missing."""


class TransportError(ProviderError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""


class ProviderRejected(ProviderError):
    """The provider answered with a status other than the expected one."""

    def __init__(self, provider: str, status_code: int, body: str = ""):
        super().__init__(
            f"{provider} rejected request: HTTP {status_code}: {body[:200]}",
            provider=provider,
            status_code=status_code,
            body=body
        )


class ResponseParseError(ProviderError):
    """The provider answered 2xx but the payload could not be understood."""


class TokenAcquisitionError(ProviderError):
    """Network or parse failure during the xAuth token exchange."""


class SignatureRequestError(ProviderError):
    """Network or parse failure during a signed bookmark call."""
