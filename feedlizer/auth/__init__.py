"""OAuth 1.0a signing and token management for the bookmarking provider."""

from .oauth1 import (
    OAuthSigner,
    build_base_string,
    build_signing_key,
    generate_nonce,
    normalize_parameters,
    percent_encode,
    sign,
)
from .token_manager import TokenManager, parse_token_response

__all__ = [
    "OAuthSigner",
    "TokenManager",
    "build_base_string",
    "build_signing_key",
    "generate_nonce",
    "normalize_parameters",
    "parse_token_response",
    "percent_encode",
    "sign",
]
