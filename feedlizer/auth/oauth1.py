"""
OAuth 1.0a request signing (HMAC-SHA1).

The signature is computed over a base string made of the HTTP method, the
request URL and the sorted, percent-encoded parameters. The RFC 5849
primitives come from ``oauthlib``; requests themselves go out through the
shared httpx client, so only parameter building and signing live here.
Encoding follows RFC 3986: only ``A-Z a-z 0-9 - . _ ~`` are left as-is, so
``! ' ( ) *`` are escaped too.
"""

import secrets
import time
from typing import Callable, Dict, Mapping, Optional, Tuple

from oauthlib.oauth1 import Client
from oauthlib.oauth1.rfc5849 import signature as rfc5849
from oauthlib.oauth1.rfc5849.utils import escape

from ..config.constants import OAUTH_NONCE_BYTES, OAUTH_SIGNATURE_METHOD, OAUTH_VERSION
from ..models.oauth import SignedRequestParams


def percent_encode(value) -> str:
    """
    Percent-encode a key or value per RFC 3986.

    Args:
        value: Any value; non-strings are converted with ``str()``

    Returns:
        str: UTF-8 percent-encoded text with uppercase hex escapes
    """
    return escape(str(value))


def normalize_parameters(params: Mapping[str, object]) -> str:
    """Encode every pair, sort by encoded key then value, and join with ``&``."""
    return rfc5849.normalize_parameters([(str(k), str(v)) for k, v in params.items()])


def build_base_string(method: str, url: str, params: Mapping[str, object]) -> str:
    return rfc5849.signature_base_string(
        method.upper(),
        rfc5849.base_string_uri(url),
        normalize_parameters(params)
    )


def build_signing_key(consumer_secret: str, token_secret: Optional[str] = "") -> str:
    return f"{percent_encode(consumer_secret)}&{percent_encode(token_secret or '')}"


def sign(
    method: str,
    url: str,
    params: Mapping[str, object],
    consumer_secret: str,
    token_secret: Optional[str] = ""
) -> str:
    """
    Compute the base64 HMAC-SHA1 ``oauth_signature`` for a request.

    ``params`` must not contain ``oauth_signature`` itself.

    Args:
        method: HTTP method
        url: Full request URL without query string
        params: OAuth and request parameters
        consumer_secret: Application secret
        token_secret: Access token secret, empty before a token exists

    Returns:
        str: Base64-encoded signature
    """
    if "oauth_signature" in params:
        raise ValueError("oauth_signature must not be part of its own input")
    base_string = build_base_string(method, url, params)
    client = Client(
        params.get("oauth_consumer_key", ""),
        client_secret=consumer_secret,
        resource_owner_secret=token_secret or ""
    )
    return rfc5849.sign_hmac_sha1_with_client(base_string, client)


def generate_nonce() -> str:
    return secrets.token_hex(OAUTH_NONCE_BYTES)


class OAuthSigner:
    """
    Builds fresh, signed parameter sets for one consumer.

    Nonce and timestamp are generated on every call, right before signing,
    so a parameter set is never reused across HTTP calls.
    """

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        clock: Callable[[], float] = time.time,
        nonce_factory: Callable[[], str] = generate_nonce
    ):
        self.consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._clock = clock
        self._nonce_factory = nonce_factory

    def oauth_parameters(self, token: Optional[str] = None) -> Dict[str, str]:
        params = {
            "oauth_consumer_key": self.consumer_key,
            "oauth_nonce": self._nonce_factory(),
            "oauth_signature_method": OAUTH_SIGNATURE_METHOD,
            "oauth_timestamp": str(int(self._clock())),
            "oauth_version": OAUTH_VERSION,
        }
        if token:
            params["oauth_token"] = token
        return params

    def signed_parameters(
        self,
        method: str,
        url: str,
        extra: Optional[Mapping[str, object]] = None,
        token: Optional[str] = None,
        token_secret: Optional[str] = ""
    ) -> SignedRequestParams:
        """
        Combine OAuth and request parameters and sign them.

        Request parameters with a ``None`` value are dropped.
        """
        params = self.oauth_parameters(token)
        for key, value in (extra or {}).items():
            if value is not None:
                params[key] = str(value)

        signature = sign(method, url, params, self._consumer_secret, token_secret)
        ordered: Tuple[Tuple[str, str], ...] = tuple(sorted(params.items()))
        return SignedRequestParams(params=ordered, oauth_signature=signature)
