"""
OAuth 1.0a data types.

``CachedToken`` and ``SignedRequestParams`` are frozen: a token is replaced
wholesale on refresh and a signed parameter set is built once per request.
"""

from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..config.settings import InstapaperCredentials

# Static consumer/user credentials used for signing.
OAuthCredentials = InstapaperCredentials


class CachedToken(BaseModel):
    """Access token obtained through the xAuth exchange."""
    model_config = ConfigDict(frozen=True)

    access_token: str = Field(..., min_length=1)
    token_secret: str = Field(..., min_length=1)
    expires_at: float = Field(..., description="Unix time after which the token must not be used")

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class SignedRequestParams(BaseModel):
    """Request parameters plus the signature computed over them."""
    model_config = ConfigDict(frozen=True)

    params: Tuple[Tuple[str, str], ...]
    oauth_signature: str = Field(..., min_length=1)

    def as_form(self) -> Dict[str, str]:
        """Form body for the HTTP call, signature appended last."""
        form = dict(self.params)
        form["oauth_signature"] = self.oauth_signature
        return form

    def get(self, name: str, default=None):
        for key, value in self.params:
            if key == name:
                return value
        return default
