"""
Runtime settings loaded from the environment.

Values come from process environment variables, optionally populated from a
``.env`` file. The Feedly token may also live in ``feedly-config.json``.
"""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from ..errors import ConfigurationError
from .constants import (
    ARTICLE_CACHE_TTL_SECONDS,
    DEDUP_WINDOW_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_FEEDLY_ACCESS_TOKEN,
    ENV_HTTP_TIMEOUT,
    ENV_INSTAPAPER_CONSUMER_KEY,
    ENV_INSTAPAPER_CONSUMER_SECRET,
    ENV_INSTAPAPER_PASSWORD,
    ENV_INSTAPAPER_USERNAME,
    FEEDLY_CONFIG_FILE,
    TOKEN_LIFETIME_SECONDS,
    USER_AGENT,
)

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class InstapaperCredentials(BaseModel):
    """Consumer and account credentials for the bookmarking provider."""
    model_config = ConfigDict(frozen=True)

    consumer_key: Optional[str] = None
    consumer_secret: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_env(cls) -> "InstapaperCredentials":
        return cls(
            consumer_key=os.getenv(ENV_INSTAPAPER_CONSUMER_KEY) or None,
            consumer_secret=os.getenv(ENV_INSTAPAPER_CONSUMER_SECRET) or None,
            username=os.getenv(ENV_INSTAPAPER_USERNAME) or None,
            password=os.getenv(ENV_INSTAPAPER_PASSWORD) or None,
        )

    def missing(self) -> List[str]:
        """Names of the environment variables that are not set."""
        fields = (
            (ENV_INSTAPAPER_CONSUMER_KEY, self.consumer_key),
            (ENV_INSTAPAPER_CONSUMER_SECRET, self.consumer_secret),
            (ENV_INSTAPAPER_USERNAME, self.username),
            (ENV_INSTAPAPER_PASSWORD, self.password),
        )
        return [name for name, value in fields if not value]

    def is_configured(self) -> bool:
        return not self.missing()

    def require(self) -> "InstapaperCredentials":
        """
        Fail fast when any credential is absent.

        Raises:
            ConfigurationError: Naming every missing variable
        """
        missing = self.missing()
        if missing:
            raise ConfigurationError(
                f"Instapaper credentials not configured: missing {', '.join(missing)}",
                provider="instapaper"
            )
        return self

    def __repr__(self) -> str:
        # Never echo secrets
        return (
            f"InstapaperCredentials(consumer_key={self.consumer_key!r}, "
            f"username={self.username!r}, configured={self.is_configured()})"
        )


class FeedlySettings(BaseModel):
    """Access settings for the feed provider."""
    model_config = ConfigDict(frozen=True)

    access_token: Optional[str] = None
    user_agent: str = USER_AGENT

    @classmethod
    def from_env(cls, config_file: Union[str, Path, None] = FEEDLY_CONFIG_FILE) -> "FeedlySettings":
        """
        Read the token from ``FEEDLY_ACCESS_TOKEN``, then from the JSON config file.

        The config file accepts either a ``token`` or a ``feedlyToken`` key.
        """
        token = os.getenv(ENV_FEEDLY_ACCESS_TOKEN) or None
        if token is None and config_file is not None:
            token = _read_token_file(Path(config_file))
        return cls(access_token=token)

    def require_token(self) -> str:
        if not self.access_token:
            raise ConfigurationError(
                f"Feedly access token not configured: set {ENV_FEEDLY_ACCESS_TOKEN} "
                f"or add {{\"token\": \"...\"}} to {FEEDLY_CONFIG_FILE}",
                provider="feedly"
            )
        return self.access_token


def _read_token_file(path: Path) -> Optional[str]:
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Could not load Feedly config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        return None
    return data.get("token") or data.get("feedlyToken") or None


class FeedlizerConfig(BaseModel):
    """Top-level configuration bundle."""
    feedly: FeedlySettings = Field(default_factory=FeedlySettings)
    instapaper: InstapaperCredentials = Field(default_factory=InstapaperCredentials)
    http_timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    dedup_window_seconds: float = Field(default=DEDUP_WINDOW_SECONDS, gt=0)
    token_lifetime_seconds: float = Field(default=TOKEN_LIFETIME_SECONDS, gt=0)
    article_cache_ttl_seconds: float = Field(default=ARTICLE_CACHE_TTL_SECONDS, ge=0)

    @classmethod
    def from_env(cls) -> "FeedlizerConfig":
        return cls(
            feedly=FeedlySettings.from_env(),
            instapaper=InstapaperCredentials.from_env(),
            http_timeout=_read_timeout(),
        )


def _read_timeout() -> float:
    raw = os.getenv(ENV_HTTP_TIMEOUT)
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError:
        timeout = 0.0
    if not timeout > 0:
        raise ConfigurationError(
            f"{ENV_HTTP_TIMEOUT} must be a positive number of seconds, got {raw!r}",
            provider="feedlizer"
        )
    return timeout
