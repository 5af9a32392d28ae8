"""Shared pytest fixtures for Feedlizer tests."""

from unittest.mock import MagicMock

import httpx
import pytest

from feedlizer.config.constants import FEEDLY_API_BASE, INSTAPAPER_API_BASE
from feedlizer.config.settings import FeedlizerConfig, FeedlySettings, InstapaperCredentials
from feedlizer.http.client import ApiClient
from feedlizer.providers.base import FeedProvider
from feedlizer.providers.instapaper.adapter import InstapaperClient
from tests.helpers.mock_transport import FakeClock, RecordingTransport, token_response

TOKEN_PATH = "/api/1/oauth/access_token"
ADD_PATH = "/api/1/bookmarks/add"
LIST_PATH = "/api/1/bookmarks/list"


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: end-to-end tests across several components")


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    env_vars = {
        "INSTAPAPER_CONSUMER_KEY": "test-consumer-key",
        "INSTAPAPER_CONSUMER_SECRET": "test-consumer-secret",
        "INSTAPAPER_USERNAME": "reader@example.com",
        "INSTAPAPER_PASSWORD": "hunter2",
        "FEEDLY_ACCESS_TOKEN": "test-feedly-token",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def credentials():
    return InstapaperCredentials(
        consumer_key="test-consumer-key",
        consumer_secret="test-consumer-secret",
        username="reader@example.com",
        password="hunter2",
    )


@pytest.fixture
def config(credentials):
    return FeedlizerConfig(
        feedly=FeedlySettings(access_token="test-feedly-token"),
        instapaper=credentials,
    )


@pytest.fixture
def instapaper_routes():
    """Provider double that accepts every well-formed call."""
    return RecordingTransport({
        ("POST", TOKEN_PATH): token_response(),
        ("POST", ADD_PATH): httpx.Response(200, json=[{"type": "bookmark", "bookmark_id": 1}]),
    })


@pytest.fixture
def instapaper_client(credentials, instapaper_routes, clock):
    api = ApiClient("instapaper", INSTAPAPER_API_BASE, transport=instapaper_routes.transport())
    return InstapaperClient(credentials, api_client=api, clock=clock)


@pytest.fixture
def feedly_routes():
    return RecordingTransport()


@pytest.fixture
def feedly_api(feedly_routes):
    return ApiClient(
        "feedly",
        FEEDLY_API_BASE,
        headers={"Authorization": "Bearer test-feedly-token"},
        transport=feedly_routes.transport(),
    )


@pytest.fixture
def mock_feed_provider():
    """Feed provider double; async methods become AsyncMocks."""
    return MagicMock(spec=FeedProvider)


@pytest.fixture
def mock_instapaper():
    return MagicMock(spec=InstapaperClient)


@pytest.fixture
def raw_feedly_entry():
    """A stream entry as returned by /v3/streams/contents."""
    return {
        "id": "entry/1",
        "title": "Python 3.14 released",
        "summary": {"content": "<p>Highlights of the release</p>"},
        "alternate": [{"href": "https://example.com/python-314", "type": "text/html"}],
        "published": 1_700_000_000_000,
        "author": "Guido",
        "origin": {"title": "Python Insider", "htmlUrl": "https://blog.python.org"},
        "visual": {"url": "https://example.com/cover.png"},
        "tags": [{"id": "user/u1/tag/global.saved", "label": "saved"}],
        "engagement": 42,
    }
