"""
Provider endpoints and tunables.

Central location for the URLs and time windows shared by the providers,
the caches and the server layer.
"""

# Feed provider
FEEDLY_API_BASE = "https://cloud.feedly.com/v3"
FEEDLY_CONFIG_FILE = "feedly-config.json"
DEFAULT_STREAM_COUNT = 200
GLOBAL_ALL_CATEGORY = "global.all"
GLOBAL_SAVED_TAG = "global.saved"

# Bookmarking provider
INSTAPAPER_API_BASE = "https://www.instapaper.com/api/1"
INSTAPAPER_ACCESS_TOKEN_PATH = "/oauth/access_token"
INSTAPAPER_BOOKMARKS_ADD_PATH = "/bookmarks/add"
INSTAPAPER_BOOKMARKS_LIST_PATH = "/bookmarks/list"

# OAuth 1.0a
OAUTH_SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"
OAUTH_NONCE_BYTES = 16
XAUTH_MODE = "client_auth"
TOKEN_LIFETIME_SECONDS = 60 * 60  # 1 hour

# Caching
DEDUP_WINDOW_SECONDS = 5.0
ARTICLE_CACHE_TTL_SECONDS = 2 * 60

# Transport
DEFAULT_TIMEOUT_SECONDS = 10.0
USER_AGENT = "FeedlyTinder/1.0"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Environment variables
ENV_FEEDLY_ACCESS_TOKEN = "FEEDLY_ACCESS_TOKEN"
ENV_INSTAPAPER_CONSUMER_KEY = "INSTAPAPER_CONSUMER_KEY"
ENV_INSTAPAPER_CONSUMER_SECRET = "INSTAPAPER_CONSUMER_SECRET"
ENV_INSTAPAPER_USERNAME = "INSTAPAPER_USERNAME"
ENV_INSTAPAPER_PASSWORD = "INSTAPAPER_PASSWORD"
ENV_HTTP_TIMEOUT = "FEEDLIZER_HTTP_TIMEOUT"
