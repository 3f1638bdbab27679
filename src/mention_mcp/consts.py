"""High-value constants for the Mention MCP package."""

# Package metadata
PACKAGE_VERSION = "1.0.0"
SERVER_NAME = "mention-mcp-server"
USER_AGENT = f"{SERVER_NAME}/{PACKAGE_VERSION}"

# External API contract consts
DEFAULT_BASE_URL = "https://web.mention.com/api"
ACCOUNT_ME_PATH = "/accounts/me"
APP_DATA_PATH = "/app/data"

# Business logic consts
ACCOUNT_CACHE_TTL_MINUTES = 5
COUNTRY_STATS_DEFAULT_TOP = 10  # value sent for country_stats=true
COUNTRY_STATS_DISABLED = 0  # value sent for country_stats=false
