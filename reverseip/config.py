"""Endpoints, limits, and HTTP settings."""

APP_NAME = "reverseip"

# Reverse IP/DNS API
DEFAULT_BASE_URL = "https://reverse-ip.whoisxmlapi.com/api/v1"

# Environment variables read by the CLI
API_KEY_ENV = "REVERSEIP_API_KEY"
BASE_URL_ENV = "REVERSEIP_BASE_URL"

# HTTP
USER_AGENT = "reverseip-python/0.1.0"
REQUEST_TIMEOUT = 30  # seconds, per socket operation
MAX_RESPONSE_SIZE = 64 * 1024 * 1024  # bytes
READ_CHUNK_SIZE = 8192

# The service returns at most this many records per page
PAGE_LIMIT = 300
