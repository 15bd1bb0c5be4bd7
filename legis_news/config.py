"""Configuration for the legislative news service."""

import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# ============================================================================
# Server Configuration
# ============================================================================

def get_port(env_var: str, default: int) -> int:
    """Get port from environment or return default."""
    try:
        return int(os.getenv(env_var, default))
    except ValueError:
        logger.warning(f"Invalid {env_var}, using default {default}")
        return default

# API server port
PORT = get_port("PORT", 8080)

# Log level applied by legis_news.main
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def get_cors_origins():
    """Allowed CORS origins from CORS_ORIGINS (comma separated, default "*")."""
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]

# ============================================================================
# Cache Configuration
# ============================================================================

# Every cache entry in the system uses this TTL; there is no per-key override
CACHE_TTL_SECONDS = 300

# ============================================================================
# Pagination
# ============================================================================

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# ============================================================================
# Article Fields
# ============================================================================

# Columns an article update may touch; anything else is ignored
ARTICLE_MUTABLE_FIELDS = ("title", "content", "description", "state", "topic")

TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 255
CONTENT_MIN_LENGTH = 10
