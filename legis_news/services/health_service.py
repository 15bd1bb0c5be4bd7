"""Health checks for the API process and its backing services."""

import sys
import time
import logging
import resource
from datetime import datetime, timezone
from typing import Any, Dict

from legis_news.db.pool import check_pool_health
from legis_news.redis_client import check_redis_health

logger = logging.getLogger(__name__)

_started_at = time.monotonic()


def get_process_health() -> Dict[str, Any]:
    """Liveness payload: status, uptime in seconds, current UTC timestamp, peak RSS."""
    return {
        "status": "ok",
        "uptime": round(time.monotonic() - _started_at, 3),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "memory": {"maxRssBytes": _max_rss_bytes()},
    }


def _max_rss_bytes() -> int:
    # ru_maxrss is kilobytes on Linux, bytes on macOS
    usage = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    return usage if sys.platform == "darwin" else usage * 1024


async def check_database() -> Dict[str, Any]:
    """
    Check PostgreSQL reachability.

    Raises:
        DependencyError: If the pool is missing or SELECT NOW() fails
    """
    result = await check_pool_health()
    logger.debug(f"Database health: {result}")
    return result


async def check_redis() -> Dict[str, Any]:
    """
    Check Redis reachability.

    Raises:
        DependencyError: If the pool is missing or the round trip fails
    """
    result = await check_redis_health()
    logger.debug(f"Redis health: {result}")
    return result
