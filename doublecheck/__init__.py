"""
DoubleCheck: a throttled MediaWiki Action API client for edit review.

Provides:
- WikiQueryClient: paginated, rate-limited Action API queries
- Throttle: the minimum-interval limiter shared by a client's requests
- PageInfo, RecentChangeRecord, RecentChangesPage, RecentChangesQuery: response types
- InvalidArgument, RemoteQueryError, Cancelled: error types
- setup_logging: Logging configuration for console and file output
"""

from doublecheck.errors import Cancelled, DoubleCheckError, InvalidArgument, RemoteQueryError
from doublecheck.logging_config import get_log_dir, setup_logging
from doublecheck.models import PageInfo, RecentChangeRecord, RecentChangesPage, RecentChangesQuery
from doublecheck.throttle import Throttle
from doublecheck.wiki_api import MAX_MWAPI_LIMIT, WikiQueryClient

__all__ = [
    "WikiQueryClient",
    "Throttle",
    "MAX_MWAPI_LIMIT",
    "PageInfo",
    "RecentChangeRecord",
    "RecentChangesPage",
    "RecentChangesQuery",
    "DoubleCheckError",
    "InvalidArgument",
    "RemoteQueryError",
    "Cancelled",
    "setup_logging",
    "get_log_dir",
]
