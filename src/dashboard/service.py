"""
Analytics service - the request boundary between storage and the analytics engine
"""

import logging
import sqlite3
from typing import Dict, List, Optional, Union

from analytics.metrics import filter_by_platform, sort_by_metric, sort_by_recency
from analytics.models import DailyMetric, Post
from analytics.summary import AnalyticsSummaryBuilder, Clock, utc_now
from analytics.time_series import normalize_daily_metrics, resolve_date_range
from analytics.trend import DEFAULT_WINDOW_DAYS
from database.db_manager import DatabaseManager

from .errors import (
    AuthenticationError,
    InvalidRangeError,
    InvalidUserIdError,
    PostNotFoundError,
    StorageError,
)

logger = logging.getLogger(__name__)

MIN_DAYS = 1
MAX_DAYS = 365
DEFAULT_DAYS = 30
MIN_USER_ID_LENGTH = 10
DAYS_ERROR = f"Days parameter must be between {MIN_DAYS} and {MAX_DAYS}"


def validate_user_id(user_id: Optional[str]) -> str:
    if user_id is None:
        raise AuthenticationError("No authenticated user found. Please log in and try again.")
    if not isinstance(user_id, str) or len(user_id) < MIN_USER_ID_LENGTH:
        raise InvalidUserIdError("User ID format is invalid.")
    return user_id


def parse_days(raw: Union[str, int, None], default: int = DEFAULT_DAYS) -> int:
    """Validate the ``days`` range parameter (an integer from 1 to 365)."""
    if raw is None or raw == '':
        return default
    if isinstance(raw, bool):
        raise InvalidRangeError(DAYS_ERROR)
    try:
        days = int(raw)
    except (TypeError, ValueError):
        raise InvalidRangeError(DAYS_ERROR)
    if not MIN_DAYS <= days <= MAX_DAYS:
        raise InvalidRangeError(DAYS_ERROR)
    return days


class AnalyticsService:
    """Fetches one user's records and hands a consistent snapshot to the engine."""

    def __init__(
        self,
        db: DatabaseManager,
        clock: Clock = utc_now,
        window_days: int = DEFAULT_WINDOW_DAYS,
        default_days: int = DEFAULT_DAYS,
    ):
        self.db = db
        self.clock = clock
        self.default_days = default_days
        self.summary_builder = AnalyticsSummaryBuilder(clock=clock, window_days=window_days)

    def _fetch_posts(self, user_id: str) -> List[Post]:
        try:
            rows = self.db.get_posts(user_id)
        except sqlite3.Error as e:
            logger.error("Failed to fetch posts for %s: %s", user_id, e)
            raise StorageError(f"Failed to fetch posts: {e}") from e
        return [Post.from_row(row) for row in rows]

    def get_summary(self, user_id: Optional[str]) -> Dict:
        user_id = validate_user_id(user_id)
        # Most recent first: the top performer tie-break depends on it
        posts = sort_by_recency(self._fetch_posts(user_id))
        return self.summary_builder.build(posts).to_dict()

    def get_daily_metrics(self, user_id: Optional[str], days: Union[str, int, None] = None) -> List[Dict]:
        user_id = validate_user_id(user_id)
        days = parse_days(days, default=self.default_days)
        start, end = resolve_date_range(days, self.clock())

        try:
            rows = self.db.get_daily_metrics(user_id, start, end)
        except sqlite3.Error as e:
            logger.error("Failed to fetch daily metrics for %s: %s", user_id, e)
            raise StorageError(f"Failed to fetch daily metrics: {e}") from e

        records = [DailyMetric.from_row(row) for row in rows]
        return [point.to_dict() for point in normalize_daily_metrics(records, start, end)]

    def get_posts(
        self,
        user_id: Optional[str],
        platform: Optional[str] = None,
        sort_by: Optional[str] = None,
    ) -> List[Post]:
        user_id = validate_user_id(user_id)
        posts = filter_by_platform(self._fetch_posts(user_id), platform)
        if sort_by:
            posts = sort_by_metric(posts, sort_by)
        return posts

    def get_post(self, user_id: Optional[str], post_id: str) -> Post:
        user_id = validate_user_id(user_id)
        if not post_id:
            raise PostNotFoundError("Post ID is required")
        try:
            row = self.db.get_post(user_id, post_id)
        except sqlite3.Error as e:
            logger.error("Failed to fetch post %s for %s: %s", post_id, user_id, e)
            raise StorageError(f"Failed to fetch post: {e}") from e
        if row is None:
            raise PostNotFoundError(f"Post {post_id} was not found.")
        return Post.from_row(row)
