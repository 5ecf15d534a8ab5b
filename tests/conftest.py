"""
Pytest configuration and shared fixtures
"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Optional

from analytics.models import Post
from database.db_manager import DatabaseManager


FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)
USER_ID = "user-0001-abcdef"


# ============================================================
# Clock Fixtures
# ============================================================

@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock():
    """A clock frozen at FIXED_NOW"""
    return lambda: FIXED_NOW


# ============================================================
# Post Fixtures
# ============================================================

@pytest.fixture
def make_post():
    """Factory for posts; ``days_ago`` is measured back from FIXED_NOW"""
    counter = {'n': 0}

    def _make(
        likes: Optional[int] = 0,
        comments: Optional[int] = 0,
        shares: Optional[int] = 0,
        engagement_rate: Optional[float] = None,
        days_ago: float = 1,
        platform: str = 'instagram',
        caption: Optional[str] = None,
        id: Optional[str] = None,
    ) -> Post:
        counter['n'] += 1
        return Post(
            id=id or f"post-{counter['n']}",
            platform=platform,
            posted_at=FIXED_NOW - timedelta(days=days_ago),
            likes=likes,
            comments=comments,
            shares=shares,
            engagement_rate=engagement_rate,
            caption=caption,
        )

    return _make


# ============================================================
# Database Fixtures
# ============================================================

@pytest.fixture
def db(tmp_path) -> DatabaseManager:
    """DatabaseManager backed by a throwaway SQLite file"""
    return DatabaseManager(str(tmp_path / "data" / "test.db"))


@pytest.fixture
def user_id() -> str:
    return USER_ID
