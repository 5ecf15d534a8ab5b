"""
Analytics and metrics calculation module
"""

from datetime import datetime
from typing import Iterable, List, Optional

from .models import Post


def calculate_engagement(post: Post) -> int:
    """Total interactions for a post: likes + comments + shares (absent = 0)."""
    return (post.likes or 0) + (post.comments or 0) + (post.shares or 0)


def total_engagement(posts: Iterable[Post]) -> int:
    return sum(calculate_engagement(p) for p in posts)


def filter_by_platform(posts: Iterable[Post], platform: Optional[str]) -> List[Post]:
    """Keep posts from one platform; ``None`` or 'all' keeps everything."""
    if not platform or platform.lower() == 'all':
        return list(posts)
    wanted = platform.lower()
    return [p for p in posts if p.platform.lower() == wanted]


def filter_by_date_range(
    posts: Iterable[Post],
    start: datetime,
    end: datetime,
    inclusive_end: bool = False,
) -> List[Post]:
    """Filter posts whose ``posted_at`` lies in [start, end) (or [start, end])."""
    if inclusive_end:
        return [p for p in posts if start <= p.posted_at <= end]
    return [p for p in posts if start <= p.posted_at < end]


def sort_by_recency(posts: Iterable[Post]) -> List[Post]:
    """Most recently posted first.

    This is the order select_top_performer expects: among posts with equal
    engagement the first one wins, so it must be the most recent.
    """
    return sorted(posts, key=lambda p: p.posted_at, reverse=True)


def sort_by_metric(posts: Iterable[Post], sort_by: str) -> List[Post]:
    """Sort posts by the specified metric (descending)."""
    key_map = {
        'engagement': calculate_engagement,
        'engagement_rate': lambda p: (p.engagement_rate is not None, p.engagement_rate or 0.0),
        'likes': lambda p: p.likes or 0,
        'comments': lambda p: p.comments or 0,
        'shares': lambda p: p.shares or 0,
        'posted_at': lambda p: p.posted_at,
    }
    key_fn = key_map.get(sort_by, key_map['posted_at'])
    return sorted(posts, key=key_fn, reverse=True)
