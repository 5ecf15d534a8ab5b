"""
Top performer selection
"""

from typing import Iterable, Optional

from .metrics import calculate_engagement
from .models import Post, TopPost


def select_top_performer(posts: Iterable[Post]) -> Optional[TopPost]:
    """Return the post with the highest engagement, or None for no posts.

    Ties go to the first post in input order, so pass posts most recent first
    (see metrics.sort_by_recency) to prefer the newest among equals.
    """
    best = None
    best_engagement = -1

    for post in posts:
        engagement = calculate_engagement(post)
        if engagement > best_engagement:
            best, best_engagement = post, engagement

    if best is None:
        return None

    return TopPost(
        id=best.id,
        caption=best.caption,
        engagement=best_engagement,
        platform=best.platform,
        posted_at=best.posted_at,
    )
