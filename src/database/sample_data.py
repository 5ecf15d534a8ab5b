"""
Sample data - seeds a user's posts and daily metrics for local demos
"""

import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from .db_manager import DatabaseManager

logger = logging.getLogger(__name__)

PLATFORMS = ['instagram', 'tiktok']
MEDIA_TYPES = {'instagram': ['image', 'carousel', 'reel'], 'tiktok': ['video']}
CAPTIONS = [
    "Morning routine that actually sticks",
    "3 pantry recipes under 10 minutes",
    "Behind the scenes of today's shoot",
    "Trying the viral workout so you don't have to",
    "Answering your questions from last week",
    "Before / after: studio makeover",
    None,
]


def seed_sample_data(
    db: DatabaseManager,
    user_id: str,
    days: int = 60,
    now: Optional[datetime] = None,
    seed: int = 42,
) -> int:
    """Insert roughly one post per day and a daily metric row for most days.

    Some posts leave the engagement rate unset and some days have no metric
    row, so averages and gap-filling have something to do. Returns the number
    of posts written.
    """
    rng = random.Random(seed)
    now = now or datetime.now(timezone.utc)
    post_count = 0

    for offset in range(days):
        day = now - timedelta(days=offset)

        if rng.random() < 0.85:
            platform = rng.choice(PLATFORMS)
            impressions = rng.randint(800, 60_000)
            likes = int(impressions * rng.uniform(0.01, 0.08))
            comments = int(likes * rng.uniform(0.02, 0.15))
            shares = int(likes * rng.uniform(0.0, 0.1)) if platform == 'tiktok' else None
            interactions = likes + comments + (shares or 0)
            rate = round(interactions / impressions * 100, 2) if rng.random() < 0.8 else None

            db.insert_post(user_id, {
                'id': f"{platform}-{offset:04d}",
                'platform': platform,
                'caption': rng.choice(CAPTIONS),
                'thumbnail_url': f"https://picsum.photos/seed/{offset}/200",
                'media_type': rng.choice(MEDIA_TYPES[platform]),
                'likes': likes,
                'comments': comments,
                'shares': shares,
                'impressions': impressions,
                'reach': int(impressions * rng.uniform(0.6, 0.9)),
                'engagement_rate': rate,
                'posted_at': day - timedelta(minutes=rng.randint(0, 600)),
            })
            post_count += 1

        if rng.random() < 0.9:
            db.insert_daily_metric(user_id, {
                'date': day.date(),
                'engagement': rng.randint(50, 4_000),
                'reach': rng.randint(1_000, 80_000),
            })

    logger.info("Seeded %d sample posts over %d days for user %s", post_count, days, user_id)
    return post_count
