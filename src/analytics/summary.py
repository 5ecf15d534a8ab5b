"""
Analytics summary - totals, average rate, top performer and trend
"""

from datetime import datetime, timezone
from typing import Callable, Iterable, Sequence

from .metrics import total_engagement
from .models import AnalyticsSummary, Post
from .performance import select_top_performer
from .trend import DEFAULT_WINDOW_DAYS, analyze_trend, trend_windows, window_totals

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def average_engagement_rate(posts: Iterable[Post]) -> float:
    """Mean engagement rate over the posts that report one (0.0 if none do)."""
    rates = [p.engagement_rate for p in posts if p.engagement_rate is not None]
    if not rates:
        return 0.0
    return sum(rates) / len(rates)


def build_summary(
    posts: Sequence[Post],
    clock: Clock = utc_now,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> AnalyticsSummary:
    """Build the dashboard summary for one user's posts.

    ``posts`` must be ordered most recent first; the top performer tie-break
    depends on it. ``clock`` is read once and anchors the trend windows.
    """
    if not posts:
        return AnalyticsSummary.empty()

    current, previous = window_totals(posts, trend_windows(clock(), window_days))

    return AnalyticsSummary(
        total_engagement=total_engagement(posts),
        average_engagement_rate=average_engagement_rate(posts),
        top_performing_post=select_top_performer(posts),
        trend=analyze_trend(current, previous),
    )


class AnalyticsSummaryBuilder:
    """build_summary bound to a clock and a window length."""

    def __init__(self, clock: Clock = utc_now, window_days: int = DEFAULT_WINDOW_DAYS):
        self.clock = clock
        self.window_days = window_days

    def build(self, posts: Sequence[Post]) -> AnalyticsSummary:
        return build_summary(posts, clock=self.clock, window_days=self.window_days)
