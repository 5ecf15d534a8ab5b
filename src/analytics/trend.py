"""
Period-over-period engagement trend
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Tuple

from .metrics import filter_by_date_range, total_engagement
from .models import Post, TrendDirection, TrendResult, parse_timestamp

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30


@dataclass(frozen=True)
class TrendWindows:
    """Two adjacent, equal-length windows ending at ``now``.

    previous = [previous_start, current_start), current = [current_start, now]
    """
    previous_start: datetime
    current_start: datetime
    now: datetime


def trend_windows(now: datetime, window_days: int = DEFAULT_WINDOW_DAYS) -> TrendWindows:
    now = parse_timestamp(now)
    current_start = now - timedelta(days=window_days)
    return TrendWindows(
        previous_start=current_start - timedelta(days=window_days),
        current_start=current_start,
        now=now,
    )


def window_totals(posts: Iterable[Post], windows: TrendWindows) -> Tuple[int, int]:
    """Engagement summed per window as (current, previous)."""
    posts = list(posts)
    current = total_engagement(
        filter_by_date_range(posts, windows.current_start, windows.now, inclusive_end=True)
    )
    previous = total_engagement(
        filter_by_date_range(posts, windows.previous_start, windows.current_start)
    )
    logger.debug(
        "Trend windows ending %s: current=%d previous=%d over %d posts",
        windows.now.isoformat(), current, previous, len(posts),
    )
    return current, previous


def analyze_trend(current: int, previous: int) -> TrendResult:
    """Percent change from ``previous`` to ``current``.

    Growth from a previous total of zero is reported as 100% up.
    """
    if previous > 0:
        change = (current - previous) / previous * 100
        if change > 0:
            direction = TrendDirection.UP
        elif change < 0:
            direction = TrendDirection.DOWN
        else:
            direction = TrendDirection.NEUTRAL
        return TrendResult(percentage=abs(change), direction=direction)

    if current > 0:
        return TrendResult(percentage=100.0, direction=TrendDirection.UP)

    return TrendResult.neutral()
