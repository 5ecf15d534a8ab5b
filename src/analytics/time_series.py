"""
Daily time series - gap-filling sparse daily metrics over a day range
"""

import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Tuple, Union

from .models import DailyMetric, TimeSeriesPoint

logger = logging.getLogger(__name__)

DayLike = Union[date, datetime]


def _as_day(value: DayLike) -> date:
    # Truncating both bounds to the calendar day is the same as clamping the
    # start to 00:00 and the end to 23:59:59.999 before counting days.
    return value.date() if isinstance(value, datetime) else value


def day_count(start: DayLike, end: DayLike) -> int:
    """Number of calendar days in [start, end], 0 when start is after end."""
    return max((_as_day(end) - _as_day(start)).days + 1, 0)


def resolve_date_range(days: int, today: DayLike) -> Tuple[date, date]:
    """The last ``days`` calendar days ending with (and including) ``today``."""
    end = _as_day(today)
    return end - timedelta(days=days - 1), end


def normalize_daily_metrics(
    records: Iterable[DailyMetric],
    start: DayLike,
    end: DayLike,
) -> List[TimeSeriesPoint]:
    """Produce one point per day from start to end inclusive, ascending.

    Days without a record are filled with zero engagement and reach. If the
    same date appears more than once the last record seen is used.
    """
    first, last = _as_day(start), _as_day(end)

    by_day: Dict[date, DailyMetric] = {}
    for record in records:
        by_day[record.date] = record

    points = []
    for offset in range(day_count(first, last)):
        day = first + timedelta(days=offset)
        record = by_day.get(day)
        if record is None:
            points.append(TimeSeriesPoint(date=day, engagement=0, reach=0))
        else:
            points.append(TimeSeriesPoint(date=day, engagement=record.engagement, reach=record.reach))

    logger.debug(
        "Normalized %d daily records into %d points (%s..%s)",
        len(by_day), len(points), first, last,
    )
    return points
