"""
Display formatting for numbers, percentages, dates and trends
"""

from datetime import date, datetime, timezone
from typing import Optional, Union

from .models import TrendDirection, TrendResult, parse_timestamp

FALLBACK = '—'

DateLike = Union[str, date, datetime, None]


def format_number(n: Optional[float], decimals: int = 1, fallback: str = FALLBACK) -> str:
    """Format large numbers: 1500000 → 1.5M, 1200 → 1.2K"""
    if n is None:
        return fallback
    if n >= 1_000_000:
        return f"{n / 1_000_000:.{decimals}f}M"
    if n >= 1_000:
        return f"{n / 1_000:.{decimals}f}K"
    return str(n)


def format_number_locale(n: Optional[float], fallback: str = FALLBACK, decimals: int = 0) -> str:
    """Full number with thousands separators: 1234567 → 1,234,567"""
    if n is None:
        return fallback
    return f"{n:,.{decimals}f}"


def format_percentage(rate: Optional[float], decimals: int = 1, fallback: str = FALLBACK) -> str:
    if rate is None:
        return fallback
    return f"{rate:.{decimals}f}%"


def _to_datetime(value: DateLike) -> Optional[datetime]:
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return parse_timestamp(value)
    except ValueError:
        return None


def format_date(value: DateLike, include_time: bool = False, fallback: str = FALLBACK) -> str:
    """'Jan 15, 2024' (or 'Jan 15, 2024, 3:05 PM' with include_time)."""
    dt = _to_datetime(value)
    if dt is None:
        return fallback
    text = f"{dt:%b} {dt.day}, {dt.year}"
    if include_time:
        hour = dt.hour % 12 or 12
        text += f", {hour}:{dt.minute:02d} {'AM' if dt.hour < 12 else 'PM'}"
    return text


def format_chart_date(value: DateLike) -> str:
    """Short axis label: 'Jan 15'"""
    dt = _to_datetime(value)
    if dt is None:
        return str(value)
    return f"{dt:%b} {dt.day}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_relative_time(value: DateLike, now: Optional[datetime] = None, fallback: str = FALLBACK) -> str:
    """'just now', '5 minutes ago', 'in 2 days'; older than a week uses format_date."""
    dt = _to_datetime(value)
    if dt is None:
        return fallback
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    diff = int((now - dt).total_seconds())
    past = diff >= 0
    seconds = abs(diff)

    if seconds < 60:
        return 'just now' if past else 'in a moment'

    for limit, size, unit in ((3600, 60, 'minute'), (86400, 3600, 'hour'), (604800, 86400, 'day')):
        if seconds < limit:
            text = _plural(seconds // size, unit)
            return f"{text} ago" if past else f"in {text}"

    return format_date(dt)


def format_platform(platform: Optional[str]) -> str:
    if not platform:
        return FALLBACK
    return platform[0].upper() + platform[1:]


def format_trend(trend: TrendResult) -> str:
    """'12.5% increase', '3.0% decrease' or '0.0% no change'"""
    label = {
        TrendDirection.UP: 'increase',
        TrendDirection.DOWN: 'decrease',
        TrendDirection.NEUTRAL: 'no change',
    }[trend.direction]
    return f"{format_percentage(trend.percentage)} {label}"
