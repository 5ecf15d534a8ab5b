"""
Analytics data model - posts, daily metrics and the derived results
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse an ISO timestamp into an aware datetime (naive values are UTC)."""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_day(value: Union[str, date, datetime]) -> date:
    """Parse a calendar day from 'YYYY-MM-DD', a date or a datetime."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


@dataclass(frozen=True)
class Post:
    """A published post with its engagement counters.

    Counters and the engagement rate are ``None`` when the data source did not
    report them; they are never replaced by sentinel zeros.
    """
    id: str
    platform: str
    posted_at: datetime
    likes: Optional[int] = None
    comments: Optional[int] = None
    shares: Optional[int] = None
    engagement_rate: Optional[float] = None
    caption: Optional[str] = None
    thumbnail_url: Optional[str] = None
    media_type: Optional[str] = None
    impressions: Optional[int] = None
    reach: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, 'posted_at', parse_timestamp(self.posted_at))

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Post':
        rate = row.get('engagement_rate')
        return cls(
            id=str(row['id']),
            platform=row.get('platform') or 'unknown',
            posted_at=row['posted_at'],
            likes=_optional_int(row.get('likes')),
            comments=_optional_int(row.get('comments')),
            shares=_optional_int(row.get('shares')),
            engagement_rate=None if rate is None else float(rate),
            caption=row.get('caption'),
            thumbnail_url=row.get('thumbnail_url'),
            media_type=row.get('media_type'),
            impressions=_optional_int(row.get('impressions')),
            reach=_optional_int(row.get('reach')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'platform': self.platform,
            'posted_at': self.posted_at.isoformat(),
            'likes': self.likes,
            'comments': self.comments,
            'shares': self.shares,
            'engagement_rate': self.engagement_rate,
            'caption': self.caption,
            'thumbnail_url': self.thumbnail_url,
            'media_type': self.media_type,
            'impressions': self.impressions,
            'reach': self.reach,
        }


@dataclass(frozen=True)
class DailyMetric:
    """Aggregate engagement and reach for one calendar day."""
    date: date
    engagement: int = 0
    reach: int = 0

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'DailyMetric':
        return cls(
            date=parse_day(row['date']),
            engagement=int(row.get('engagement') or 0),
            reach=int(row.get('reach') or 0),
        )


@dataclass(frozen=True)
class TimeSeriesPoint:
    date: date
    engagement: int
    reach: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date.isoformat(),
            'engagement': self.engagement,
            'reach': self.reach,
        }


class TrendDirection(str, Enum):
    UP = 'up'
    DOWN = 'down'
    NEUTRAL = 'neutral'


@dataclass(frozen=True)
class TrendResult:
    """Magnitude of a period-over-period change; the sign lives in ``direction``."""
    percentage: float
    direction: TrendDirection

    @classmethod
    def neutral(cls) -> 'TrendResult':
        return cls(percentage=0.0, direction=TrendDirection.NEUTRAL)

    def to_dict(self) -> Dict[str, Any]:
        return {'percentage': self.percentage, 'direction': self.direction.value}


@dataclass(frozen=True)
class TopPost:
    id: str
    caption: Optional[str]
    engagement: int
    platform: str
    posted_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'caption': self.caption,
            'engagement': self.engagement,
            'platform': self.platform,
            'postedAt': self.posted_at.isoformat(),
        }


@dataclass(frozen=True)
class AnalyticsSummary:
    total_engagement: int
    average_engagement_rate: float
    top_performing_post: Optional[TopPost]
    trend: TrendResult

    @classmethod
    def empty(cls) -> 'AnalyticsSummary':
        return cls(
            total_engagement=0,
            average_engagement_rate=0.0,
            top_performing_post=None,
            trend=TrendResult.neutral(),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape the dashboard consumes (camelCase keys)."""
        top = self.top_performing_post
        return {
            'totalEngagement': self.total_engagement,
            'averageEngagementRate': self.average_engagement_rate,
            'topPerformingPost': top.to_dict() if top is not None else None,
            'trend': self.trend.to_dict(),
        }
