"""
Unit tests for the analytics summary builder

Run: pytest tests/unit/test_summary.py -v
"""

import pytest
from datetime import datetime, timedelta, timezone

from analytics.models import AnalyticsSummary, Post, TrendDirection
from analytics.summary import AnalyticsSummaryBuilder, average_engagement_rate, build_summary


class TestAverageEngagementRate:

    def test_absent_rates_are_excluded(self, make_post):
        posts = [make_post(engagement_rate=None), make_post(engagement_rate=10.0), make_post(engagement_rate=20.0)]
        assert average_engagement_rate(posts) == pytest.approx(15.0)

    def test_no_rates(self, make_post):
        assert average_engagement_rate([make_post(), make_post()]) == 0.0

    def test_zero_rate_is_counted(self, make_post):
        posts = [make_post(engagement_rate=0.0), make_post(engagement_rate=6.0)]
        assert average_engagement_rate(posts) == pytest.approx(3.0)


class TestBuildSummary:

    def test_empty_posts(self, clock):
        summary = build_summary([], clock=clock)

        assert summary == AnalyticsSummary.empty()
        assert summary.to_dict() == {
            'totalEngagement': 0,
            'averageEngagementRate': 0.0,
            'topPerformingPost': None,
            'trend': {'percentage': 0.0, 'direction': 'neutral'},
        }

    def test_full_summary(self, make_post, clock):
        posts = [
            make_post(likes=100, comments=20, shares=30, engagement_rate=5.0, days_ago=2, id="a"),
            make_post(likes=40, comments=10, engagement_rate=None, days_ago=10, id="b"),
            make_post(likes=80, comments=10, shares=10, engagement_rate=3.0, days_ago=40, id="c"),
        ]

        summary = build_summary(posts, clock=clock)

        assert summary.total_engagement == 300
        assert summary.average_engagement_rate == pytest.approx(4.0)
        assert summary.top_performing_post.id == "a"
        assert summary.top_performing_post.engagement == 150
        # current window 200 vs previous window 100
        assert summary.trend.direction == TrendDirection.UP
        assert summary.trend.percentage == pytest.approx(100.0)

    def test_declining_trend(self, make_post, clock):
        posts = [make_post(likes=25, days_ago=5), make_post(likes=100, days_ago=35)]

        trend = build_summary(posts, clock=clock).trend

        assert trend.direction == TrendDirection.DOWN
        assert trend.percentage == pytest.approx(75.0)

    def test_only_old_posts_is_neutral(self, make_post, clock):
        summary = build_summary([make_post(likes=10, days_ago=90)], clock=clock)

        assert summary.total_engagement == 10
        assert summary.trend.direction == TrendDirection.NEUTRAL
        assert summary.trend.percentage == 0.0

    def test_growth_from_nothing_is_100_percent(self, make_post, clock):
        summary = build_summary([make_post(likes=1, days_ago=1)], clock=clock)

        assert summary.trend.to_dict() == {'percentage': 100.0, 'direction': 'up'}

    def test_clock_controls_windows(self, make_post, now):
        posts = [make_post(likes=10, days_ago=1)]
        later = now + timedelta(days=45)

        summary = build_summary(posts, clock=lambda: later)

        assert summary.trend.direction == TrendDirection.DOWN
        assert summary.trend.percentage == pytest.approx(100.0)

    def test_clock_read_once(self, make_post, now):
        calls = []

        def counting_clock():
            calls.append(1)
            return now

        build_summary([make_post(likes=1), make_post(likes=2)], clock=counting_clock)
        assert len(calls) == 1

    def test_tie_prefers_first_listed(self, make_post, clock):
        posts = [make_post(likes=10, days_ago=1, id="recent"), make_post(likes=10, days_ago=5, id="older")]
        assert build_summary(posts, clock=clock).top_performing_post.id == "recent"

    def test_builder_uses_window_days(self, make_post, clock):
        builder = AnalyticsSummaryBuilder(clock=clock, window_days=7)
        posts = [make_post(likes=30, days_ago=2), make_post(likes=10, days_ago=10)]

        trend = builder.build(posts).trend

        assert trend.direction == TrendDirection.UP
        assert trend.percentage == pytest.approx(200.0)


class TestNaiveTimestamps:
    """Naive datetimes are read as UTC wherever they enter the summary."""

    def test_naive_post_with_aware_clock(self):
        posts = [
            Post(id="p1", platform="instagram", posted_at=datetime(2024, 3, 10, 12), likes=15),
            Post(id="p2", platform="tiktok", posted_at=datetime(2024, 2, 1, 12, tzinfo=timezone.utc), likes=10),
        ]

        trend = build_summary(posts, clock=lambda: datetime(2024, 3, 15, tzinfo=timezone.utc)).trend

        assert trend.direction == TrendDirection.UP
        assert trend.percentage == pytest.approx(50.0)

    def test_aware_post_with_naive_clock(self, make_post):
        posts = [make_post(likes=5, days_ago=3)]

        trend = build_summary(posts, clock=lambda: datetime(2024, 3, 15, 12)).trend

        assert trend.direction == TrendDirection.UP
        assert trend.percentage == pytest.approx(100.0)
