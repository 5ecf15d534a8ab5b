"""
Unit tests for engagement scoring and post helpers

Run: pytest tests/unit/test_metrics.py -v
"""

import pytest
from datetime import timedelta

from analytics.metrics import (
    calculate_engagement,
    filter_by_date_range,
    filter_by_platform,
    sort_by_metric,
    sort_by_recency,
    total_engagement,
)


class TestCalculateEngagement:

    def test_sums_interactions(self, make_post):
        assert calculate_engagement(make_post(likes=10, comments=5, shares=2)) == 17

    @pytest.mark.parametrize("likes,comments,shares,expected", [
        (None, None, None, 0),
        (7, None, None, 7),
        (None, 3, 4, 7),
        (0, 0, 0, 0),
    ])
    def test_absent_counters_count_as_zero(self, make_post, likes, comments, shares, expected):
        post = make_post(likes=likes, comments=comments, shares=shares)
        assert calculate_engagement(post) == expected

    def test_total_engagement(self, make_post):
        posts = [make_post(likes=1), make_post(comments=2), make_post(shares=None)]
        assert total_engagement(posts) == 3
        assert total_engagement([]) == 0


class TestFilters:

    def test_filter_by_platform(self, make_post):
        posts = [make_post(platform='instagram'), make_post(platform='tiktok'), make_post(platform='Instagram')]

        assert len(filter_by_platform(posts, 'instagram')) == 2
        assert len(filter_by_platform(posts, 'TikTok')) == 1
        assert len(filter_by_platform(posts, 'all')) == 3
        assert len(filter_by_platform(posts, None)) == 3

    def test_filter_by_date_range_is_half_open(self, make_post, now):
        start, end = now - timedelta(days=10), now - timedelta(days=5)
        on_start = make_post(days_ago=10)
        inside = make_post(days_ago=7)
        on_end = make_post(days_ago=5)
        outside = make_post(days_ago=11)

        result = filter_by_date_range([on_start, inside, on_end, outside], start, end)
        assert result == [on_start, inside]

        result = filter_by_date_range([on_start, inside, on_end, outside], start, end, inclusive_end=True)
        assert result == [on_start, inside, on_end]


class TestSorting:

    def test_sort_by_recency(self, make_post):
        old, new, mid = make_post(days_ago=9), make_post(days_ago=1), make_post(days_ago=4)
        assert sort_by_recency([old, new, mid]) == [new, mid, old]

    def test_sort_by_engagement(self, make_post):
        low, high = make_post(likes=1), make_post(likes=50)
        assert sort_by_metric([low, high], 'engagement') == [high, low]

    def test_sort_by_engagement_rate_puts_absent_last(self, make_post):
        none_rate = make_post(engagement_rate=None)
        zero_rate = make_post(engagement_rate=0.0)
        high_rate = make_post(engagement_rate=9.5)

        assert sort_by_metric([none_rate, zero_rate, high_rate], 'engagement_rate') == [
            high_rate, zero_rate, none_rate,
        ]

    def test_unknown_key_falls_back_to_recency(self, make_post):
        old, new = make_post(days_ago=3), make_post(days_ago=1)
        assert sort_by_metric([old, new], 'nonsense') == [new, old]
