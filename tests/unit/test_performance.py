"""
Unit tests for top performer selection

Run: pytest tests/unit/test_performance.py -v
"""

from analytics.metrics import sort_by_recency
from analytics.performance import select_top_performer


class TestSelectTopPerformer:

    def test_empty_input(self):
        assert select_top_performer([]) is None

    def test_picks_highest_engagement(self, make_post):
        posts = [make_post(likes=5), make_post(likes=50, caption="winner"), make_post(likes=20)]

        top = select_top_performer(posts)

        assert top.id == posts[1].id
        assert top.engagement == 50
        assert top.caption == "winner"

    def test_first_post_wins_ties(self, make_post):
        first, second = make_post(likes=10, id="first"), make_post(likes=10, id="second")

        assert select_top_performer([first, second]).id == "first"
        assert select_top_performer([second, first]).id == "second"

    def test_most_recent_wins_ties_when_sorted_by_recency(self, make_post):
        older = make_post(likes=8, comments=2, days_ago=20, id="older")
        newer = make_post(likes=10, days_ago=2, id="newer")

        assert select_top_performer(sort_by_recency([older, newer])).id == "newer"

    def test_zero_engagement_post_still_selected(self, make_post):
        post = make_post(likes=None, comments=None, shares=None)

        top = select_top_performer([post])

        assert top is not None
        assert top.engagement == 0

    def test_projection_fields(self, make_post):
        post = make_post(likes=3, platform='tiktok', caption=None)

        assert select_top_performer([post]).to_dict() == {
            'id': post.id,
            'caption': None,
            'engagement': 3,
            'platform': 'tiktok',
            'postedAt': post.posted_at.isoformat(),
        }
