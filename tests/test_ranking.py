"""
Tests for feed ranking.
"""
from datetime import timedelta
from types import SimpleNamespace

import pytest
from django.db import NotSupportedError
from django.utils import timezone

from blog_platform.models import Blog
from blog_platform.ranking import (
    SORT_LATEST,
    SORT_OLDEST,
    SORT_POPULAR,
    SORT_SMART,
    SORT_TRENDING,
    HoursSince,
    apply_sort,
)

NOW = timezone.now()


@pytest.fixture
def make_blog(db, user, category):
    def _make(title, hours_old=0, **counters):
        return Blog.objects.create(
            title=title,
            content="body",
            author=user,
            category=category,
            created_at=NOW - timedelta(hours=hours_old),
            **counters,
        )

    return _make


def titles(qs):
    return [b.title for b in qs]


class TestChronologicalSorts:
    def test_latest_and_oldest(self, make_blog):
        make_blog("Older blog", hours_old=10)
        make_blog("Newer blog", hours_old=1)

        assert titles(apply_sort(Blog.objects.all(), SORT_LATEST)) == ["Newer blog", "Older blog"]
        assert titles(apply_sort(Blog.objects.all(), SORT_OLDEST)) == ["Older blog", "Newer blog"]

    def test_unknown_sort_falls_back_to_latest(self, make_blog):
        make_blog("Older blog", hours_old=10)
        make_blog("Newer blog", hours_old=1)
        assert titles(apply_sort(Blog.objects.all(), "bogus")) == ["Newer blog", "Older blog"]

    def test_popular_orders_by_likes(self, make_blog):
        make_blog("Few likes", like_count=1)
        make_blog("Many likes", hours_old=5, like_count=9)
        assert titles(apply_sort(Blog.objects.all(), SORT_POPULAR)) == ["Many likes", "Few likes"]


class TestTrending:
    def test_engagement_wins_at_equal_age(self, make_blog):
        make_blog("Quiet blog", hours_old=2, like_count=1)
        make_blog("Busy blog", hours_old=2, like_count=5, comment_count=3)

        ranked = apply_sort(Blog.objects.all(), SORT_TRENDING, now=NOW)
        assert titles(ranked) == ["Busy blog", "Quiet blog"]

    def test_old_engagement_decays(self, make_blog):
        # Two weeks at a 48h half-life is a factor of 2**-7
        make_blog("Old hit", hours_old=24 * 14, like_count=50)
        make_blog("Fresh post", hours_old=1, like_count=5)

        ranked = apply_sort(Blog.objects.all(), SORT_TRENDING, now=NOW)
        assert titles(ranked) == ["Fresh post", "Old hit"]

    def test_score_matches_formula(self, make_blog):
        make_blog("Scored blog", hours_old=48, like_count=2, comment_count=1, read_count=4, share_count=2)

        blog = apply_sort(Blog.objects.all(), SORT_TRENDING, now=NOW).get()
        # (2*2.0 + 1*3.0 + 4*0.5 + 2*1.5) halved after one half-life
        assert blog.score == pytest.approx(6.0, rel=1e-3)

    def test_ties_broken_by_newest(self, make_blog):
        make_blog("Older zero", hours_old=5)
        make_blog("Newer zero", hours_old=1)

        ranked = apply_sort(Blog.objects.all(), SORT_TRENDING, now=NOW)
        assert titles(ranked) == ["Newer zero", "Older zero"]


class TestSmartSort:
    @pytest.fixture(autouse=True)
    def no_shuffle(self, settings):
        settings.BLOG_PLATFORM = {"SMART_RANDOM_WEIGHT": 0.0}

    def test_recency_breaks_engagement_tie(self, make_blog):
        make_blog("Stale", hours_old=200, like_count=3)
        make_blog("Recent", hours_old=1, like_count=3)

        ranked = apply_sort(Blog.objects.all(), SORT_SMART, now=NOW)
        assert titles(ranked) == ["Recent", "Stale"]

    def test_engagement_counts(self, make_blog):
        make_blog("Ignored", hours_old=3)
        make_blog("Discussed", hours_old=3, comment_count=10)

        ranked = apply_sort(Blog.objects.all(), SORT_SMART, now=NOW)
        assert titles(ranked) == ["Discussed", "Ignored"]

    def test_score_is_bounded(self, make_blog):
        make_blog("Viral", hours_old=0, like_count=10_000, comment_count=10_000)

        blog = apply_sort(Blog.objects.all(), SORT_SMART, now=NOW).get()
        # engagement and recency terms are each capped by their weights
        assert 0.0 < blog.score <= 0.5 + 0.35 + 1e-9


def test_smart_random_term_keeps_all_rows(make_blog):
    for i in range(5):
        make_blog(f"Blog number {i}", hours_old=i)

    ranked = list(apply_sort(Blog.objects.all(), SORT_SMART, now=NOW))
    assert len(ranked) == 5
    assert all(b.score is not None for b in ranked)


def test_hours_since_rejects_unsupported_backend():
    connection = SimpleNamespace(vendor="oracle")
    with pytest.raises(NotSupportedError, match="oracle"):
        HoursSince("created_at", NOW).as_sql(None, connection)
