"""
Feed ranking for blog-platform.

Scores are query annotations so the database evaluates them per row;
nothing is computed or cached in Python.

    trending = engagement * exp(-ln 2 * hours / half_life)
    smart    = We * engagement / (engagement + saturation)
             + Wr * exp(-hours / recency_scale)
             + Wrand * random()

where engagement is the weighted sum of the blog's counters and hours is
the age of the blog at query time.
"""
import math

from django.db import NotSupportedError
from django.db.models import F, FloatField, Func, Value
from django.db.models.functions import Cast, Exp, Random
from django.utils import timezone

from .conf import blog_settings

SORT_LATEST = "latest"
SORT_OLDEST = "oldest"
SORT_POPULAR = "popular"
SORT_TRENDING = "trending"
SORT_SMART = "smart"

SORT_CHOICES = (SORT_LATEST, SORT_OLDEST, SORT_POPULAR, SORT_TRENDING, SORT_SMART)


class HoursSince(Func):
    """
    Hours elapsed between a datetime column and a fixed reference time.

    The reference comes first in the argument list so the backend
    templates can join the two operands with a subtraction.
    """

    output_field = FloatField()

    def __init__(self, expression, reference, **extra):
        super().__init__(Value(reference), expression, **extra)

    def as_sql(self, compiler, connection, **extra_context):
        raise NotSupportedError(
            f"Trending and smart ranking are not supported on the {connection.vendor} backend"
        )

    def as_sqlite(self, compiler, connection, **extra_context):
        return super().as_sql(
            compiler,
            connection,
            template="((julianday(%(expressions)s)) * 24.0)",
            arg_joiner=") - julianday(",
            **extra_context,
        )

    def as_postgresql(self, compiler, connection, **extra_context):
        return super().as_sql(
            compiler,
            connection,
            template="(EXTRACT(EPOCH FROM (%(expressions)s)) / 3600.0)",
            arg_joiner=" - ",
            **extra_context,
        )


def _float(field):
    return Cast(field, FloatField())


def _weight(value):
    return Value(float(value), output_field=FloatField())


def engagement_expression():
    """Weighted sum of a blog's engagement counters."""
    return (
        _float("like_count") * _weight(blog_settings.LIKE_WEIGHT)
        + _float("comment_count") * _weight(blog_settings.COMMENT_WEIGHT)
        + _float("read_count") * _weight(blog_settings.READ_WEIGHT)
        + _float("share_count") * _weight(blog_settings.SHARE_WEIGHT)
    )


def trending_expression(now=None):
    """Engagement with exponential time decay."""
    now = now or timezone.now()
    decay_rate = math.log(2) / float(blog_settings.TRENDING_HALF_LIFE_HOURS)
    decay = Exp(HoursSince("created_at", now) * _weight(-decay_rate))
    return engagement_expression() * decay


def smart_expression(now=None):
    """Blend of saturated engagement, recency and a random shuffle."""
    now = now or timezone.now()
    saturation = _weight(blog_settings.SMART_ENGAGEMENT_SATURATION)
    recency_rate = -1.0 / float(blog_settings.SMART_RECENCY_SCALE_HOURS)

    return (
        _weight(blog_settings.SMART_ENGAGEMENT_WEIGHT)
        * engagement_expression()
        / (engagement_expression() + saturation)
        + _weight(blog_settings.SMART_RECENCY_WEIGHT)
        * Exp(HoursSince("created_at", now) * _weight(recency_rate))
        + _weight(blog_settings.SMART_RANDOM_WEIGHT) * Random()
    )


def apply_sort(queryset, sort, now=None):
    """
    Order a Blog queryset by one of SORT_CHOICES.

    Unknown values fall back to newest first.
    """
    if sort == SORT_OLDEST:
        return queryset.order_by("created_at", "pk")
    if sort == SORT_POPULAR:
        return queryset.order_by("-like_count", "-created_at")
    if sort == SORT_TRENDING:
        return queryset.annotate(score=trending_expression(now)).order_by(
            F("score").desc(), "-created_at"
        )
    if sort == SORT_SMART:
        return queryset.annotate(score=smart_expression(now)).order_by(
            F("score").desc(), "-created_at"
        )
    return queryset.order_by("-created_at", "-pk")
