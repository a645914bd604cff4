"""
Configuration settings for blog-platform.

Override these in your Django settings.py:

    BLOG_PLATFORM = {
        'TOKEN_SECRET': 'change-me',
        'TOKEN_LIFETIME_MINUTES': 60 * 24,
        'TRENDING_HALF_LIFE_HOURS': 24,
        ...
    }
"""
from django.conf import settings

DEFAULTS = {
    # Bearer tokens
    "TOKEN_SECRET": None,  # falls back to SECRET_KEY
    "TOKEN_ALGORITHM": "HS256",
    "TOKEN_LIFETIME_MINUTES": 60 * 24 * 7,
    "TOKEN_COOKIE_NAME": "token",
    "TOKEN_COOKIE_SECURE": False,
    "TOKEN_COOKIE_SAMESITE": "Lax",

    # Blogs
    "TITLE_MIN_LENGTH": 5,
    "TITLE_MAX_LENGTH": 200,
    "SLUG_MAX_LENGTH": 200,
    "FEATURE_IMAGE_UPLOAD_PATH": "blog/features/%Y/%m/",
    "ALLOWED_IMAGE_TYPES": ["image/jpeg", "image/png", "image/gif", "image/webp"],

    # Comments
    "COMMENT_MAX_LENGTH": 5000,

    # Pagination
    "BLOGS_PER_PAGE": 10,
    "MAX_BLOGS_PER_PAGE": 50,

    # Ranking weights
    "LIKE_WEIGHT": 2.0,
    "COMMENT_WEIGHT": 3.0,
    "READ_WEIGHT": 0.5,
    "SHARE_WEIGHT": 1.5,
    "TRENDING_HALF_LIFE_HOURS": 48.0,
    "SMART_ENGAGEMENT_WEIGHT": 0.5,
    "SMART_RECENCY_WEIGHT": 0.35,
    "SMART_RANDOM_WEIGHT": 0.15,
    "SMART_ENGAGEMENT_SATURATION": 10.0,
    "SMART_RECENCY_SCALE_HOURS": 72.0,
}


class BlogPlatformSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from blog_platform.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid blog_platform setting: {name}")

        user_settings = getattr(settings, "BLOG_PLATFORM", {})
        return user_settings.get(name, DEFAULTS[name])

    @property
    def TOKEN_SECRET(self):
        """Return the signing secret, defaulting to Django's SECRET_KEY."""
        user_settings = getattr(settings, "BLOG_PLATFORM", {})
        return user_settings.get("TOKEN_SECRET") or settings.SECRET_KEY


blog_settings = BlogPlatformSettings()
