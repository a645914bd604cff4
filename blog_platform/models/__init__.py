"""
Models for blog-platform.

All models are importable from blog_platform.models:

    from blog_platform.models import Blog, Category, Comment, Like, Follow, Profile
"""
from .posts import Category, Blog
from .engagement import Comment, Like
from .users import Profile, Follow

__all__ = [
    # Posts
    "Category",
    "Blog",
    # Engagement
    "Comment",
    "Like",
    # Users
    "Profile",
    "Follow",
]
