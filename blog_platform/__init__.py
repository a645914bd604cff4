"""
blog-platform - a JSON blog API for Django.

Features:
- Bearer token authentication (cookie or Authorization header)
- Public and private blogs with categories
- Likes, comments, bookmarks and author follows
- Engagement counters kept on the blog row
- Trending and smart feed ranking computed by the database
"""

__version__ = "0.1.0"
